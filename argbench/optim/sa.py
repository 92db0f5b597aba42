"""Simulated annealing step built on the objective's ``anneal`` operator."""

from __future__ import annotations

import math
from typing import Any, Tuple

import numpy as np


def fast_schedule(init_temp: float, k: int) -> float:
    """Temperature at iteration ``k`` (0-based): ``init_temp / (k + 1)``."""
    return init_temp / (k + 1)


def sa(
    problem: Any,
    param: np.ndarray,
    cost: float,
    random: np.random.Generator,
    t: float,
) -> Tuple[np.ndarray, float, bool]:
    """Stateless simulated annealing step.

    - Ask the problem for a neighbor of ``param`` at temperature ``t``.
    - Accept if it is not worse.
    - Otherwise accept with probability ``exp(-delta / t)``.

    Returns:
        (param, cost, accepted)
    """
    # ---- 1. Neighbor from the objective's perturbation operator ----
    candidate = np.asarray(problem.anneal(param, t), dtype=np.float64)

    # ---- 2. Evaluate ----
    new_cost = float(problem.cost(candidate))
    delta = new_cost - cost

    # ---- 3. SA acceptance rule ----
    if delta > 0:
        prob = math.exp(-delta / max(t, 1e-9))
        if random.random() >= prob:
            return param, cost, False

    return candidate, new_cost, True
