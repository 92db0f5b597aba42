"""Move parameters between the driver's float64 arrays and an objective's container.

The runner keeps every iterate as a 1-D ``float64`` ndarray. Objectives
declare the container they expect through a ``param_type`` attribute
(``"ndarray"``, ``"list"`` or ``"tensor"``); calls are routed through
:class:`ArrayBoundary` so each objective only ever sees its own container.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

import numpy as np
import torch

from ..errors import ConfigurationError

ENCODERS: Dict[str, Callable[[np.ndarray], Any]] = {
    "ndarray": lambda x: x,
    "list": lambda x: x.tolist(),
    "tensor": lambda x: torch.from_numpy(np.array(x, dtype=np.float64)),
}


def param_type_of(problem: Any) -> str:
    kind = getattr(problem, "param_type", "ndarray")
    if kind not in ENCODERS:
        raise ConfigurationError(
            f"{type(problem).__name__} declares unsupported param_type {kind!r}; "
            f"expected one of {sorted(ENCODERS)}"
        )
    return kind


def to_array(value: Any) -> np.ndarray:
    """Convert a list, nested list, ndarray or tensor result to float64."""
    if isinstance(value, torch.Tensor):
        value = value.detach().cpu().numpy()
    return np.asarray(value, dtype=np.float64)


class ArrayBoundary:
    """Present ``problem`` to the driver as an ndarray objective.

    Only the capabilities the wrapped problem has are usable; the runner
    checks those on the problem itself before wrapping it.
    """

    def __init__(self, problem: Any) -> None:
        self.problem = problem
        self.param_type = param_type_of(problem)
        self._encode = ENCODERS[self.param_type]

    @property
    def bounds(self):
        return self.problem.bounds

    def cost(self, param: np.ndarray) -> float:
        return float(self.problem.cost(self._encode(param)))

    def gradient(self, param: np.ndarray) -> np.ndarray:
        return to_array(self.problem.gradient(self._encode(param)))

    def hessian(self, param: np.ndarray) -> np.ndarray:
        return to_array(self.problem.hessian(self._encode(param)))

    def anneal(self, param: np.ndarray, temp: float) -> np.ndarray:
        return to_array(self.problem.anneal(self._encode(param), temp))
