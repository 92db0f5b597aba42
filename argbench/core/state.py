from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np


class TerminationReason(enum.Enum):
    NOT_TERMINATED = "Not terminated"
    MAX_ITERS_REACHED = "Maximum number of iterations reached"
    TARGET_COST_REACHED = "Target cost value reached"
    SOLVER_CONVERGED = "Solver converged"
    SOLVER_EXIT = "Solver exit"
    STOPPED_BY_CALLBACK = "Stopped by callback"

    def __str__(self) -> str:
        return self.value


@dataclass
class IterState:
    """Mutable bookkeeping for one optimizer run."""

    param: np.ndarray
    cost: float = float("inf")

    best_param: Optional[np.ndarray] = None
    best_cost: float = float("inf")

    iter: int = 0
    nfev: int = 0
    grad_norm: Optional[float] = None
    temp: Optional[float] = None
    elapsed: float = 0.0

    termination_reason: TerminationReason = TerminationReason.NOT_TERMINATED
    message: str = ""

    # per-optimizer scratch (e.g. the particle swarm)
    extras: Dict[str, Any] = field(default_factory=dict)

    def update(self, param: np.ndarray, cost: float) -> bool:
        """Move to ``param``; return True if it is a new best."""
        self.param = np.asarray(param, dtype=np.float64)
        self.cost = float(cost)
        if self.cost < self.best_cost:
            self.best_cost = self.cost
            self.best_param = self.param.copy()
            return True
        return False

    def terminate(self, reason: TerminationReason, message: str = "") -> None:
        self.termination_reason = reason
        self.message = message

    @property
    def terminated(self) -> bool:
        return self.termination_reason is not TerminationReason.NOT_TERMINATED
