from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.callbacks import Callback
from ..errors import ConfigurationError


# ----------------------------------------------------------
# Objective configuration
# ----------------------------------------------------------
@dataclass
class ObjectiveConfig:
    """Shape parameters and feasible box of the benchmark surface."""

    a: float = 1.0
    b: float = 100.0
    dim: int = 2

    # bounds-aware variant only; None keeps the [-5, 5] box
    lower: Optional[List[float]] = None
    upper: Optional[List[float]] = None
    seed: Optional[int] = None


# ----------------------------------------------------------
# Optimizer hyperparameters
# ----------------------------------------------------------
@dataclass
class OptimizerConfig:
    """Hyperparameters for the driver-side algorithm families."""

    name: str = "sa"

    # Line search (steepest descent)
    step_size: float = 1.0
    rho: float = 0.9
    armijo_c: float = 1e-4
    max_backtracks: int = 1000

    # Wolfe line search (steepest descent)
    wolfe_c2: float = 0.9
    max_step: float = 50.0

    # Landweber iteration
    omega: float = 0.001

    # Shared gradient tolerance
    tol: float = 1e-8

    # Newton
    gamma: float = 1.0

    # SA-specific
    init_temp: float = 15.0

    # PSO-specific
    population_size: int = 40
    inertia: float = 0.5
    cognitive: float = 1.5
    social: float = 1.5

    def validate(self) -> None:
        if not 0.0 < self.armijo_c < 1.0:
            raise ConfigurationError(
                f"armijo_c must lie in (0, 1), got {self.armijo_c!r}"
            )
        if not 0.0 < self.rho < 1.0:
            raise ConfigurationError(f"rho must lie in (0, 1), got {self.rho!r}")
        if not self.armijo_c < self.wolfe_c2 < 1.0:
            raise ConfigurationError(
                f"wolfe_c2 must lie in (armijo_c, 1), got {self.wolfe_c2!r}"
            )
        if self.max_step <= 0:
            raise ConfigurationError("max_step must be positive")
        if self.omega <= 0:
            raise ConfigurationError("omega must be positive")
        if self.step_size <= 0:
            raise ConfigurationError("step_size must be positive")
        if self.max_backtracks < 1:
            raise ConfigurationError("max_backtracks must be >= 1")
        if self.tol < 0:
            raise ConfigurationError("tol must be >= 0")
        if self.gamma <= 0:
            raise ConfigurationError("gamma must be positive")
        if not math.isfinite(self.init_temp) or self.init_temp <= 0:
            raise ConfigurationError(
                f"init_temp must be finite and positive, got {self.init_temp!r}"
            )
        if self.population_size < 1:
            raise ConfigurationError("population_size must be >= 1")


# ----------------------------------------------------------
# RunConfig
# ----------------------------------------------------------
@dataclass
class RunConfig:
    """Top-level configuration of one optimizer run."""

    # Reproducibility
    seed: Optional[int] = None

    # Loop
    max_iters: int = 100
    log_every: int = 10
    init_param: List[float] = field(default_factory=lambda: [10.2, -20.0])
    target_cost: Optional[float] = None

    # Algorithm
    optimizer: str = "sa"
    optimizer_config: OptimizerConfig = field(default_factory=OptimizerConfig)

    # Callbacks
    callbacks: List[Callback] = field(default_factory=list)

    def validate(self) -> None:
        if self.max_iters < 0:
            raise ConfigurationError("max_iters must be >= 0")
        if self.log_every < 1:
            raise ConfigurationError("log_every must be >= 1")
        self.optimizer_config.validate()
