from __future__ import annotations

from dataclasses import fields as dataclass_fields
from typing import Any, Sequence

from .config import ObjectiveConfig, OptimizerConfig, RunConfig
from .core.callbacks import Callback
from .core.runner import Runner, RunResult
from .objectives import RosenbrockAnneal, RosenbrockND, maximize


class Bench:
    """
    Builder for configuring and running benchmark optimizations.

    >>> runner, result = (
    ...     Bench()
    ...     .objective(a=1.0, b=100.0)
    ...     .optimizer("newton")
    ...     .run(max_iters=50, init_param=[-1.2, 1.0])
    ... )
    """

    def __init__(self) -> None:
        self._objective = ObjectiveConfig()
        self._bounded = False
        self._maximize = False

        self._optimizer_name: str | None = None
        self._optimizer_kwargs: dict[str, Any] = {}

        self._callbacks: list[Callback] = []

    # ------------------------------------------------------------------
    # Objective configuration
    # ------------------------------------------------------------------
    def objective(self, *, a: float = 1.0, b: float = 100.0, dim: int = 2) -> "Bench":
        self._objective.a = a
        self._objective.b = b
        self._objective.dim = dim
        return self

    def bounds(self, lower: Sequence[float], upper: Sequence[float]) -> "Bench":
        self._objective.lower = list(lower)
        self._objective.upper = list(upper)
        self._bounded = True
        return self

    def seed(self, seed: int | None) -> "Bench":
        self._objective.seed = seed
        return self

    def maximize(self, flag: bool = True) -> "Bench":
        self._maximize = flag
        return self

    # ------------------------------------------------------------------
    # Optimizer
    # ------------------------------------------------------------------
    def optimizer(self, name: str, /, **kwargs: Any) -> "Bench":
        self._optimizer_name = name
        self._optimizer_kwargs.update(kwargs)
        return self

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------
    def callbacks(self, *callbacks: Callback) -> "Bench":
        self._callbacks.extend(callbacks)
        return self

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _needs_bounds(self) -> bool:
        return self._bounded or (self._optimizer_name or "sa").lower() in ("sa", "pso")

    def _build_optimizer_config(self) -> OptimizerConfig:
        name = self._optimizer_name or "sa"
        valid = {f.name for f in dataclass_fields(OptimizerConfig)}
        unknown = set(self._optimizer_kwargs) - valid
        if unknown:
            raise TypeError(f"Unknown optimizer options: {sorted(unknown)}")
        return OptimizerConfig(name=name, **self._optimizer_kwargs)

    def build_problem(self) -> Any:
        cfg = self._objective
        if self._needs_bounds():
            problem = RosenbrockAnneal(
                a=cfg.a, b=cfg.b, lower=cfg.lower, upper=cfg.upper, seed=cfg.seed, dim=cfg.dim
            )
        else:
            problem = RosenbrockND(a=cfg.a, b=cfg.b, dim=cfg.dim)
        return maximize(problem) if self._maximize else problem

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def run(
        self,
        *,
        max_iters: int = 100,
        init_param: Sequence[float] | None = None,
        log_every: int = 10,
        target_cost: float | None = None,
        seed: int | None = None,
    ) -> tuple[Runner, RunResult]:
        problem = self.build_problem()

        if init_param is None:
            init_param = [0.0] * self._objective.dim

        run_cfg = RunConfig(
            seed=seed,
            max_iters=max_iters,
            log_every=log_every,
            init_param=list(init_param),
            target_cost=target_cost,
            optimizer=self._optimizer_name or "sa",
            optimizer_config=self._build_optimizer_config(),
            callbacks=list(self._callbacks),
        )

        runner = Runner(problem, run_cfg)
        result = runner.run()
        return runner, result
