from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from ..config.schema import RunConfig
from ..errors import ArgbenchError, ConfigurationError
from ..objectives.capabilities import missing_capabilities
from ..optim import (
    describe,
    get_optimizer,
    init_optimizer_state,
    is_scipy,
    required_capabilities,
    run_optimizer_step,
)
from ..utils.seed import set_seed
from .boundary import ArrayBoundary
from .callbacks import CallbackList, HistoryCallback, LoggingCallback
from .state import IterState, TerminationReason

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Summary of a finished run."""

    name: str
    family: str
    method: str
    best_param: Optional[List[float]]
    best_cost: float
    iterations: int
    nfev: int
    elapsed: float
    termination_reason: TerminationReason
    message: str = ""
    history: Dict[str, Any] = field(default_factory=dict)


class Runner:
    """Drive one optimizer over one problem.

    The runner owns the loop: it evaluates the starting point, advances the
    optimizer up to ``config.max_iters`` times, tracks the best point seen,
    and decides why the run ended. The problem is only ever called through
    its capabilities (``cost``, ``gradient``, ``hessian``, ``anneal``).
    """

    def __init__(self, problem: Any, config: RunConfig, name: str | None = None) -> None:
        self.problem = problem
        self.config = config

        config.validate()
        get_optimizer(config.optimizer)  # KeyError for unknown names
        missing = missing_capabilities(problem, *required_capabilities(config.optimizer))
        if missing:
            raise ConfigurationError(
                f"optimizer '{config.optimizer}' needs {', '.join(missing)} "
                f"which {type(problem).__name__} does not provide"
            )
        kind = config.optimizer.lower()
        if kind == "pso" and not hasattr(problem, "bounds"):
            raise ConfigurationError("optimizer 'pso' needs a bounded problem")
        if kind == "sa" and hasattr(problem, "bounds"):
            lower, upper = problem.bounds
            x0 = np.asarray(config.init_param, dtype=np.float64)
            if x0.shape != np.shape(lower) or np.any(x0 < lower) or np.any(x0 > upper):
                raise ConfigurationError(
                    f"initial parameter {list(config.init_param)} lies outside the bounds"
                )

        # every objective call goes through float64 arrays
        self._target = ArrayBoundary(problem)

        self.family, self.method = describe(config.optimizer)
        self.name = name or self.method

        # RNG setup
        if config.seed is not None:
            set_seed(config.seed)
            self.rng = np.random.default_rng(config.seed)
        else:
            self.rng = np.random.default_rng()

        # Callbacks
        user_cbs = list(config.callbacks)
        self.history_cb = HistoryCallback()
        user_cbs.append(self.history_cb)
        user_cbs.append(LoggingCallback(every=config.log_every))
        self.callbacks = CallbackList(user_cbs)

        self.state = IterState(param=np.asarray(config.init_param, dtype=np.float64))
        self.stop = False
        self._start = 0.0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(self) -> RunResult:
        cfg = self.config
        state = self.state
        self._start = time.perf_counter()

        # the swarm replaces the starting point
        if cfg.optimizer.lower() != "pso":
            state.update(state.param, self._cost(state.param))
        init_optimizer_state(cfg.optimizer, self._target, state, self.rng, cfg.optimizer_config)
        self.callbacks.on_run_begin(self)

        if not self._check_stop() and cfg.max_iters > 0:
            if is_scipy(cfg.optimizer):
                self._run_scipy()
            else:
                self._run_steps()

        if not state.terminated:
            state.terminate(TerminationReason.MAX_ITERS_REACHED)
        state.elapsed = time.perf_counter() - self._start

        self.callbacks.on_run_end(self)
        return self.result()

    def result(self) -> RunResult:
        state = self.state
        return RunResult(
            name=self.name,
            family=self.family,
            method=self.method,
            best_param=None if state.best_param is None else state.best_param.tolist(),
            best_cost=state.best_cost,
            iterations=state.iter,
            nfev=state.nfev,
            elapsed=state.elapsed,
            termination_reason=state.termination_reason,
            message=state.message,
            history=self.history_cb.history,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _cost(self, param: np.ndarray) -> float:
        self.state.nfev += 1
        return self._target.cost(param)

    def _check_stop(self) -> bool:
        """Apply run-level stopping rules; return True if the run must end."""
        state = self.state
        target = self.config.target_cost
        if state.terminated:
            return True
        if target is not None and state.best_cost <= target:
            state.terminate(TerminationReason.TARGET_COST_REACHED)
            return True
        if self.stop:
            state.terminate(TerminationReason.STOPPED_BY_CALLBACK)
            return True
        return False

    def _end_iteration(self) -> bool:
        self.state.iter += 1
        self.state.elapsed = time.perf_counter() - self._start
        self.callbacks.on_iter_end(self)
        return self._check_stop()

    def _run_steps(self) -> None:
        cfg = self.config
        while self.state.iter < cfg.max_iters:
            run_optimizer_step(
                cfg.optimizer, self._target, self.state, self.rng, cfg.optimizer_config
            )
            if self.state.terminated:
                break
            if self._end_iteration():
                break

    def _run_scipy(self) -> None:
        cfg = self.config
        state = self.state
        method = describe(cfg.optimizer)[1]

        def on_iter(x: np.ndarray, cost: float) -> None:
            state.update(x, cost)
            if self._end_iteration() or state.iter >= cfg.max_iters:
                raise StopIteration

        try:
            res = get_optimizer(cfg.optimizer)(
                self._target,
                state.param,
                method,
                cfg.max_iters,
                on_iter,
                fun=self._cost,
                tol=cfg.optimizer_config.tol,
            )
        except ArgbenchError:
            raise
        except (ValueError, np.linalg.LinAlgError) as exc:
            # e.g. dogleg refuses an indefinite Hessian
            logger.warning("%s aborted: %s", self.name, exc)
            state.terminate(TerminationReason.SOLVER_EXIT, str(exc))
            return
        # the final iterate is not always reported through the callback
        state.update(res.x, float(res.fun))

        if state.terminated or state.iter >= cfg.max_iters:
            return
        if res.success:
            state.terminate(TerminationReason.SOLVER_CONVERGED, str(res.message))
        else:
            logger.debug("%s stopped: %s", self.name, res.message)
            state.terminate(TerminationReason.SOLVER_EXIT, str(res.message))
