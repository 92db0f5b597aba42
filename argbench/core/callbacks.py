from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class Callback:
    def on_run_begin(self, runner: "Runner") -> None: ...
    def on_iter_end(self, runner: "Runner") -> None: ...
    def on_run_end(self, runner: "Runner") -> None: ...


@dataclass
class HistoryCallback(Callback):
    history: Dict[str, Any] = field(
        default_factory=lambda: {
            "iter": [],
            "cost": [],
            "best_cost": [],
            "param": [],
            "temp": [],
        }
    )

    def on_run_begin(self, runner: "Runner") -> None:
        self._record(runner)

    def on_iter_end(self, runner: "Runner") -> None:
        self._record(runner)

    def _record(self, runner: "Runner") -> None:
        state = runner.state
        h = self.history
        h["iter"].append(state.iter)
        h["cost"].append(state.cost)
        h["best_cost"].append(state.best_cost)
        h["param"].append(state.param.tolist())
        h["temp"].append(state.temp)


@dataclass
class LoggingCallback(Callback):
    """Log progress every ``every`` iterations, and always at start and end."""

    every: int = 10
    level: int = logging.INFO

    def on_run_begin(self, runner: "Runner") -> None:
        logger.log(
            self.level,
            "%s: start cost=%.6g param=%s",
            runner.name,
            runner.state.cost,
            runner.state.param.tolist(),
        )

    def on_iter_end(self, runner: "Runner") -> None:
        state = runner.state
        if state.iter % self.every != 0:
            return
        extra = f" temp={state.temp:.4g}" if state.temp is not None else ""
        logger.log(
            self.level,
            "%s: iter=%d cost=%.6g best_cost=%.6g%s",
            runner.name,
            state.iter,
            state.cost,
            state.best_cost,
            extra,
        )

    def on_run_end(self, runner: "Runner") -> None:
        state = runner.state
        logger.log(
            self.level,
            "%s: finished after %d iterations (%s), best_cost=%.6g",
            runner.name,
            state.iter,
            state.termination_reason,
            state.best_cost,
        )


@dataclass
class EarlyStopping(Callback):
    """Stop once the best cost has not improved for ``patience`` iterations."""

    patience: int = 10
    min_delta: float = 0.0

    best: float | None = None
    wait: int = 0
    stopped_iter: int | None = None

    def on_run_begin(self, runner: "Runner") -> None:
        self.best = None
        self.wait = 0
        self.stopped_iter = None

    def on_iter_end(self, runner: "Runner") -> None:
        current = runner.state.best_cost
        if self.best is None or current < self.best - self.min_delta:
            self.best = current
            self.wait = 0
        else:
            self.wait += 1
            if self.wait >= self.patience:
                self.stopped_iter = runner.state.iter
                runner.stop = True


class CallbackList(Callback):
    def __init__(self, callbacks: List[Callback] | None = None):
        self.callbacks = callbacks or []

    def append(self, cb: Callback) -> None:
        self.callbacks.append(cb)

    def on_run_begin(self, runner: "Runner") -> None:
        for cb in self.callbacks:
            cb.on_run_begin(runner)

    def on_iter_end(self, runner: "Runner") -> None:
        for cb in self.callbacks:
            cb.on_iter_end(runner)

    def on_run_end(self, runner: "Runner") -> None:
        for cb in self.callbacks:
            cb.on_run_end(runner)
