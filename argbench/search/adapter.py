"""
Expose a benchmark run as an Optuna objective.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from optuna.trial import Trial

from ..config.schema import RunConfig
from ..core.runner import Runner
from .builder import RunConfigBuilder
from .strategy import SearchStrategy

logger = logging.getLogger(__name__)


def best_cost_of(problem_factory: Callable[[], Any]) -> Callable[[RunConfig], float]:
    """Build a ``run_fn`` that runs a fresh problem and returns its best cost."""

    def run_fn(cfg: RunConfig) -> float:
        runner = Runner(problem_factory(), cfg)
        return runner.run().best_cost

    return run_fn


class RunAdapter:
    """
    Turn a (config builder, strategy, run function) triple into
    ``objective(trial) -> float``.

    Parameters
    ----------
    config_builder:
        Produces a configuration for each set of overrides.
    strategy:
        Samples the overrides for each trial.
    run_fn:
        Runs one configuration and returns a score. With the default
        ``minimize`` study direction lower is better, which matches the
        best cost of a run.
    """

    def __init__(
        self,
        config_builder: RunConfigBuilder,
        strategy: SearchStrategy,
        run_fn: Callable[[RunConfig], float],
    ) -> None:
        self._config_builder = config_builder
        self._strategy = strategy
        self._run_fn = run_fn

    def objective(self, trial: Trial) -> float:
        params = self._strategy.suggest(trial)
        cfg = self._config_builder.with_overrides(params)
        score = float(self._run_fn(cfg))
        logger.debug("trial %d: %s -> %.6g", trial.number, params, score)
        return score
