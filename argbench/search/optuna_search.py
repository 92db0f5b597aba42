"""
Small wrapper around an Optuna study driven by a RunAdapter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Type

import optuna
from optuna.study import Study

from ..errors import ConfigurationError
from .adapter import RunAdapter


@dataclass
class OptunaSearch:
    """
    Pair an Optuna study with the adapter that evaluates its trials.

    The study stays accessible as ``search.study`` for anything this
    wrapper does not cover.
    """

    study: Study
    adapter: RunAdapter

    def run(
        self,
        n_trials: int,
        n_jobs: int = 1,
        timeout: Optional[float] = None,
        gc_after_trial: bool = False,
        catch: Tuple[Type[Exception], ...] = (ConfigurationError,),
    ) -> Study:
        """
        Run ``n_trials`` trials (or until ``timeout`` seconds pass).

        ``n_jobs > 1`` evaluates trials in threads; problems built per
        trial share nothing, and a shared annealing problem serializes its
        perturbations internally.

        Trials whose overrides produce an invalid configuration raise
        ``ConfigurationError``; by default Optuna records them as failed and
        the search moves on.
        """
        self.study.optimize(
            self.adapter.objective,
            n_trials=n_trials,
            n_jobs=n_jobs,
            timeout=timeout,
            gc_after_trial=gc_after_trial,
            catch=catch,
        )
        return self.study

    @property
    def best_params(self) -> dict:
        return dict(self.study.best_params)

    @property
    def best_value(self) -> float:
        return float(self.study.best_value)

    @property
    def best_trial(self) -> Any:
        return self.study.best_trial

    @classmethod
    def in_memory(
        cls,
        adapter: RunAdapter,
        direction: str = "minimize",
        seed: Optional[int] = None,
    ) -> "OptunaSearch":
        """Create a search on a non-persistent study, seeded sampler optional."""
        sampler = optuna.samplers.TPESampler(seed=seed) if seed is not None else None
        study = optuna.create_study(direction=direction, sampler=sampler)
        return cls(study=study, adapter=adapter)

    @classmethod
    def from_sqlite(
        cls,
        adapter: RunAdapter,
        study_name: str = "argbench_optuna",
        storage: str = "sqlite:///optuna_study.db",
        direction: str = "minimize",
        load_if_exists: bool = True,
    ) -> "OptunaSearch":
        """
        Create a search on a study persisted in SQLite.

        Reusing ``study_name`` with ``load_if_exists=True`` resumes an
        earlier search.
        """
        study = optuna.create_study(
            study_name=study_name,
            storage=storage,
            direction=direction,
            load_if_exists=load_if_exists,
        )
        return cls(study=study, adapter=adapter)
