"""
Search strategies map an Optuna trial to a dictionary of run overrides.

Keys follow :class:`~argbench.search.builder.RunConfigBuilder`:
``"max_iters"`` or ``"optimizer_config.<field>"``.
"""

from __future__ import annotations

from typing import (
    Any,
    Callable,
    Dict,
    Mapping,
    Protocol,
    Sequence,
    Tuple,
    Union,
    runtime_checkable,
)

from optuna.trial import Trial

from ..errors import ConfigurationError

# (low, high) or (low, high, "log") for ranges, a list for categorical choices
Range = Union[Tuple[float, float], Tuple[float, float, str], Sequence[Any]]


@runtime_checkable
class SearchStrategy(Protocol):
    def suggest(self, trial: Trial) -> Dict[str, Any]:
        """Sample the overrides to try in ``trial``."""
        ...


class OptunaStrategy:
    """
    Strategy backed by a plain suggestion function.

    >>> strategy = OptunaStrategy(
    ...     lambda trial: {
    ...         "optimizer_config.init_temp": trial.suggest_float("init_temp", 1.0, 50.0),
    ...     }
    ... )
    """

    def __init__(self, suggest_fn: Callable[[Trial], Dict[str, Any]]) -> None:
        self._suggest_fn = suggest_fn

    def suggest(self, trial: Trial) -> Dict[str, Any]:
        return self._suggest_fn(trial)


class SpaceStrategy:
    """
    Strategy described by a search space instead of code.

    Each key is an override path and each value one of:

    - ``(low, high)``: integers when both ends are ``int``, else floats;
    - ``(low, high, "log")``: floats sampled on a log scale;
    - a list: categorical choices.

    Trial parameters are named after the last path segment, so
    ``"optimizer_config.init_temp"`` shows up as ``init_temp`` in
    ``study.best_params``. Clashing names raise ``ConfigurationError``.

    >>> SpaceStrategy({
    ...     "optimizer": ["steepest_descent", "wolfe"],
    ...     "optimizer_config.armijo_c": (1e-6, 1e-2, "log"),
    ... })
    """

    def __init__(self, space: Mapping[str, Range]) -> None:
        names = [path.rsplit(".", 1)[-1] for path in space]
        if len(set(names)) != len(names):
            raise ConfigurationError(f"search space parameter names clash: {names}")
        for path, entry in space.items():
            if not isinstance(entry, (tuple, list)) or not entry:
                raise ConfigurationError(
                    f"search space entry for '{path}' must be a range or choices"
                )
            if isinstance(entry, tuple) and len(entry) not in (2, 3):
                raise ConfigurationError(f"range for '{path}' must be (low, high[, 'log'])")
        self.space = dict(space)

    def suggest(self, trial: Trial) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        for path, entry in self.space.items():
            name = path.rsplit(".", 1)[-1]
            if isinstance(entry, list):
                params[path] = trial.suggest_categorical(name, entry)
            elif len(entry) == 3:
                low, high, scale = entry
                params[path] = trial.suggest_float(name, low, high, log=scale == "log")
            elif isinstance(entry[0], int) and isinstance(entry[1], int):
                params[path] = trial.suggest_int(name, entry[0], entry[1])
            else:
                params[path] = trial.suggest_float(name, float(entry[0]), float(entry[1]))
        return params
