"""
Build per-trial run configurations from dotted-path overrides.
"""

from __future__ import annotations

import copy
from dataclasses import fields, replace
from typing import Any, Dict

from ..config.schema import OptimizerConfig, RunConfig
from ..errors import ConfigurationError

RUN_FIELDS = frozenset(f.name for f in fields(RunConfig))
OPTIMIZER_FIELDS = frozenset(f.name for f in fields(OptimizerConfig))


def _split_overrides(params: Dict[str, Any]) -> tuple[dict, dict]:
    run_kw: Dict[str, Any] = {}
    opt_kw: Dict[str, Any] = {}
    for key, value in params.items():
        head, _, leaf = key.partition(".")
        if not leaf:
            if head not in RUN_FIELDS:
                raise ConfigurationError(
                    f"unknown run setting '{key}'; expected one of {sorted(RUN_FIELDS)}"
                )
            run_kw[head] = value
        elif head == "optimizer_config" and "." not in leaf:
            if leaf not in OPTIMIZER_FIELDS:
                raise ConfigurationError(
                    f"unknown optimizer setting '{leaf}'; "
                    f"expected one of {sorted(OPTIMIZER_FIELDS)}"
                )
            opt_kw[leaf] = value
        else:
            raise ConfigurationError(
                f"cannot override '{key}': only RunConfig fields and "
                f"'optimizer_config.<field>' paths are searchable"
            )
    return run_kw, opt_kw


class RunConfigBuilder:
    """
    Produce validated ``RunConfig`` copies with overrides applied.

    Keys are ``RunConfig`` field names (``"max_iters"``) or
    ``"optimizer_config.<field>"`` (``"optimizer_config.init_temp"``).
    Overriding ``optimizer`` also renames ``optimizer_config.name`` unless
    that is overridden too. Every produced config has passed
    ``validate()``, so an infeasible trial fails before anything runs.

    The base configuration is never modified. Callbacks are copied per
    config so trials running in parallel do not share callback state.

    Examples
    --------
    >>> builder = RunConfigBuilder(RunConfig(optimizer="sa", max_iters=20))
    >>> cfg = builder.with_overrides({"optimizer_config.init_temp": 5.0})
    """

    def __init__(self, base_config: RunConfig) -> None:
        base_config.validate()
        self._base_config = base_config

    @property
    def base_config(self) -> RunConfig:
        return self._base_config

    def with_overrides(self, params: Dict[str, Any]) -> RunConfig:
        """
        Return a new configuration with ``params`` applied.

        Raises
        ------
        ConfigurationError
            If a key names no config field, or the resulting config is invalid.
        """
        run_kw, opt_kw = _split_overrides(params)
        base = self._base_config

        if "optimizer" in run_kw and "name" not in opt_kw:
            opt_kw["name"] = run_kw["optimizer"]
        opt_cfg = run_kw.pop("optimizer_config", base.optimizer_config)
        run_kw.setdefault("init_param", list(base.init_param))
        run_kw.setdefault("callbacks", copy.deepcopy(base.callbacks))

        cfg = replace(base, optimizer_config=replace(opt_cfg, **opt_kw), **run_kw)
        cfg.validate()
        return cfg
