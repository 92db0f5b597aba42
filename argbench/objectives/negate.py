from __future__ import annotations

from functools import lru_cache
from typing import Any

import numpy as np
import torch

from .capabilities import has_capabilities


def negate(value: Any) -> Any:
    """Negate a scalar, list, nested list, ndarray or tensor, keeping its type."""
    if isinstance(value, (np.ndarray, torch.Tensor)):
        return -value
    if isinstance(value, list):
        return [negate(v) for v in value]
    return -value


class Maximize:
    """View of an objective with its sign flipped.

    Drivers always minimize; wrapping an objective turns that into ascent
    on the wrapped surface. Build instances with :func:`maximize`, which
    only exposes the capabilities the wrapped objective has.
    """

    def __init__(self, inner: Any) -> None:
        self.inner = inner

    def __repr__(self) -> str:
        return f"maximize({self.inner!r})"

    @property
    def dim(self) -> int:
        return self.inner.dim

    @property
    def param_type(self) -> str:
        return getattr(self.inner, "param_type", "ndarray")

    def cost(self, param: Any) -> float:
        return -self.inner.cost(param)


class _NegGradient:
    def gradient(self, param: Any) -> Any:
        return negate(self.inner.gradient(param))


class _NegHessian:
    def hessian(self, param: Any) -> Any:
        return negate(self.inner.hessian(param))


class _Anneal:
    @property
    def bounds(self):
        return self.inner.bounds

    def anneal(self, param: Any, temp: float) -> Any:
        return self.inner.anneal(param, temp)


_MIXINS = (("gradient", _NegGradient), ("hessian", _NegHessian), ("anneal", _Anneal))


@lru_cache(maxsize=None)
def _view_class(caps: tuple[str, ...]) -> type:
    if not caps:
        return Maximize
    bases = tuple(mixin for name, mixin in _MIXINS if name in caps)
    name = "Maximize" + "".join(c.capitalize() for c in caps)
    return type(name, (Maximize, *bases), {})


def maximize(inner: Any) -> Maximize:
    """Wrap ``inner`` so that minimizing the result maximizes ``inner``."""
    caps = tuple(name for name, _ in _MIXINS if has_capabilities(inner, name))
    return _view_class(caps)(inner)


__all__ = ["Maximize", "maximize", "negate"]
