"""Canonical Rosenbrock math on flat numeric buffers.

The Rosenbrock function is defined as

    f(x, y) = (a - x)^2 + b (y - x^2)^2

and generalized to ``n >= 2`` parameters by chaining consecutive pairs:

    f(x) = sum_{i=0}^{n-2} (a - x_i)^2 + b (x_{i+1} - x_i^2)^2

Every objective representation converts its parameter container into a
1-D ``float64`` buffer, calls the functions below, and converts the result
back. The formulas live here only.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from ..errors import ConfigurationError, InvalidInputError, ShapeError

Array = np.ndarray


def check_shape_params(a: float, b: float, dim: int) -> None:
    """Validate construction-time parameters shared by all objectives."""
    for name, value in (("a", a), ("b", b)):
        if not math.isfinite(value) or value <= 0:
            raise ConfigurationError(f"'{name}' must be finite and positive, got {value!r}")
    if int(dim) != dim or dim < 2:
        raise ConfigurationError(f"dim must be an integer >= 2, got {dim!r}")


def as_buffer(param, dim: int) -> Array:
    """Return ``param`` as a flat float64 buffer of length ``dim``.

    Raises
    ------
    InvalidInputError
        If ``param`` is not one-dimensional or its length is not ``dim``.
    """
    try:
        x = np.asarray(param, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"parameter is not numeric: {exc}") from exc
    if x.ndim != 1:
        raise InvalidInputError(f"parameter must be one-dimensional, got shape {x.shape}")
    if x.size != dim:
        raise InvalidInputError(f"expected a parameter of length {dim}, got {x.size}")
    return x


def rosenbrock(x: Array, a: float, b: float) -> float:
    """Cost of the chained Rosenbrock function at ``x``."""
    head, tail = x[:-1], x[1:]
    return float(np.sum((a - head) ** 2 + b * (tail - head**2) ** 2))


def rosenbrock_derivative(x: Array, a: float, b: float) -> Array:
    """Exact gradient of :func:`rosenbrock`, same length as ``x``."""
    head, tail = x[:-1], x[1:]
    inner = tail - head**2
    grad = np.zeros_like(x)
    grad[:-1] += -2.0 * (a - head) - 4.0 * b * head * inner
    grad[1:] += 2.0 * b * inner
    return grad


def rosenbrock_hessian(x: Array, a: float, b: float) -> Array:
    """Exact Hessian of :func:`rosenbrock` as a flat row-major buffer.

    The result has ``n * n`` entries; reshape it with :func:`to_square`.
    ``a`` does not appear in the second derivatives but is accepted so the
    three functions share a signature.
    """
    n = x.size
    head, tail = x[:-1], x[1:]
    hess = np.zeros((n, n), dtype=np.float64)
    idx = np.arange(n - 1)
    hess[idx, idx] += 2.0 + 12.0 * b * head**2 - 4.0 * b * tail
    hess[idx + 1, idx + 1] += 2.0 * b
    off = -4.0 * b * head
    hess[idx, idx + 1] = off
    hess[idx + 1, idx] = off
    return hess.ravel()


def to_square(flat: Sequence[float] | Array, n: int) -> Array:
    """Reshape a flat row-major buffer into an ``n x n`` matrix.

    Raises
    ------
    ShapeError
        If the buffer does not hold exactly ``n * n`` values.
    """
    buf = np.asarray(flat, dtype=np.float64).ravel()
    if n < 1 or buf.size != n * n:
        raise ShapeError(
            f"cannot reshape a buffer of length {buf.size} into a {n}x{n} matrix"
        )
    return buf.reshape(n, n)


__all__ = [
    "Array",
    "as_buffer",
    "check_shape_params",
    "rosenbrock",
    "rosenbrock_derivative",
    "rosenbrock_hessian",
    "to_square",
]
