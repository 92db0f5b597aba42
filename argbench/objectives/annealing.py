"""Bounds-aware Rosenbrock objective with a stochastic perturbation operator.

Simulated-annealing drivers ask the objective for a random neighbor of the
current parameter. The objective owns the random generator, so the same
instance can be shared between threads: every call to ``anneal`` takes the
generator lock for its whole sequence of draws.
"""

from __future__ import annotations

import math
import threading
from typing import Optional, Sequence, Tuple

import numpy as np

from ..errors import ConfigurationError, InvalidInputError
from .functions import (
    as_buffer,
    check_shape_params,
    rosenbrock,
    rosenbrock_derivative,
    rosenbrock_hessian,
    to_square,
)

DEFAULT_LOWER = (-5.0, -5.0)
DEFAULT_UPPER = (5.0, 5.0)

# Half-width of the uniform step applied to one coordinate.
STEP_WIDTH = 0.1


def perturbation_steps(temp: float) -> int:
    """Number of single-coordinate steps taken at temperature ``temp``."""
    if not math.isfinite(temp) or temp < 0:
        raise InvalidInputError(f"temperature must be finite and >= 0, got {temp!r}")
    return int(math.floor(temp)) + 1


def _as_bound(values: Sequence[float], name: str, dim: int) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    if arr.ndim != 1 or arr.size != dim:
        raise ConfigurationError(f"{name} bound must have length {dim}, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ConfigurationError(f"{name} bound must be finite")
    arr.setflags(write=False)
    return arr


class RosenbrockAnneal:
    """Rosenbrock objective over ndarrays with box bounds and ``anneal``.

    Parameters
    ----------
    a, b:
        Shape parameters of the surface.
    lower, upper:
        Elementwise bounds of the feasible box. ``lower[i] <= upper[i]``.
    seed:
        Seed (or an existing ``numpy.random.Generator``) for the
        perturbation generator. ``None`` draws fresh OS entropy.
    dim:
        Expected parameter length.
    """

    param_type = "ndarray"

    def __init__(
        self,
        a: float = 1.0,
        b: float = 100.0,
        lower: Optional[Sequence[float]] = None,
        upper: Optional[Sequence[float]] = None,
        seed: int | np.random.Generator | None = None,
        dim: int = 2,
    ) -> None:
        check_shape_params(a, b, dim)
        if lower is None:
            lower = DEFAULT_LOWER if dim == 2 else (DEFAULT_LOWER[0],) * dim
        if upper is None:
            upper = DEFAULT_UPPER if dim == 2 else (DEFAULT_UPPER[0],) * dim
        lo = _as_bound(lower, "lower", dim)
        hi = _as_bound(upper, "upper", dim)
        if np.any(lo > hi):
            raise ConfigurationError("lower bound exceeds upper bound")

        self.a = float(a)
        self.b = float(b)
        self.dim = int(dim)
        self.lower = lo
        self.upper = hi
        self._rng = np.random.default_rng(seed)
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(a={self.a!r}, b={self.b!r}, "
            f"lower={self.lower.tolist()!r}, upper={self.upper.tolist()!r})"
        )

    @property
    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.lower, self.upper

    def cost(self, param: np.ndarray) -> float:
        return rosenbrock(as_buffer(param, self.dim), self.a, self.b)

    def gradient(self, param: np.ndarray) -> np.ndarray:
        return rosenbrock_derivative(as_buffer(param, self.dim), self.a, self.b)

    def hessian(self, param: np.ndarray) -> np.ndarray:
        flat = rosenbrock_hessian(as_buffer(param, self.dim), self.a, self.b)
        return to_square(flat, self.dim)

    def anneal(self, param: np.ndarray, temp: float) -> np.ndarray:
        """Return a random neighbor of ``param`` inside the bounds.

        Takes ``floor(temp) + 1`` steps. Each step picks a coordinate
        uniformly, shifts it by a uniform draw in ``[-0.1, 0.1)`` and clamps
        it back into ``[lower, upper]``. Steps accumulate on one working
        copy; ``param`` itself is left untouched.
        """
        steps = perturbation_steps(temp)
        x = as_buffer(param, self.dim).copy()
        with self._lock:
            for _ in range(steps):
                idx = int(self._rng.integers(0, self.dim))
                delta = self._rng.uniform(-STEP_WIDTH, STEP_WIDTH)
                x[idx] = min(max(x[idx] + delta, self.lower[idx]), self.upper[idx])
        return x
