from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from .functions import (
    as_buffer,
    check_shape_params,
    rosenbrock,
    rosenbrock_derivative,
    rosenbrock_hessian,
    to_square,
)


@dataclass(frozen=True)
class RosenbrockND:
    """Rosenbrock objective over 1-D ``numpy.ndarray`` parameters.

    ``gradient`` returns a 1-D array and ``hessian`` a ``(dim, dim)`` array.
    """

    a: float = 1.0
    b: float = 100.0
    dim: int = 2

    param_type: ClassVar[str] = "ndarray"

    def __post_init__(self) -> None:
        check_shape_params(self.a, self.b, self.dim)

    def cost(self, param: np.ndarray) -> float:
        return rosenbrock(as_buffer(param, self.dim), self.a, self.b)

    def gradient(self, param: np.ndarray) -> np.ndarray:
        return rosenbrock_derivative(as_buffer(param, self.dim), self.a, self.b)

    def hessian(self, param: np.ndarray) -> np.ndarray:
        flat = rosenbrock_hessian(as_buffer(param, self.dim), self.a, self.b)
        return to_square(flat, self.dim)
