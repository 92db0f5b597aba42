from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, List

from .functions import (
    as_buffer,
    check_shape_params,
    rosenbrock,
    rosenbrock_derivative,
    rosenbrock_hessian,
    to_square,
)


@dataclass(frozen=True)
class RosenbrockVec:
    """Rosenbrock objective over plain ``list[float]`` parameters.

    Gradients come back as ``list[float]`` and Hessians as nested lists.
    Parameters of any length other than ``dim`` raise ``InvalidInputError``.
    """

    a: float = 1.0
    b: float = 100.0
    dim: int = 2

    param_type: ClassVar[str] = "list"

    def __post_init__(self) -> None:
        check_shape_params(self.a, self.b, self.dim)

    def cost(self, param: List[float]) -> float:
        return rosenbrock(as_buffer(param, self.dim), self.a, self.b)

    def gradient(self, param: List[float]) -> List[float]:
        x = as_buffer(param, self.dim)
        return rosenbrock_derivative(x, self.a, self.b).tolist()

    def hessian(self, param: List[float]) -> List[List[float]]:
        x = as_buffer(param, self.dim)
        flat = rosenbrock_hessian(x, self.a, self.b)
        return to_square(flat, self.dim).tolist()
