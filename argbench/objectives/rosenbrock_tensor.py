"""Rosenbrock objective over ``torch.Tensor`` parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np
import torch

from ..errors import InvalidInputError
from .functions import (
    as_buffer,
    check_shape_params,
    rosenbrock,
    rosenbrock_derivative,
    rosenbrock_hessian,
    to_square,
)


def _to_buffer(param: torch.Tensor, dim: int) -> np.ndarray:
    if not isinstance(param, torch.Tensor):
        raise InvalidInputError(f"expected a torch.Tensor, got {type(param).__name__}")
    return as_buffer(param.detach().cpu().to(torch.float64).numpy(), dim)


def _like(values: np.ndarray, param: torch.Tensor) -> torch.Tensor:
    dtype = param.dtype if param.is_floating_point() else torch.float64
    return torch.as_tensor(values, dtype=dtype, device=param.device)


@dataclass(frozen=True)
class RosenbrockTensor:
    """Rosenbrock objective for drivers that keep parameters as tensors.

    Results are returned on the parameter's device and, for floating point
    inputs, in its dtype. The derivatives are the analytic ones; nothing is
    recorded on the autograd tape.
    """

    a: float = 1.0
    b: float = 100.0
    dim: int = 2

    param_type: ClassVar[str] = "tensor"

    def __post_init__(self) -> None:
        check_shape_params(self.a, self.b, self.dim)

    def cost(self, param: torch.Tensor) -> float:
        return rosenbrock(_to_buffer(param, self.dim), self.a, self.b)

    def gradient(self, param: torch.Tensor) -> torch.Tensor:
        grad = rosenbrock_derivative(_to_buffer(param, self.dim), self.a, self.b)
        return _like(grad, param)

    def hessian(self, param: torch.Tensor) -> torch.Tensor:
        flat = rosenbrock_hessian(_to_buffer(param, self.dim), self.a, self.b)
        return _like(to_square(flat, self.dim), param)
