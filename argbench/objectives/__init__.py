"""Benchmark objectives and the capabilities drivers consume."""

from .annealing import RosenbrockAnneal, perturbation_steps
from .capabilities import (
    Anneal,
    CostFunction,
    Gradient,
    Hessian,
    has_capabilities,
    missing_capabilities,
)
from .functions import (
    rosenbrock,
    rosenbrock_derivative,
    rosenbrock_hessian,
    to_square,
)
from .negate import Maximize, maximize
from .rosenbrock_ndarray import RosenbrockND
from .rosenbrock_tensor import RosenbrockTensor
from .rosenbrock_vec import RosenbrockVec

__all__ = [
    "Anneal",
    "CostFunction",
    "Gradient",
    "Hessian",
    "Maximize",
    "RosenbrockAnneal",
    "RosenbrockND",
    "RosenbrockTensor",
    "RosenbrockVec",
    "has_capabilities",
    "maximize",
    "missing_capabilities",
    "perturbation_steps",
    "rosenbrock",
    "rosenbrock_derivative",
    "rosenbrock_hessian",
    "to_square",
]
