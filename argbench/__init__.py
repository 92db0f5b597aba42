from .builder import Bench
from .config import ObjectiveConfig, OptimizerConfig, RunConfig
from .core.runner import Runner, RunResult
from .core.state import TerminationReason
from .errors import ArgbenchError, ConfigurationError, InvalidInputError, ShapeError
from .objectives import (
    Anneal,
    CostFunction,
    Gradient,
    Hessian,
    RosenbrockAnneal,
    RosenbrockND,
    RosenbrockTensor,
    RosenbrockVec,
    maximize,
)

__all__ = [
    "Anneal",
    "ArgbenchError",
    "Bench",
    "ConfigurationError",
    "CostFunction",
    "Gradient",
    "Hessian",
    "InvalidInputError",
    "ObjectiveConfig",
    "OptimizerConfig",
    "RosenbrockAnneal",
    "RosenbrockND",
    "RosenbrockTensor",
    "RosenbrockVec",
    "RunConfig",
    "RunResult",
    "Runner",
    "ShapeError",
    "TerminationReason",
    "maximize",
]
