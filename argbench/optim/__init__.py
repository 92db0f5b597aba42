from .interface import (
    describe,
    get_optimizer,
    init_optimizer_state,
    is_scipy,
    required_capabilities,
    run_optimizer_step,
)
from .scipy_methods import METHODS as SCIPY_METHODS

__all__ = [
    "SCIPY_METHODS",
    "describe",
    "get_optimizer",
    "init_optimizer_state",
    "is_scipy",
    "required_capabilities",
    "run_optimizer_step",
]
