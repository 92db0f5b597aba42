from .schema import ObjectiveConfig, OptimizerConfig, RunConfig

__all__ = ["ObjectiveConfig", "OptimizerConfig", "RunConfig"]
