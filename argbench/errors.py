"""Exception types raised by argbench."""

from __future__ import annotations


class ArgbenchError(Exception):
    """Base class for all argbench errors."""


class ShapeError(ArgbenchError, ValueError):
    """A flat buffer cannot be reshaped into the requested matrix."""


class InvalidInputError(ArgbenchError, ValueError):
    """A parameter does not match what the objective expects."""


class ConfigurationError(ArgbenchError, ValueError):
    """An objective or run was constructed with invalid settings."""


__all__ = [
    "ArgbenchError",
    "ShapeError",
    "InvalidInputError",
    "ConfigurationError",
]
