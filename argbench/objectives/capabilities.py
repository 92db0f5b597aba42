"""Capability interfaces consumed by optimizer drivers.

A driver depends only on the capabilities its algorithm family needs:
line searches need ``CostFunction`` and ``Gradient``, Newton methods add
``Hessian``, and annealing drivers need ``CostFunction`` and ``Anneal``.
The protocols are runtime checkable so a driver can verify a problem
before starting.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CostFunction(Protocol):
    def cost(self, param: Any) -> float:
        """Return the scalar cost at ``param``."""
        ...


@runtime_checkable
class Gradient(Protocol):
    def gradient(self, param: Any) -> Any:
        """Return the gradient at ``param`` in the parameter's container type."""
        ...


@runtime_checkable
class Hessian(Protocol):
    def hessian(self, param: Any) -> Any:
        """Return the square second-derivative matrix at ``param``."""
        ...


@runtime_checkable
class Anneal(Protocol):
    def anneal(self, param: Any, temp: float) -> Any:
        """Return a random feasible neighbor of ``param``."""
        ...


CAPABILITIES = {
    "cost": CostFunction,
    "gradient": Gradient,
    "hessian": Hessian,
    "anneal": Anneal,
}


def has_capabilities(problem: Any, *names: str) -> bool:
    """Return True if ``problem`` provides every named capability."""
    return all(isinstance(problem, CAPABILITIES[name]) for name in names)


def missing_capabilities(problem: Any, *names: str) -> list[str]:
    return [name for name in names if not isinstance(problem, CAPABILITIES[name])]


__all__ = [
    "CostFunction",
    "Gradient",
    "Hessian",
    "Anneal",
    "CAPABILITIES",
    "has_capabilities",
    "missing_capabilities",
]
