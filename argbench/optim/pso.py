"""Bounded global-best particle swarm over a problem's feasible box."""

from __future__ import annotations

from typing import Any, Dict

import numpy as np

# Velocity clamp as a fraction of the box span.
VMAX_FRAC = 0.2


def init_swarm(
    problem: Any,
    rng: np.random.Generator,
    population_size: int = 40,
) -> Dict[str, np.ndarray]:
    """Scatter particles uniformly in the bounds and evaluate them."""
    lower, upper = (np.asarray(b, dtype=float) for b in problem.bounds)
    span = upper - lower

    X = rng.uniform(lower, upper, size=(population_size, lower.size))
    V = rng.uniform(-VMAX_FRAC * span, VMAX_FRAC * span, size=X.shape)
    pbest = np.array([problem.cost(x) for x in X], dtype=float)

    return {"X": X, "V": V, "P": X.copy(), "pbest": pbest}


def pso(
    problem: Any,
    swarm: Dict[str, np.ndarray],
    rng: np.random.Generator,
    inertia: float = 0.5,
    cognitive: float = 1.5,
    social: float = 1.5,
) -> tuple[np.ndarray, float, int]:
    """Advance the swarm one iteration in place.

    Returns the global best position, its cost and the number of cost
    evaluations spent.
    """
    lower, upper = (np.asarray(b, dtype=float) for b in problem.bounds)
    vmax = VMAX_FRAC * (upper - lower)

    X, V, P, pbest = swarm["X"], swarm["V"], swarm["P"], swarm["pbest"]
    G = P[int(np.argmin(pbest))]

    # Velocity + position update
    r1 = rng.random(size=X.shape)
    r2 = rng.random(size=X.shape)
    V = inertia * V + cognitive * r1 * (P - X) + social * r2 * (G - X)
    V = np.clip(V, -vmax, vmax)
    X = np.clip(X + V, lower, upper)

    # Evaluate and update personal bests
    fitness = np.array([problem.cost(x) for x in X], dtype=float)
    improved = fitness < pbest
    P[improved] = X[improved]
    pbest[improved] = fitness[improved]

    swarm["X"], swarm["V"] = X, V

    g_idx = int(np.argmin(pbest))
    return P[g_idx].copy(), float(pbest[g_idx]), len(X)
