from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np


def plot_history(history: Dict, title: Optional[str] = None) -> None:
    iters: List[int] = history.get("iter", [])
    cost = history.get("cost", [])
    best_cost = history.get("best_cost", [])

    plt.figure()
    if cost:
        plt.plot(iters, cost, label="cost", alpha=0.6)
    if best_cost:
        plt.plot(iters, best_cost, label="best_cost")
    values = [v for v in list(cost) + list(best_cost) if v is not None]
    if values and min(values) > 0:
        plt.yscale("log")
    plt.xlabel("iteration")
    plt.ylabel("cost")
    if title:
        plt.title(title)
    plt.legend()
    plt.tight_layout()


# --------------------------------------------------------
# Cost surface with an optional optimizer path
# --------------------------------------------------------
def plot_surface(
    problem: Any,
    lower: Sequence[float] = (-2.0, -1.0),
    upper: Sequence[float] = (2.0, 3.0),
    path: Optional[Sequence[Sequence[float]]] = None,
    resolution: int = 200,
) -> None:
    """Contour plot of a two-parameter cost surface.

    Levels are spaced logarithmically since the Rosenbrock valley spans
    many orders of magnitude. ``path`` (e.g. ``history["param"]``) is drawn
    on top when given.
    """
    xs = np.linspace(lower[0], upper[0], resolution)
    ys = np.linspace(lower[1], upper[1], resolution)
    X, Y = np.meshgrid(xs, ys)
    Z = np.array(
        [[problem.cost(np.array([x, y])) for x, y in zip(row_x, row_y)] for row_x, row_y in zip(X, Y)]
    )

    plt.figure(figsize=(6, 5))
    shifted = Z - Z.min() + 1e-3
    levels = np.logspace(np.log10(shifted.min()), np.log10(shifted.max()), 30)
    plt.contour(X, Y, shifted, levels=levels, cmap="viridis")

    if path is not None and len(path) > 0:
        pts = np.asarray(path, dtype=float)
        plt.plot(pts[:, 0], pts[:, 1], "r.-", linewidth=1, markersize=3, label="path")
        plt.plot(pts[-1, 0], pts[-1, 1], "k*", markersize=10, label="last")
        plt.legend()

    plt.xlabel("x")
    plt.ylabel("y")
    plt.title("Cost surface")
    plt.tight_layout()
