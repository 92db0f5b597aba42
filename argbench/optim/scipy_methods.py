"""Quasi-Newton, trust-region, conjugate-gradient and simplex methods via SciPy.

These methods keep internal state across iterations (inverse Hessian
approximations, trust radii, simplices), so they cannot be driven one step
at a time. Instead the whole run happens inside one ``scipy.optimize.minimize``
call and each iteration is reported through ``on_iter``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

import numpy as np
from scipy.optimize import OptimizeResult, minimize

logger = logging.getLogger(__name__)

# Method capabilities based on SciPy's minimize documentation
METHODS: Dict[str, Dict[str, Any]] = {
    "BFGS": {"family": "Quasi-Newton methods", "gradient": True, "hessian": False},
    "L-BFGS-B": {"family": "Quasi-Newton methods", "gradient": True, "hessian": False},
    "CG": {"family": "Conjugate Gradient", "gradient": True, "hessian": False},
    "Newton-CG": {"family": "Newton methods", "gradient": True, "hessian": True},
    "trust-ncg": {"family": "Trust region", "gradient": True, "hessian": True},
    "trust-exact": {"family": "Trust region", "gradient": True, "hessian": True},
    "dogleg": {"family": "Trust region", "gradient": True, "hessian": True},
    "Nelder-Mead": {"family": "Direct search", "gradient": False, "hessian": False},
}


def required_capabilities(method: str) -> tuple[str, ...]:
    caps = METHODS[method]
    names = ["cost"]
    if caps["gradient"]:
        names.append("gradient")
    if caps["hessian"]:
        names.append("hessian")
    return tuple(names)


def scipy_minimize(
    problem: Any,
    x0: np.ndarray,
    method: str,
    max_iters: int,
    on_iter: Callable[[np.ndarray, float], None],
    fun: Callable[[np.ndarray], float] | None = None,
    tol: float | None = None,
) -> OptimizeResult:
    """Run ``scipy.optimize.minimize`` on ``problem``.

    ``on_iter(x, cost)`` is called after every iteration; it may raise
    ``StopIteration`` to end the run early. ``fun`` overrides
    ``problem.cost`` (e.g. to count evaluations).
    """
    if method not in METHODS:
        raise KeyError(f"Unknown SciPy method: {method}")
    caps = METHODS[method]

    def callback(intermediate_result: OptimizeResult) -> None:
        on_iter(np.asarray(intermediate_result.x, dtype=float), float(intermediate_result.fun))

    def jac(x: np.ndarray) -> np.ndarray:
        return np.asarray(problem.gradient(x), dtype=float)

    def hess(x: np.ndarray) -> np.ndarray:
        return np.asarray(problem.hessian(x), dtype=float)

    logger.debug("scipy.optimize.minimize(method=%s, maxiter=%d)", method, max_iters)
    return minimize(
        fun or problem.cost,
        np.asarray(x0, dtype=float),
        method=method,
        jac=jac if caps["gradient"] else None,
        hess=hess if caps["hessian"] else None,
        tol=tol,
        callback=callback,
        options={"maxiter": max_iters},
    )
