"""Gradient-based steps: steepest descent (backtracking or Wolfe), Landweber and Newton."""

from __future__ import annotations

from typing import Any, NamedTuple

import numpy as np
from scipy.optimize import line_search


class StepResult(NamedTuple):
    param: np.ndarray
    cost: float
    grad_norm: float
    nfev: int
    ok: bool


def _grad(problem: Any, param: np.ndarray) -> np.ndarray:
    return np.asarray(problem.gradient(param), dtype=np.float64)


def safe_solve(mat: np.ndarray, vec: np.ndarray, reg: float = 1e-12) -> np.ndarray:
    """Solve linear system with ridge fallback for singular matrices."""
    try:
        return np.linalg.solve(mat, vec)
    except np.linalg.LinAlgError:
        eye = np.eye(mat.shape[0], dtype=mat.dtype)
        return np.linalg.solve(mat + reg * eye, vec)


def backtracking(
    problem: Any,
    param: np.ndarray,
    cost: float,
    grad: np.ndarray,
    direction: np.ndarray,
    step_size: float = 1.0,
    rho: float = 0.9,
    armijo_c: float = 1e-4,
    max_backtracks: int = 1000,
) -> tuple[np.ndarray, float, int, bool]:
    """Shrink the step until the Armijo sufficient decrease condition holds.

    Returns the accepted point, its cost, the number of cost evaluations and
    whether the condition was met. When it never is, the start point is
    returned unchanged.
    """
    slope = float(grad @ direction)
    alpha = step_size
    for evals in range(1, max_backtracks + 1):
        candidate = param + alpha * direction
        new_cost = float(problem.cost(candidate))
        if np.isfinite(new_cost) and new_cost <= cost + armijo_c * alpha * slope:
            return candidate, new_cost, evals, True
        alpha *= rho
    return param, cost, max_backtracks, False


def steepest_descent(
    problem: Any,
    param: np.ndarray,
    cost: float,
    step_size: float = 1.0,
    rho: float = 0.9,
    armijo_c: float = 1e-4,
    max_backtracks: int = 1000,
) -> StepResult:
    """One steepest descent step along ``-grad`` with a backtracking line search."""
    grad = _grad(problem, param)
    new_param, new_cost, nfev, ok = backtracking(
        problem,
        param,
        cost,
        grad,
        -grad,
        step_size=step_size,
        rho=rho,
        armijo_c=armijo_c,
        max_backtracks=max_backtracks,
    )
    return StepResult(new_param, new_cost, float(np.linalg.norm(grad)), nfev, ok)


def newton(problem: Any, param: np.ndarray, cost: float, gamma: float = 1.0) -> StepResult:
    """One (damped) Newton step: solve ``H p = -g`` and move by ``gamma * p``."""
    grad = _grad(problem, param)
    hess = np.asarray(problem.hessian(param), dtype=np.float64)
    direction = safe_solve(hess, -grad)
    new_param = param + gamma * direction
    new_cost = float(problem.cost(new_param))
    return StepResult(new_param, new_cost, float(np.linalg.norm(grad)), 1, bool(np.isfinite(new_cost)))


def steepest_descent_wolfe(
    problem: Any,
    param: np.ndarray,
    cost: float,
    armijo_c: float = 1e-4,
    wolfe_c2: float = 0.9,
    max_step: float = 50.0,
) -> StepResult:
    """One steepest descent step with a strong Wolfe line search.

    The step length comes from ``scipy.optimize.line_search``. When it finds
    no acceptable step the start point is returned with ``ok=False``.
    """
    grad = _grad(problem, param)
    grad_norm = float(np.linalg.norm(grad))
    alpha, fc, gc, new_cost, _, _ = line_search(
        lambda x: float(problem.cost(x)),
        lambda x: _grad(problem, x),
        param,
        -grad,
        gfk=grad,
        old_fval=cost,
        c1=armijo_c,
        c2=wolfe_c2,
        amax=max_step,
    )
    if alpha is None or new_cost is None or not np.isfinite(new_cost):
        return StepResult(param, cost, grad_norm, fc, False)
    return StepResult(param - alpha * grad, float(new_cost), grad_norm, fc, True)


def landweber(problem: Any, param: np.ndarray, cost: float, omega: float = 0.001) -> StepResult:
    """Fixed-step gradient iteration ``x <- x - omega * grad``.

    The iteration diverges once ``omega`` exceeds the local stability limit;
    overflow then shows up as a non-finite cost and ``ok=False``.
    """
    with np.errstate(over="ignore", invalid="ignore"):
        grad = _grad(problem, param)
        new_param = param - omega * grad
        new_cost = float(problem.cost(new_param))
    return StepResult(new_param, new_cost, float(np.linalg.norm(grad)), 1, bool(np.isfinite(new_cost)))
