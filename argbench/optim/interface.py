from __future__ import annotations

from typing import Any, Callable, Dict, Tuple

import numpy as np

from ..config.schema import OptimizerConfig
from ..core.state import IterState, TerminationReason
from . import scipy_methods

SCIPY_PREFIX = "scipy:"

# name -> (family, display name, required capabilities)
BUILTIN: Dict[str, Tuple[str, str, Tuple[str, ...]]] = {
    "steepest_descent": ("Linear search", "Backtracking", ("cost", "gradient")),
    "wolfe": ("Linear search", "Wolfe", ("cost", "gradient")),
    "landweber": ("", "Landweber Iteration", ("cost", "gradient")),
    "newton": ("Newton methods", "Newton", ("cost", "gradient", "hessian")),
    "sa": ("", "Simulated Annealing", ("cost", "anneal")),
    "pso": ("", "Particle Swarm", ("cost",)),
}


def _split(name: str) -> tuple[str, str]:
    if name.lower().startswith(SCIPY_PREFIX):
        return "scipy", name[len(SCIPY_PREFIX):]
    return name.lower(), ""


def get_optimizer(name: str) -> Callable[..., Any]:
    kind, method = _split(name)
    if kind == "steepest_descent":
        from . import gradient

        return gradient.steepest_descent
    if kind == "wolfe":
        from . import gradient

        return gradient.steepest_descent_wolfe
    if kind == "landweber":
        from . import gradient

        return gradient.landweber
    if kind == "newton":
        from . import gradient

        return gradient.newton
    if kind == "sa":
        from . import sa

        return sa.sa
    if kind == "pso":
        from . import pso

        return pso.pso
    if kind == "scipy" and method in scipy_methods.METHODS:
        return scipy_methods.scipy_minimize
    raise KeyError(f"Unknown optimizer: {name}")


def is_scipy(name: str) -> bool:
    return _split(name)[0] == "scipy"


def describe(name: str) -> tuple[str, str]:
    """Return ``(family, method)`` labels used in result tables."""
    get_optimizer(name)
    kind, method = _split(name)
    if kind == "scipy":
        return scipy_methods.METHODS[method]["family"], method
    family, display, _ = BUILTIN[kind]
    return family, display


def required_capabilities(name: str) -> tuple[str, ...]:
    get_optimizer(name)
    kind, method = _split(name)
    if kind == "scipy":
        return scipy_methods.required_capabilities(method)
    return BUILTIN[kind][2]


def init_optimizer_state(
    name: str,
    problem: Any,
    state: IterState,
    rng: np.random.Generator,
    cfg: OptimizerConfig,
) -> None:
    """Prepare optimizer-specific state before the first iteration."""
    kind, _ = _split(name)
    if kind == "sa":
        state.temp = cfg.init_temp
    elif kind == "pso":
        from . import pso

        swarm = pso.init_swarm(problem, rng, population_size=cfg.population_size)
        state.extras["swarm"] = swarm
        g_idx = int(np.argmin(swarm["pbest"]))
        state.nfev += len(swarm["pbest"])
        state.update(swarm["P"][g_idx].copy(), float(swarm["pbest"][g_idx]))


def run_optimizer_step(
    name: str,
    problem: Any,
    state: IterState,
    rng: np.random.Generator,
    cfg: OptimizerConfig,
) -> None:
    """Advance ``state`` by one iteration of the named optimizer."""
    kind, _ = _split(name)
    opt = get_optimizer(name)

    if kind == "steepest_descent":
        res = opt(
            problem,
            state.param,
            state.cost,
            step_size=cfg.step_size,
            rho=cfg.rho,
            armijo_c=cfg.armijo_c,
            max_backtracks=cfg.max_backtracks,
        )
        _apply_gradient_step(state, res, cfg, "line search found no sufficient decrease")

    elif kind == "wolfe":
        res = opt(
            problem,
            state.param,
            state.cost,
            armijo_c=cfg.armijo_c,
            wolfe_c2=cfg.wolfe_c2,
            max_step=cfg.max_step,
        )
        _apply_gradient_step(state, res, cfg, "no step satisfies the Wolfe conditions")

    elif kind == "landweber":
        res = opt(problem, state.param, state.cost, omega=cfg.omega)
        _apply_gradient_step(state, res, cfg, "Landweber step produced a non-finite cost")

    elif kind == "newton":
        res = opt(problem, state.param, state.cost, gamma=cfg.gamma)
        _apply_gradient_step(state, res, cfg, "Newton step produced a non-finite cost")

    elif kind == "sa":
        from .sa import fast_schedule

        t = fast_schedule(cfg.init_temp, state.iter)
        param, cost, accepted = opt(problem, state.param, state.cost, rng, t)
        state.nfev += 1
        state.temp = t
        state.extras["accepted"] = state.extras.get("accepted", 0) + int(accepted)
        state.update(param, cost)

    elif kind == "pso":
        param, cost, nfev = opt(
            problem,
            state.extras["swarm"],
            rng,
            inertia=cfg.inertia,
            cognitive=cfg.cognitive,
            social=cfg.social,
        )
        state.nfev += nfev
        state.update(param, cost)

    else:
        raise KeyError(f"Optimizer {name} does not run step by step")


def _apply_gradient_step(state: IterState, res, cfg: OptimizerConfig, failure: str) -> None:
    state.grad_norm = res.grad_norm
    state.nfev += res.nfev
    if res.grad_norm <= cfg.tol:
        state.terminate(TerminationReason.SOLVER_CONVERGED, "gradient norm below tolerance")
        return
    if not res.ok:
        state.terminate(TerminationReason.SOLVER_EXIT, failure)
        return
    state.update(res.param, res.cost)
