"""Benchmark every optimizer family on the Rosenbrock surface.

Usage::

    python -m argbench [max_iters] [log_every] [--seed N] [--methods a,b]
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np
from rich.console import Console
from rich.table import Table

from .config import OptimizerConfig, RunConfig
from .core.runner import Runner, RunResult
from .objectives import RosenbrockAnneal, RosenbrockND, RosenbrockVec

logger = logging.getLogger(__name__)

INIT_PARAM = [10.2, -20.0]
LOWER = [-5.0, -5.0]
UPPER = [5.0, 5.0]


@dataclass
class Case:
    optimizer: str
    problem: Callable[[Optional[int]], Any]
    options: Dict[str, Any] = field(default_factory=dict)
    init_param: Optional[List[float]] = None


def _nd(seed: Optional[int]) -> RosenbrockND:
    return RosenbrockND()


def _vec(seed: Optional[int]) -> RosenbrockVec:
    return RosenbrockVec()


def _bounded(seed: Optional[int]) -> RosenbrockAnneal:
    return RosenbrockAnneal(lower=LOWER, upper=UPPER, seed=seed)


SUITE: List[Case] = [
    Case("steepest_descent", _nd),
    Case("wolfe", _nd),
    Case("scipy:CG", _nd),
    Case("newton", _nd),
    Case("scipy:Newton-CG", _nd),
    Case("scipy:trust-ncg", _nd),
    Case("scipy:dogleg", _nd),
    Case("scipy:trust-exact", _nd),
    Case("scipy:BFGS", _nd),
    Case("scipy:L-BFGS-B", _nd),
    Case("landweber", _nd),
    Case("scipy:Nelder-Mead", _vec),
    Case("sa", _bounded, {"init_temp": 15.0}, np.clip(INIT_PARAM, LOWER, UPPER).tolist()),
    Case("pso", _bounded, {"population_size": 40}),
]


def run_case(case: Case, max_iters: int, log_every: int, seed: Optional[int]) -> RunResult:
    cfg = RunConfig(
        seed=seed,
        max_iters=max_iters,
        log_every=log_every,
        init_param=list(case.init_param or INIT_PARAM),
        optimizer=case.optimizer,
        optimizer_config=OptimizerConfig(name=case.optimizer, **case.options),
    )
    return Runner(case.problem(seed), cfg).run()


def results_table(results: Sequence[RunResult], max_iters: int) -> Table:
    table = Table(title=f"Results using {max_iters} iterations")
    table.add_column("Family", style="cyan")
    table.add_column("Method", style="bold")
    table.add_column("Best Cost", justify="right", style="magenta")
    table.add_column("Time", justify="right")
    table.add_column("Iterations", justify="right")
    table.add_column("Termination Reason")
    for r in results:
        table.add_row(
            r.family,
            r.method,
            f"{r.best_cost:.6e}",
            f"{r.elapsed * 1e3:.3f}ms",
            str(r.iterations),
            str(r.termination_reason),
        )
    return table


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number: {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"Expected a non-negative number, got {n}")
    return n


def _positive_int(value: str) -> int:
    n = _non_negative_int(value)
    if n == 0:
        raise argparse.ArgumentTypeError("Expected a positive number, got 0")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="argbench",
        description="Run the Rosenbrock optimizer benchmark and print a results table.",
    )
    parser.add_argument("max_iters", nargs="?", type=_non_negative_int, default=100)
    parser.add_argument("log_every", nargs="?", type=_positive_int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--methods",
        type=lambda s: [m.strip() for m in s.split(",") if m.strip()],
        default=None,
        help="comma separated optimizer names, e.g. newton,sa,scipy:BFGS",
    )
    parser.add_argument("--log-level", default="INFO")
    return parser


def select_cases(methods: Optional[Sequence[str]] = None) -> List[Case]:
    """Pick suite cases by optimizer name (case-insensitive); all when empty.

    Raises
    ------
    KeyError
        If a name is not part of the suite.
    """
    if not methods:
        return list(SUITE)
    known = {c.optimizer.lower(): c for c in SUITE}
    unknown = [m for m in methods if m.lower() not in known]
    if unknown:
        raise KeyError(f"unknown methods: {', '.join(unknown)}")
    return [known[m.lower()] for m in methods]


def run_suite(
    max_iters: int = 100,
    log_every: int = 10,
    seed: Optional[int] = None,
    methods: Optional[Sequence[str]] = None,
    console: Optional[Console] = None,
) -> List[RunResult]:
    """Run the selected cases and print the results table to ``console``."""
    results = []
    for case in select_cases(methods):
        result = run_case(case, max_iters, log_every, seed)
        logger.info("%s: %s", result.method, result.termination_reason)
        results.append(result)

    (console or Console()).print(results_table(results, max_iters))
    return results


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        select_cases(args.methods)
    except KeyError as exc:
        parser.error(exc.args[0])

    run_suite(args.max_iters, args.log_every, args.seed, args.methods, console)
    return 0
