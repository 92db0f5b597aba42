import argparse
import subprocess
import sys

import pytest
from rich.console import Console

from argbench import TerminationReason
from argbench.cli import (
    SUITE,
    _non_negative_int,
    build_parser,
    main,
    run_suite,
    select_cases,
)


def record_console():
    return Console(record=True, width=200)


def test_full_suite_table():
    console = record_console()
    results = run_suite(30, 10, seed=0, console=console)

    assert [r.method for r in results] == [
        "Backtracking",
        "Wolfe",
        "CG",
        "Newton",
        "Newton-CG",
        "trust-ncg",
        "dogleg",
        "trust-exact",
        "BFGS",
        "L-BFGS-B",
        "Landweber Iteration",
        "Nelder-Mead",
        "Simulated Annealing",
        "Particle Swarm",
    ]
    assert len(results) == len(SUITE)
    for r in results:
        assert r.iterations <= 30
        assert r.termination_reason is not TerminationReason.NOT_TERMINATED

    text = console.export_text()
    for column in ("Family", "Method", "Best Cost", "Time", "Iterations", "Termination Reason"):
        assert column in text
    assert "Results using 30 iterations" in text


def test_method_selection():
    results = run_suite(5, methods=["newton", "SA"], seed=0, console=record_console())
    assert [r.method for r in results] == ["Newton", "Simulated Annealing"]
    assert all(r.iterations <= 5 for r in results)


def test_select_cases():
    assert select_cases(None) == SUITE
    assert [c.optimizer for c in select_cases(["LANDWEBER", "wolfe"])] == ["landweber", "wolfe"]
    with pytest.raises(KeyError):
        select_cases(["lbfgs"])


def test_zero_iterations():
    results = run_suite(0, methods=["scipy:BFGS"], console=record_console())
    assert results[0].iterations == 0
    assert results[0].termination_reason is TerminationReason.MAX_ITERS_REACHED


def test_main_returns_success_status():
    console = record_console()
    assert main(["1", "--methods", "newton"], console=console) == 0
    assert "Newton" in console.export_text()

    # console scripts wrap the entry point in sys.exit
    with pytest.raises(SystemExit) as exc:
        sys.exit(main(["1", "--methods", "newton"], console=record_console()))
    assert exc.value.code == 0


def test_module_entry_point_exit_code():
    proc = subprocess.run(
        [sys.executable, "-m", "argbench", "1", "--methods", "newton", "--log-level", "WARNING"],
        capture_output=True,
        text=True,
        timeout=120,
    )
    assert proc.returncode == 0, proc.stderr
    assert "RunResult" not in proc.stderr
    assert "Newton" in proc.stdout


@pytest.mark.parametrize(
    "argv",
    [
        ["abc"],
        ["-3"],
        ["10", "0"],
        ["10", "x"],
        ["10", "--methods", "lbfgs"],
    ],
)
def test_invalid_arguments(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv, console=record_console())
    assert exc.value.code == 2


def test_invalid_number_suppresses_context():
    with pytest.raises(argparse.ArgumentTypeError) as exc:
        _non_negative_int("abc")
    assert exc.value.__cause__ is None
    assert exc.value.__suppress_context__
    assert "Invalid number" in str(exc.value)


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.max_iters == 100
    assert args.log_every == 10
    assert args.seed is None
    assert args.methods is None
