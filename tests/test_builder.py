import numpy as np
import pytest

from argbench import Bench, RosenbrockAnneal, RosenbrockND, TerminationReason
from argbench.core.callbacks import EarlyStopping
from argbench.objectives import Maximize


def test_bench_newton_learns():
    runner, result = (
        Bench()
        .objective(a=1.0, b=100.0)
        .optimizer("newton")
        .run(max_iters=50, init_param=[-1.2, 1.0])
    )
    assert result.best_cost < 1e-12
    assert isinstance(runner.problem, RosenbrockND)


def test_bench_defaults_to_bounded_annealing():
    bench = Bench().seed(0)
    problem = bench.build_problem()
    assert isinstance(problem, RosenbrockAnneal)
    lower, upper = problem.bounds
    np.testing.assert_array_equal(lower, [-5.0, -5.0])
    np.testing.assert_array_equal(upper, [5.0, 5.0])

    _, result = bench.run(max_iters=50, seed=0)
    assert result.method == "Simulated Annealing"
    assert result.iterations == 50


def test_bench_custom_parameters_and_bounds():
    bench = Bench().objective(a=2.0, b=10.0, dim=3).bounds([-1.0] * 3, [3.0] * 3)
    bench.optimizer("pso", population_size=10)
    problem = bench.build_problem()

    assert problem.dim == 3
    assert problem.cost(np.array([2.0, 4.0, 16.0])) == pytest.approx(0.0)

    _, result = bench.run(max_iters=5, seed=1)
    assert len(result.best_param) == 3
    assert result.nfev == 10 * 6


def test_bench_maximize_wraps_problem():
    problem = Bench().optimizer("newton").maximize().build_problem()
    assert isinstance(problem, Maximize)
    assert problem.cost(np.array([0.0, 0.0])) == -1.0


def test_bench_rejects_unknown_options():
    with pytest.raises(TypeError):
        Bench().optimizer("sa", temperature=3.0).run(max_iters=1)


def test_bench_callbacks_and_target():
    stopper = EarlyStopping(patience=2)
    _, result = (
        Bench()
        .seed(0)
        .optimizer("sa", init_temp=1.0)
        .callbacks(stopper)
        .run(max_iters=100, init_param=[1.0, 1.0], seed=0)
    )
    assert result.termination_reason is TerminationReason.STOPPED_BY_CALLBACK

    _, result = Bench().optimizer("newton").run(
        max_iters=50, init_param=[-1.2, 1.0], target_cost=1.0
    )
    assert result.termination_reason is TerminationReason.TARGET_COST_REACHED
