import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from argbench.errors import ConfigurationError, InvalidInputError
from argbench.objectives import RosenbrockAnneal, perturbation_steps


def replay(seed, param, steps, lower, upper):
    """Apply ``steps`` perturbations the way ``anneal`` does."""
    rng = np.random.default_rng(seed)
    x = np.array(param, dtype=float)
    for _ in range(steps):
        idx = int(rng.integers(0, x.size))
        delta = rng.uniform(-0.1, 0.1)
        x[idx] = min(max(x[idx] + delta, lower[idx]), upper[idx])
    return x


# ----------------------------------------------------------------------
# Step count grows with temperature
# ----------------------------------------------------------------------


@pytest.mark.parametrize(
    "temp, steps", [(0.0, 1), (0.99, 1), (1.0, 2), (9.5, 10), (15.0, 16)]
)
def test_perturbation_steps(temp, steps):
    assert perturbation_steps(temp) == steps


def test_steps_non_decreasing_in_temperature():
    temps = np.linspace(0.0, 30.0, 301)
    counts = [perturbation_steps(t) for t in temps]
    assert all(a <= b for a, b in zip(counts, counts[1:]))


@pytest.mark.parametrize("temp", [0.0, 9.5, 3.0])
def test_anneal_matches_replay(temp):
    f = RosenbrockAnneal(seed=123)
    x = np.array([0.3, -0.7])
    out = f.anneal(x, temp)
    expected = replay(123, x, perturbation_steps(temp), f.lower, f.upper)
    np.testing.assert_array_equal(out, expected)


def test_zero_temperature_moves_one_coordinate():
    f = RosenbrockAnneal(seed=7)
    x = np.array([0.0, 0.0])
    for _ in range(50):
        out = f.anneal(x, 0.0)
        changed = np.count_nonzero(out != x)
        assert changed <= 1
        assert np.max(np.abs(out - x)) <= 0.1


def test_higher_temperature_explores_further():
    def mean_displacement(temp):
        f = RosenbrockAnneal(seed=0)
        x = np.zeros(2)
        return np.mean([np.abs(f.anneal(x, temp) - x).sum() for _ in range(400)])

    assert mean_displacement(0.0) < mean_displacement(4.0) < mean_displacement(20.0)


# ----------------------------------------------------------------------
# Feasibility
# ----------------------------------------------------------------------


def test_output_stays_within_bounds():
    lower, upper = [-0.05, 0.0], [0.05, 0.02]
    f = RosenbrockAnneal(lower=lower, upper=upper, seed=1)
    rng = np.random.default_rng(2)
    for _ in range(200):
        x = rng.uniform(lower, upper)
        temp = float(rng.uniform(0, 25))
        out = f.anneal(x, temp)
        assert out.shape == x.shape
        assert np.all(out >= lower) and np.all(out <= upper)


def test_degenerate_box_pins_coordinates():
    f = RosenbrockAnneal(lower=[1.0, -5.0], upper=[1.0, 5.0], seed=3)
    for _ in range(20):
        assert f.anneal(np.array([1.0, 0.0]), 5.0)[0] == 1.0


def test_input_is_not_mutated():
    f = RosenbrockAnneal(seed=0)
    x = np.array([1.0, 2.0])
    f.anneal(x, 10.0)
    np.testing.assert_array_equal(x, [1.0, 2.0])


def test_default_bounds():
    f = RosenbrockAnneal()
    np.testing.assert_array_equal(f.lower, [-5.0, -5.0])
    np.testing.assert_array_equal(f.upper, [5.0, 5.0])
    lower, upper = f.bounds
    assert lower is f.lower and upper is f.upper


def test_same_seed_same_sequence():
    x = np.array([0.0, 0.0])
    a = RosenbrockAnneal(seed=42)
    b = RosenbrockAnneal(seed=42)
    for temp in (0.0, 2.5, 7.0):
        np.testing.assert_array_equal(a.anneal(x, temp), b.anneal(x, temp))


def test_accepts_generator():
    rng = np.random.default_rng(5)
    f = RosenbrockAnneal(seed=rng)
    f.anneal(np.zeros(2), 1.0)
    # the generator is shared, so the next draw continues its sequence
    assert rng.random() == replay_next(5, 2)


def replay_next(seed, steps):
    rng = np.random.default_rng(seed)
    for _ in range(steps):
        rng.integers(0, 2)
        rng.uniform(-0.1, 0.1)
    return rng.random()


# ----------------------------------------------------------------------
# Errors
# ----------------------------------------------------------------------


@pytest.mark.parametrize("temp", [-0.1, float("nan"), float("inf")])
def test_invalid_temperature(temp):
    with pytest.raises(InvalidInputError):
        RosenbrockAnneal(seed=0).anneal(np.zeros(2), temp)


def test_wrong_length_parameter():
    with pytest.raises(InvalidInputError):
        RosenbrockAnneal(seed=0).anneal(np.zeros(3), 1.0)


@pytest.mark.parametrize(
    "lower, upper",
    [
        ([-5.0], [5.0, 5.0]),
        ([-5.0, -5.0], [5.0, 5.0, 5.0]),
        ([1.0, 0.0], [0.0, 1.0]),
        ([-np.inf, 0.0], [1.0, 1.0]),
    ],
)
def test_invalid_bounds_rejected_at_construction(lower, upper):
    with pytest.raises(ConfigurationError):
        RosenbrockAnneal(lower=lower, upper=upper)


def test_lock_released_after_error():
    f = RosenbrockAnneal(seed=0)
    with pytest.raises(InvalidInputError):
        f.anneal(np.zeros(2), -1.0)
    done = threading.Event()

    def call():
        f.anneal(np.zeros(2), 3.0)
        done.set()

    t = threading.Thread(target=call)
    t.start()
    t.join(timeout=5)
    assert done.is_set()


# ----------------------------------------------------------------------
# Shared use from several threads
# ----------------------------------------------------------------------


def test_concurrent_calls_are_feasible_and_lose_no_draws():
    f = RosenbrockAnneal(seed=11)
    x = np.array([4.95, -4.95])
    n_calls, temp = 400, 3.0

    with ThreadPoolExecutor(max_workers=8) as pool:
        outs = list(pool.map(lambda _: f.anneal(x, temp), range(n_calls)))

    for out in outs:
        assert out.shape == (2,)
        assert np.all(out >= f.lower) and np.all(out <= f.upper)

    # every call consumed its full set of draws exactly once
    steps = perturbation_steps(temp)
    rng = np.random.default_rng(11)
    for _ in range(n_calls * steps):
        rng.integers(0, 2)
        rng.uniform(-0.1, 0.1)
    with f._lock:
        assert f._rng.random() == rng.random()


def test_cost_gradient_hessian_are_safe_to_share():
    f = RosenbrockAnneal(seed=0)
    points = np.random.default_rng(0).uniform(-5, 5, size=(200, 2))

    def evaluate(x):
        return f.cost(x), f.gradient(x), f.hessian(x)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(evaluate, points))

    for x, (c, g, h) in zip(points, results):
        assert c == f.cost(x)
        np.testing.assert_array_equal(g, f.gradient(x))
        np.testing.assert_array_equal(h, f.hessian(x))
