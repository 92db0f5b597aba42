import numpy as np
import pytest
import torch

from argbench.objectives import (
    Anneal,
    Gradient,
    Hessian,
    Maximize,
    RosenbrockAnneal,
    RosenbrockND,
    RosenbrockTensor,
    RosenbrockVec,
    maximize,
)

POINTS = [[1.0, 1.0], [-1.2, 1.0], [10.0, 5.0], [-4.0, 0.0]]


@pytest.mark.parametrize("point", POINTS)
def test_negated_ndarray(point):
    base = RosenbrockND()
    neg = maximize(base)
    x = np.array(point)
    assert neg.cost(x) == -base.cost(x)
    np.testing.assert_array_equal(neg.gradient(x), -base.gradient(x))
    np.testing.assert_array_equal(neg.hessian(x), -base.hessian(x))


@pytest.mark.parametrize("point", POINTS)
def test_negated_vec_keeps_lists(point):
    base = RosenbrockVec()
    neg = maximize(base)
    grad = neg.gradient(point)
    hess = neg.hessian(point)
    assert isinstance(grad, list) and isinstance(hess[0], list)
    assert grad == [-g for g in base.gradient(point)]
    assert hess == [[-v for v in row] for row in base.hessian(point)]


def test_negated_tensor():
    base = RosenbrockTensor()
    x = torch.tensor([0.5, 2.0], dtype=torch.float64)
    neg = maximize(base)
    assert neg.cost(x) == -base.cost(x)
    torch.testing.assert_close(neg.gradient(x), -base.gradient(x))
    torch.testing.assert_close(neg.hessian(x), -base.hessian(x))


def test_anneal_passes_through():
    base = RosenbrockAnneal(seed=0, lower=[-1.0, -1.0], upper=[1.0, 1.0])
    neg = maximize(base)
    assert isinstance(neg, Anneal)
    out = neg.anneal(np.zeros(2), 4.0)
    assert np.all(np.abs(out) <= 1.0)
    lower, upper = neg.bounds
    assert lower is base.lower and upper is base.upper


def test_only_inner_capabilities_are_exposed():
    class CostOnly:
        def cost(self, param):
            return float(np.sum(np.square(param)))

    neg = maximize(CostOnly())
    assert isinstance(neg, Maximize)
    assert neg.cost([1.0, 2.0]) == -5.0
    assert not isinstance(neg, Gradient)
    assert not isinstance(neg, Hessian)
    assert not isinstance(neg, Anneal)

    full = maximize(RosenbrockND())
    assert isinstance(full, Gradient) and isinstance(full, Hessian)
    assert not isinstance(full, Anneal)


def test_double_negation_restores_values():
    base = RosenbrockND()
    x = np.array([-1.2, 1.0])
    twice = maximize(maximize(base))
    assert twice.cost(x) == base.cost(x)
    np.testing.assert_array_equal(twice.gradient(x), base.gradient(x))
