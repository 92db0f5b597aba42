import copy

import numpy as np
import pytest
import torch

from argbench.errors import InvalidInputError
from argbench.objectives import (
    Anneal,
    CostFunction,
    Gradient,
    Hessian,
    RosenbrockAnneal,
    RosenbrockND,
    RosenbrockTensor,
    RosenbrockVec,
)

POINTS = [[10.0, 5.0], [5.0, 2.0], [0.0, 1.0], [-4.0, 0.0], [-10.0, -2.0]]


def torch_rosenbrock(x, a=1.0, b=100.0):
    return (a - x[0]) ** 2 + b * (x[1] - x[0] ** 2) ** 2


# ----------------------------------------------------------------------
# All containers share one formula set
# ----------------------------------------------------------------------


@pytest.mark.parametrize("point", POINTS)
def test_representations_agree(point):
    vec, nd, ten = RosenbrockVec(), RosenbrockND(), RosenbrockTensor()
    t = torch.tensor(point, dtype=torch.float64)

    assert vec.cost(point) == nd.cost(np.array(point)) == ten.cost(t)
    np.testing.assert_array_equal(vec.gradient(point), nd.gradient(np.array(point)))
    np.testing.assert_array_equal(ten.gradient(t).numpy(), nd.gradient(np.array(point)))
    np.testing.assert_array_equal(np.array(vec.hessian(point)), nd.hessian(np.array(point)))
    np.testing.assert_array_equal(ten.hessian(t).numpy(), nd.hessian(np.array(point)))


def test_vec_returns_plain_lists():
    f = RosenbrockVec()
    grad = f.gradient([0.0, 1.0])
    hess = f.hessian([0.0, 1.0])
    assert isinstance(grad, list) and len(grad) == 2
    assert isinstance(hess, list) and all(isinstance(row, list) and len(row) == 2 for row in hess)
    assert isinstance(f.cost([0.0, 1.0]), float)


def test_ndarray_returns_arrays():
    f = RosenbrockND()
    assert f.gradient(np.array([0.0, 1.0])).shape == (2,)
    assert f.hessian(np.array([0.0, 1.0])).shape == (2, 2)


def test_objectives_are_values():
    f = RosenbrockND(a=2.0, b=50.0)
    assert copy.copy(f) == f
    assert RosenbrockVec() == RosenbrockVec(1.0, 100.0)
    with pytest.raises(AttributeError):
        f.a = 3.0


# ----------------------------------------------------------------------
# Tensor representation
# ----------------------------------------------------------------------


@pytest.mark.parametrize("point", POINTS)
def test_tensor_gradient_matches_autograd(point):
    x = torch.tensor(point, dtype=torch.float64, requires_grad=True)
    torch_rosenbrock(x).backward()
    ours = RosenbrockTensor().gradient(x)
    torch.testing.assert_close(ours, x.grad)


@pytest.mark.parametrize("point", POINTS)
def test_tensor_hessian_matches_autograd(point):
    x = torch.tensor(point, dtype=torch.float64)
    expected = torch.autograd.functional.hessian(torch_rosenbrock, x)
    torch.testing.assert_close(RosenbrockTensor().hessian(x), expected)


def test_tensor_keeps_dtype_and_skips_autograd():
    x = torch.tensor([0.5, -0.5], dtype=torch.float32, requires_grad=True)
    f = RosenbrockTensor()
    grad = f.gradient(x)
    assert grad.dtype == torch.float32
    assert grad.device == x.device
    assert not grad.requires_grad
    assert f.hessian(x).dtype == torch.float32


def test_tensor_integer_input_gives_float64():
    grad = RosenbrockTensor().gradient(torch.tensor([1, 2]))
    assert grad.dtype == torch.float64


def test_tensor_rejects_other_containers():
    with pytest.raises(InvalidInputError):
        RosenbrockTensor().cost([1.0, 1.0])
    with pytest.raises(InvalidInputError):
        RosenbrockTensor().gradient(torch.zeros(3))


# ----------------------------------------------------------------------
# Capabilities
# ----------------------------------------------------------------------


def test_capabilities_by_representation():
    for f in (RosenbrockVec(), RosenbrockND(), RosenbrockTensor()):
        assert isinstance(f, CostFunction)
        assert isinstance(f, Gradient)
        assert isinstance(f, Hessian)
        assert not isinstance(f, Anneal)
    assert isinstance(RosenbrockAnneal(seed=0), Anneal)
