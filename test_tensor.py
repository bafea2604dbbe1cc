import numpy as np
import pytest

from micrograd import Tensor, constant, flatten, ops


def test_numbers_become_leaves():
    t = Tensor([1.0, 2.0, 3.0])
    assert len(t) == 3
    assert all(v.op == "leaf" for v in t)
    np.testing.assert_array_equal(t.data, [1.0, 2.0, 3.0])
    assert t.data.dtype == np.float64


def test_existing_nodes_are_shared_not_copied():
    a = constant(2.0)
    t = Tensor([a, 3.0])
    assert t[0] is a


def test_elementwise_with_tensor():
    t = Tensor([1.0, 2.0])
    u = Tensor([10.0, 20.0])
    np.testing.assert_array_equal((t + u).data, [11.0, 22.0])
    np.testing.assert_array_equal((t - u).data, [-9.0, -18.0])
    np.testing.assert_array_equal((t * u).data, [10.0, 40.0])
    np.testing.assert_allclose((u / t).data, [10.0, 10.0])


def test_length_mismatch_raises():
    with pytest.raises(ValueError):
        Tensor([1.0, 2.0]) + Tensor([1.0])
    with pytest.raises(ValueError):
        Tensor([1.0, 2.0]).dot(Tensor([1.0, 2.0, 3.0]))


def test_scalar_broadcast_accumulates_into_one_node():
    t = Tensor([1.0, 2.0, 3.0])
    s = constant(2.0)
    out = (t * s).sum()
    assert out.value == 12.0
    out.backward()
    assert s.grad == 6.0
    np.testing.assert_array_equal(t.grad, [2.0, 2.0, 2.0])


def test_reflected_scalar_operators():
    t = Tensor([1.0, 2.0])
    np.testing.assert_array_equal((1 + t).data, [2.0, 3.0])
    np.testing.assert_array_equal((1 - t).data, [0.0, -1.0])
    np.testing.assert_array_equal((3 * t).data, [3.0, 6.0])
    np.testing.assert_array_equal((-t).data, [-1.0, -2.0])
    np.testing.assert_allclose((1 / t).data, [1.0, 0.5])


def test_dot_builds_gradients():
    x = Tensor([1.0, 2.0])
    w = Tensor([3.0, 4.0])
    out = x.dot(w)
    assert out.value == 11.0
    out.backward()
    np.testing.assert_array_equal(x.grad, [3.0, 4.0])
    np.testing.assert_array_equal(w.grad, [1.0, 2.0])


def test_apply_unary_operator():
    t = Tensor([-1.0, 0.0, 2.0])
    np.testing.assert_array_equal(t.apply(ops.relu).data, [0.0, 0.0, 2.0])


def test_slicing_returns_tensor():
    t = Tensor([1.0, 2.0, 3.0])
    head = t[:2]
    assert isinstance(head, Tensor)
    assert head[1] is t[1]


def test_flatten_nested_sequences():
    a, b, c, d = (constant(float(i)) for i in range(4))
    flat = flatten([[a, b], Tensor([c]), [[d]]])
    assert isinstance(flat, Tensor)
    assert list(flat) == [a, b, c, d]


def test_flatten_rejects_strings():
    with pytest.raises(TypeError):
        flatten([["ab"]])


def test_from_numpy():
    t = Tensor.from_numpy(np.array([0.5, -0.5]))
    np.testing.assert_array_equal(t.data, [0.5, -0.5])
    with pytest.raises(ValueError):
        Tensor.from_numpy(np.zeros((2, 2)))


def test_zero_grad():
    t = Tensor([1.0, 2.0])
    t.sum().backward()
    t.zero_grad()
    np.testing.assert_array_equal(t.grad, [0.0, 0.0])
