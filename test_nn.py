import numpy as np
import pytest

from micrograd import Tensor
from micrograd.nn import MLP, Layer, Neuron, sum_squared_error
from micrograd.optim import SGD
from micrograd.train import XS, YS, Trainer


def test_neuron_parameters_and_range():
    n = Neuron(3, rng=np.random.default_rng(0))
    params = n.parameters()
    assert len(params) == 4
    assert all(-1.0 <= p.value < 1.0 for p in params)
    assert all(p.op == "leaf" for p in params)


def test_neuron_forward_is_tanh_of_affine():
    n = Neuron(2, rng=np.random.default_rng(1))
    x = [0.5, -2.0]
    expected = np.tanh(n.w.data @ np.array(x) + n.b.value)
    assert n(x).value == pytest.approx(expected)


def test_linear_neuron():
    n = Neuron(2, activation=None, rng=np.random.default_rng(1))
    out = n([1.0, 1.0])
    assert out.value == pytest.approx(n.w.data.sum() + n.b.value)


def test_neuron_rejects_wrong_input_length():
    n = Neuron(3)
    with pytest.raises(ValueError):
        n([1.0, 2.0])


def test_unknown_activation():
    with pytest.raises(ValueError):
        Neuron(2, activation="sigmoid")


def test_layer_outputs_one_value_per_neuron():
    layer = Layer(3, 5, rng=np.random.default_rng(0))
    out = layer([1.0, 2.0, 3.0])
    assert isinstance(out, Tensor)
    assert len(out) == 5
    assert len(layer.parameters()) == 5 * 4


def test_mlp_shape_and_parameter_count():
    mlp = MLP(3, [4, 4, 1], rng=np.random.default_rng(0))
    assert len(mlp.layers) == 3
    assert len(mlp.parameters()) == (3 + 1) * 4 + (4 + 1) * 4 + (4 + 1) * 1
    out = mlp([2.0, 3.0, -1.0])
    assert len(out) == 1


def test_mlp_is_reproducible_with_seed():
    a = MLP(3, [4, 1], rng=np.random.default_rng(42))
    b = MLP(3, [4, 1], rng=np.random.default_rng(42))
    assert [p.value for p in a.parameters()] == [p.value for p in b.parameters()]


def test_sum_squared_error():
    loss = sum_squared_error(Tensor([1.0, 2.0]), [0.0, 4.0])
    assert loss.value == 5.0
    with pytest.raises(ValueError):
        sum_squared_error(Tensor([1.0]), [1.0, 2.0])


def test_parameter_gradients_match_finite_differences():
    mlp = MLP(3, [4, 1], rng=np.random.default_rng(3))

    def loss_value():
        return sum_squared_error([mlp(x)[0] for x in XS], YS)

    loss = loss_value()
    mlp.zero_grad()
    loss.backward()

    eps = 1e-6
    for p in mlp.parameters()[::3]:
        analytic = p.grad
        p.adjust_val(eps)
        plus = loss_value().value
        p.adjust_val(-2 * eps)
        minus = loss_value().value
        p.adjust_val(eps)
        assert analytic == pytest.approx((plus - minus) / (2 * eps), rel=1e-4, abs=1e-6)


def test_training_reduces_loss():
    mlp = MLP(3, [4, 4, 1], rng=np.random.default_rng(0))
    trainer = Trainer(mlp, SGD(mlp.parameters(), lr=0.05), sum_squared_error)
    losses = trainer.train(XS, YS, epochs=300)
    assert len(losses) == 300
    assert losses[-1] < losses[0] / 2


def test_training_stops_at_target_loss():
    mlp = MLP(3, [4, 4, 1], rng=np.random.default_rng(0))
    trainer = Trainer(mlp, SGD(mlp.parameters(), lr=0.05), sum_squared_error)
    losses = trainer.train(XS, YS, epochs=1000, target_loss=1e9)
    assert len(losses) == 1
