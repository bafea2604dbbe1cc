import numpy as np

from . import ops
from .tensor import Tensor, flatten
from .value import constant

ACTIVATIONS = {
    "tanh": ops.tanh,
    "relu": ops.relu,
    None: lambda v: v,
}


class Module:
    """Base class for anything that owns trainable leaf nodes."""

    def parameters(self):
        return []

    def zero_grad(self):
        for p in self.parameters():
            p.zero_grad()

    def __call__(self, x):
        return self.forward(x)

    def forward(self, x):
        raise NotImplementedError


class Neuron(Module):
    """
    A single unit: activation(w . x + b)
    """
    def __init__(self, nin, activation="tanh", rng=None):
        if activation not in ACTIVATIONS:
            raise ValueError(f"Unknown activation {activation!r}, expected one of {list(ACTIVATIONS)}")
        rng = rng if rng is not None else np.random.default_rng()
        self.activation = activation
        # weights and bias start uniform in [-1, 1)
        self.w = Tensor(constant(x, label=f"w{i}") for i, x in enumerate(rng.uniform(-1.0, 1.0, size=nin)))
        self.b = constant(rng.uniform(-1.0, 1.0), label="b")

    def forward(self, x):
        x = x if isinstance(x, Tensor) else Tensor(x)
        if len(x) != len(self.w):
            raise ValueError(f"Neuron expects {len(self.w)} inputs, but got {len(x)}")
        act = self.w.dot(x) + self.b
        return ACTIVATIONS[self.activation](act)

    def parameters(self):
        return list(self.w) + [self.b]

    def __repr__(self):
        return f"Neuron(nin={len(self.w)}, activation={self.activation!r})"


class Layer(Module):
    """
    nout neurons that all read the same input
    """
    def __init__(self, nin, nout, **kwargs):
        self.neurons = [Neuron(nin, **kwargs) for _ in range(nout)]

    def forward(self, x):
        x = x if isinstance(x, Tensor) else Tensor(x)
        return Tensor(n(x) for n in self.neurons)

    def parameters(self):
        return list(flatten(n.parameters() for n in self.neurons))

    def __repr__(self):
        return f"Layer([{', '.join(str(n) for n in self.neurons)}])"


class MLP(Module):
    """
    Multi-layer perceptron: nin inputs, then one layer per entry of nouts
    """
    def __init__(self, nin, nouts, activation="tanh", rng=None):
        rng = rng if rng is not None else np.random.default_rng()
        sizes = [nin] + list(nouts)
        self.layers = [
            Layer(sizes[i], sizes[i + 1], activation=activation, rng=rng)
            for i in range(len(nouts))
        ]

    def forward(self, x):
        for layer in self.layers:
            x = layer(x)
        return x

    def parameters(self):
        return [p for layer in self.layers for p in layer.parameters()]

    def __repr__(self):
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"


def sum_squared_error(ypred, ys):
    """Sum over samples of (prediction - target) ** 2."""
    ypred, ys = list(ypred), list(ys)
    if len(ypred) != len(ys):
        raise ValueError(f"Got {len(ypred)} predictions for {len(ys)} targets")
    loss = constant(0.0)
    for yout, ygt in zip(ypred, ys):
        loss = loss + (yout - ygt) ** 2
    return loss
