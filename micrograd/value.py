import numbers

import numpy as np


class Value:
    """A scalar node in the computation graph.

    Holds the forward value, the gradient accumulated by backward passes and
    a record of how it was produced (op tag, ordered operands and the bound
    derivative rule). Nodes compare and hash by identity so a shared
    subexpression is always the same graph node."""

    __array_ufunc__ = None  # numpy scalars defer to our reflected operators

    def __init__(self, data, label=None):
        if not isinstance(data, numbers.Real):
            raise TypeError(f"Value only accepts real numbers, but got {type(data)}")

        self._data = np.float64(data)
        self._grad = np.float64(0.0)
        self.op = "leaf"
        self.operands = ()
        self._label = label if label is not None else f"{self._data:g}"
        self._label_source = None  # (format, args) for op nodes, see `label`
        self._backward = lambda grad_output: ()  # Set by Function.apply

    @property
    def value(self):
        return float(self._data)

    @property
    def grad(self):
        return float(self._grad)

    @property
    def label(self):
        """Human readable name. Op nodes derive theirs from their operands
        on first access, e.g. "x1*w1 + b"."""
        if self._label is None:
            from .engine import topological_order
            # operands first, so every format sees finished operand labels
            for node in topological_order(self):
                if node._label is None:
                    fmt, args = node._label_source
                    node._label = fmt.format(*(a.label if isinstance(a, Value) else f"{a:g}" for a in args))
        return self._label

    @label.setter
    def label(self, label):
        self._label = label

    def zero_grad(self):
        """Reset the gradient of this node only."""
        self._grad = np.float64(0.0)

    def adjust_val(self, delta):
        """Shift the forward value in place. Meant for leaf parameters during
        a gradient-descent step; downstream nodes keep their old values."""
        with np.errstate(all="ignore"):
            self._data = self._data + np.float64(delta)

    def backward(self):
        from .engine import backward
        backward(self)

    def __repr__(self):
        return f"Value({self.value}, grad={self.grad}, op={self.op!r})"

    def __str__(self):
        return f"[ {self.label} | val = {self.value} | grad = {self.grad} ]"

    # Operator overloading, plain numbers become constant leaves
    def __add__(self, other):
        from .ops import add
        return add(self, other)

    def __radd__(self, other):
        from .ops import add
        return add(other, self)

    def __sub__(self, other):
        from .ops import sub
        return sub(self, other)

    def __rsub__(self, other):
        from .ops import sub
        return sub(other, self)

    def __mul__(self, other):
        from .ops import mul
        return mul(self, other)

    def __rmul__(self, other):
        from .ops import mul
        return mul(other, self)

    def __truediv__(self, other):
        from .ops import div
        return div(self, other)

    def __rtruediv__(self, other):
        from .ops import div
        return div(other, self)

    def __neg__(self):
        from .ops import neg
        return neg(self)

    def __pow__(self, exponent):
        from .ops import pow
        return pow(self, exponent)

    def relu(self):
        from .ops import relu
        return relu(self)

    def exp(self):
        from .ops import exp
        return exp(self)

    def tanh(self):
        from .ops import tanh
        return tanh(self)

    def log(self):
        from .ops import log
        return log(self)


def constant(v, label=None):
    """Create a leaf node holding `v`."""
    return Value(v, label=label)


def as_value(x):
    """Return `x` if it is already a node, otherwise wrap it as a constant leaf."""
    return x if isinstance(x, Value) else Value(x)
