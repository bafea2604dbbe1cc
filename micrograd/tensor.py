import numbers

import numpy as np

from . import ops
from .value import Value, as_value, constant


class Tensor:
    """Fixed-length ordered sequence of scalar nodes.

    Elementwise operators broadcast a primitive across two equal-length
    tensors or a tensor and a scalar; reductions fold the elements into one
    node with Add/Mul. Every edge it builds comes from the operator set."""

    __array_ufunc__ = None  # numpy scalars defer to our reflected operators

    def __init__(self, values):
        # Plain numbers become constant leaves
        self._values = tuple(as_value(v) for v in values)

    @classmethod
    def from_numpy(cls, array):
        array = np.asarray(array, dtype=np.float64)
        if array.ndim != 1:
            raise ValueError(f"Tensor.from_numpy expects a 1-d array, but got shape {array.shape}")
        return cls(constant(x) for x in array)

    @property
    def data(self):
        """Snapshot of the forward values as a float64 array."""
        return np.array([v.value for v in self._values], dtype=np.float64)

    @property
    def grad(self):
        """Snapshot of the accumulated gradients as a float64 array."""
        return np.array([v.grad for v in self._values], dtype=np.float64)

    def __len__(self):
        return len(self._values)

    def __getitem__(self, idx):
        if isinstance(idx, slice):
            return Tensor(self._values[idx])
        return self._values[idx]

    def __iter__(self):
        return iter(self._values)

    def __repr__(self):
        return f"Tensor({self.data.tolist()})"

    def _elementwise(self, other, op):
        if isinstance(other, Tensor):
            if len(other) != len(self):
                raise ValueError(f"Tensor length mismatch: {len(self)} vs {len(other)}")
            return Tensor(op(a, b) for a, b in zip(self._values, other._values))
        if isinstance(other, (Value, numbers.Real)):
            # One shared node for the scalar, so its gradient sums over all elements
            other = as_value(other)
            return Tensor(op(a, other) for a in self._values)
        return NotImplemented

    def __add__(self, other):
        return self._elementwise(other, ops.add)

    def __radd__(self, other):
        return self._elementwise(other, lambda a, b: ops.add(b, a))

    def __sub__(self, other):
        return self._elementwise(other, ops.sub)

    def __rsub__(self, other):
        return self._elementwise(other, lambda a, b: ops.sub(b, a))

    def __mul__(self, other):
        return self._elementwise(other, ops.mul)

    def __rmul__(self, other):
        return self._elementwise(other, lambda a, b: ops.mul(b, a))

    def __truediv__(self, other):
        return self._elementwise(other, ops.div)

    def __rtruediv__(self, other):
        return self._elementwise(other, lambda a, b: ops.div(b, a))

    def __neg__(self):
        return self.apply(ops.neg)

    def apply(self, fn):
        """Map a unary operator (ops.relu, ops.tanh, ...) over the elements."""
        return Tensor(fn(v) for v in self._values)

    def sum(self):
        out = constant(0.0)
        for v in self._values:
            out = ops.add(out, v)
        return out

    def dot(self, other):
        if len(other) != len(self):
            raise ValueError(f"Tensor length mismatch: {len(self)} vs {len(other)}")
        out = constant(0.0)
        for a, b in zip(self._values, other):
            out = ops.add(out, ops.mul(a, b))
        return out

    def zero_grad(self):
        for v in self._values:
            v.zero_grad()


def flatten(nested):
    """Concatenate nested sequences of nodes (lists, tuples, Tensors) into one Tensor."""
    flat = []
    stack = [iter([nested])]
    while stack:
        try:
            item = next(stack[-1])
        except StopIteration:
            stack.pop()
            continue
        if isinstance(item, (Value, numbers.Real)):
            flat.append(item)
        elif isinstance(item, (str, bytes)):
            raise TypeError(f"flatten expects nodes or numbers, but got {type(item)}")
        else:
            stack.append(iter(item))
    return Tensor(flat)
