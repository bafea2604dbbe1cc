import numbers

import numpy as np

from .function import Function
from .value import Value, as_value


class Add(Function):
    """Addition, z = a + b, passes the gradient unchanged to both operands"""

    tag = "add"
    label_format = "{0} + {1}"

    @staticmethod
    def forward(ctx, a, b):
        return a + b

    @staticmethod
    def backward(ctx, grad_output):
        return grad_output, grad_output


class Mul(Function):
    """Multiplication operation implementing z = a * b

    Forward: z = a * b
    Backward: dz/da = b, dz/db = a (product rule)"""

    tag = "mul"
    label_format = "{0}*{1}"

    @staticmethod
    def forward(ctx, a, b):
        return a * b

    @staticmethod
    def backward(ctx, grad_output):
        a, b = ctx.input_values()
        return grad_output * b, grad_output * a


class Pow(Function):
    """Power with a constant exponent, z = a ** k

    Forward: z = a ** k
    Backward: dz/da = k * a ** (k - 1)

    k is a plain number, not a node, so only `a` is an operand. At a == 0
    with k < 1 the derivative diverges and the result is inf/NaN."""

    tag = "pow"
    label_format = "{0}^{1}"

    @staticmethod
    def forward(ctx, a, k):
        return np.power(a, k)

    @staticmethod
    def backward(ctx, grad_output):
        a, k = ctx.input_values()
        return grad_output * k * np.power(a, k - 1)


class Neg(Function):
    """Negation, z = -a, dz/da = -1"""

    tag = "neg"
    label_format = "-{0}"

    @staticmethod
    def forward(ctx, a):
        return -a

    @staticmethod
    def backward(ctx, grad_output):
        return -grad_output


class ReLU(Function):
    """Rectified linear unit, z = max(0, a)

    The gradient passes through where a > 0 and is exactly 0 otherwise,
    including the kink at a == 0."""

    tag = "relu"
    label_format = "relu({0})"

    @staticmethod
    def forward(ctx, a):
        return np.maximum(0.0, a)

    @staticmethod
    def backward(ctx, grad_output):
        (a,) = ctx.input_values()
        return grad_output if a > 0 else np.float64(0.0)


class Exp(Function):
    """Exponential, z = e ** a

    d/da e ** a = e ** a, which is the output itself, so we save the
    output rather than the input."""

    tag = "exp"
    label_format = "exp({0})"

    @staticmethod
    def forward(ctx, a):
        out = np.exp(a)
        ctx.save_for_backward(out)
        return out

    @staticmethod
    def backward(ctx, grad_output):
        (out,) = ctx.saved_values
        return grad_output * out


class Tanh(Function):
    """Hyperbolic tangent, dz/da = 1 - tanh(a) ** 2"""

    tag = "tanh"
    label_format = "tanh({0})"

    @staticmethod
    def forward(ctx, a):
        out = np.tanh(a)
        ctx.save_for_backward(out)
        return out

    @staticmethod
    def backward(ctx, grad_output):
        (out,) = ctx.saved_values
        return grad_output * (1.0 - out * out)


class Log(Function):
    """Natural logarithm, dz/da = 1 / a"""

    tag = "log"
    label_format = "log({0})"

    @staticmethod
    def forward(ctx, a):
        return np.log(a)

    @staticmethod
    def backward(ctx, grad_output):
        (a,) = ctx.input_values()
        return grad_output / a


# Functional interface. Binary ops accept plain numbers and wrap them as
# constant leaves.

def add(a, b):
    return Add.apply(as_value(a), as_value(b))


def mul(a, b):
    return Mul.apply(as_value(a), as_value(b))


def pow(a, k):
    if isinstance(k, Value) or not isinstance(k, numbers.Real):
        raise TypeError(f"pow exponent must be a plain number, but got {type(k)}")
    return Pow.apply(as_value(a), k)


def neg(a):
    return Neg.apply(as_value(a))


def relu(a):
    return ReLU.apply(as_value(a))


def exp(a):
    return Exp.apply(as_value(a))


def tanh(a):
    return Tanh.apply(as_value(a))


def log(a):
    return Log.apply(as_value(a))


def sub(a, b):
    """a - b, expressed as Add(a, Neg(b))."""
    return add(a, neg(b))


def div(a, b):
    """a / b, expressed as Mul(a, Pow(b, -1))."""
    return mul(a, pow(b, -1))
