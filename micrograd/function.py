import numpy as np

from .value import Value


class Context:
    """Stores intermediate values needed for gradient computation.
    Each operation (Function) gets its own context during forward pass."""

    def __init__(self, inputs=()):
        self.saved_values = ()  # Tuple of float64 numbers needed for backward pass
        self.inputs = inputs  # Arguments as passed to apply: nodes and plain constants

    def save_for_backward(self, *values):
        """Save numbers that will be needed during backward pass.
        Example: Exp saves its own output, which is also its derivative."""
        self.saved_values = values

    def input_values(self):
        """Current float64 value of every argument. Rules that depend on an
        operand read it here at backward time, so an `adjust_val` made after
        the forward pass is seen by the next backward."""
        return tuple(a._data if isinstance(a, Value) else np.float64(a) for a in self.inputs)


class Function:
    """Base class for all differentiable scalar operations.

    Subclasses set `tag` (the op recorded on the output node) and
    `label_format` (how the output label is derived from the argument
    labels), and implement static `forward(ctx, *raw)` and
    `backward(ctx, grad_output)`. `backward` returns one contribution per
    graph operand, in operand order."""

    tag = None
    label_format = None

    @staticmethod
    def forward(ctx, *args):
        raise NotImplementedError

    @staticmethod
    def backward(ctx, grad_output):
        raise NotImplementedError

    @classmethod
    def apply(cls, *args):
        """Executes the operation and records it in the graph.

        Args:
            args: Input nodes for the operation. Arguments that are not
                 nodes (e.g. the exponent of Pow) are passed to forward as
                 plain constants and do not become operands.

        Returns:
            A new node whose backward rule is bound to this operation"""

        ctx = Context(args)

        # Extract raw float64 numbers from inputs
        raw_inputs = [a._data if isinstance(a, Value) else np.float64(a) for a in args]

        # Floating-point faults (overflow, 0 ** -1, ...) yield inf/NaN silently
        with np.errstate(all="ignore"):
            out_data = cls.forward(ctx, *raw_inputs)

        out = Value(np.float64(out_data))
        # label is derived from the arguments on first access
        out._label = None
        out._label_source = (cls.label_format, args)
        out.op = cls.tag
        out.operands = tuple(a for a in args if isinstance(a, Value))

        def _backward(grad_output):
            """Local derivative rule: maps this node's gradient to one
            contribution per operand."""
            with np.errstate(all="ignore"):
                grads = cls.backward(ctx, grad_output)
            if not isinstance(grads, tuple):
                grads = (grads,)  # Handle single operand case
            return grads

        out._backward = _backward
        return out
