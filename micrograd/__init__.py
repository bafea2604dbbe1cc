# micrograd: scalar reverse-mode automatic differentiation

from .value import Value, constant
from .engine import backward, topological_order, zero_grad
from .ops import add, mul, pow, neg, relu, exp, tanh, log, sub, div
from .tensor import Tensor, flatten
from .trace import trace, graph_stats

__all__ = [
    # Nodes
    'Value',
    'constant',
    # Engine
    'backward',
    'topological_order',
    'zero_grad',
    # Operators
    'add', 'mul', 'pow', 'neg', 'relu', 'exp', 'tanh', 'log', 'sub', 'div',
    # Vectors
    'Tensor',
    'flatten',
    # Inspection
    'trace',
    'graph_stats',
]
