import logging

import numpy as np

logger = logging.getLogger("micrograd.engine")


def topological_order(root):
    """Return every node reachable from `root`, each exactly once, with every
    operand placed before all of the nodes that consume it.

    Post-order DFS driven by an explicit stack, so deep chains (long sums
    in a training loss) do not hit the interpreter recursion limit. The
    visited set is keyed by node identity."""
    topo = []
    visited = set()
    stack = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            topo.append(node)
            continue
        if node in visited:
            continue
        visited.add(node)
        # Revisit this node once all of its operands have been emitted
        stack.append((node, True))
        for operand in reversed(node.operands):
            if operand not in visited:
                stack.append((operand, False))
    return topo


def backward(root):
    """Computes d(root)/d(node) for every node reachable from `root` and adds
    it into each node's `grad`.

    Gradients are first gathered per pass, then added to the persistent
    accumulators, so running backward twice without zeroing adds the same
    amounts twice. Nodes not reachable from `root` are left untouched."""
    topo = topological_order(root)
    logger.debug("backward pass over %d nodes from a %r node", len(topo), root.op)

    # Seed: the derivative of the root with respect to itself
    pass_grads = {root: np.float64(1.0)}

    # Consumers before operands, so each node's gradient is complete when it runs.
    # Sums that overflow or mix infinities yield inf/NaN silently.
    with np.errstate(all="ignore"):
        for node in reversed(topo):
            grad_output = pass_grads.pop(node, np.float64(0.0))
            node._grad = node._grad + grad_output
            contributions = node._backward(grad_output)
            for operand, g in zip(node.operands, contributions):
                pass_grads[operand] = pass_grads.get(operand, np.float64(0.0)) + g


def zero_grad(nodes):
    """Reset the gradient of every node in `nodes`."""
    for node in nodes:
        node.zero_grad()
