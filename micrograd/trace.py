"""
Inspection helpers for a computation graph rooted at one node.
"""

from collections import Counter

from .engine import topological_order


def trace(root):
    """
    Render the graph below `root` as an indented tree, one line per node:

        [ tanh(n) | val = 0.7071 | grad = 1.0 ]
        |   [ n | val = 0.8814 | grad = 0.5 ]
        ...

    A node reached through several consumers is printed only the first time.
    """
    lines = []
    seen = set()
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if node in seen:
            continue
        seen.add(node)
        lines.append("|   " * depth + str(node))
        for operand in reversed(node.operands):
            stack.append((operand, depth + 1))
    return "\n".join(lines)


def graph_stats(root):
    """
    Count the nodes and edges reachable from `root`.

    Returns:
        dict with 'nodes', 'edges', 'leaves' and 'operations' (op tag -> count)
    """
    topo = topological_order(root)
    op_counter = Counter(node.op for node in topo)
    return {
        'nodes': len(topo),
        'edges': sum(len(node.operands) for node in topo),
        'leaves': op_counter.get("leaf", 0),
        'operations': dict(op_counter),
    }
