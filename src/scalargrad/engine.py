"""
Reverse-mode backward pass over a graph of Nodes.

The graph is acyclic by construction (operators only consume nodes that already
exist), so none of the traversals here check for cycles. Traversals keep an
explicit stack, so graph depth is limited only by memory.
"""

from __future__ import annotations

import logging

from .node import Node

logger = logging.getLogger(__name__)


def topological_sort(root: Node) -> list[Node]:
    """
    Performs a topological sort of the graph ending at root using depth-first search.

    Each node's parents are visited, in their stored order, before the node itself
    is appended, so every node appears after all of its parents. Nodes are tracked
    by identity and visited once even when reachable along several paths.

    Args:
        root: The node whose ancestry is sorted.

    Returns:
        A list of nodes in topological order, ending with root. A leaf root
        yields [root].
    """
    topo_ordering: list[Node] = []

    # Set for O(1) membership lookup; Node hashes by identity.
    visited: set[Node] = {root}

    # Each entry holds a node and the iterator over its not yet visited parents.
    stack = [(root, iter(root.parents))]
    while stack:
        node, parents = stack[-1]
        for parent in parents:
            if parent not in visited:
                visited.add(parent)
                stack.append((parent, iter(parent.parents)))
                break
        else:
            # All parents emitted, so the node can follow them.
            stack.pop()
            topo_ordering.append(node)

    return topo_ordering


def zero_grad(root: Node) -> None:
    """
    Reset the gradient of root and every node reachable from it to zero.

    Only the ancestry of root is touched. Gradients left on other nodes by
    earlier passes rooted elsewhere are kept.
    """
    visited: set[Node] = {root}
    pending = [root]

    while pending:
        node = pending.pop()
        node.grad = 0.0
        for parent in node.parents:
            if parent not in visited:
                visited.add(parent)
                pending.append(parent)


def backward(root: Node) -> None:
    """
    Performs backward propagation to compute gradients for all nodes above root.

    The backpropagation process:
    1. Sort the ancestry of root topologically.
    2. Reset all gradients in it to zero so earlier passes do not leak in.
    3. Seed root's gradient with 1.0 (d(root)/d(root) = 1).
    4. Call each node's _backward in reverse topological order. By the time a
       node runs, every node consuming it has already pushed its contribution.

    After the call, n.grad holds d(root.data)/d(n.data) for every reachable node n.

    Args:
        root: The output node to differentiate.
    """
    topo_order = topological_sort(root)
    zero_grad(root)

    root.grad = 1.0
    logger.debug("backward from %r over %d nodes", root.label, len(topo_order))

    for node in reversed(topo_order):
        node._backward()
