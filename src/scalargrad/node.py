from __future__ import annotations

from typing import Callable


class Node:
    """
    Represents a scalar value in a computational graph for automatic differentiation.

    Each node stores a numerical value (data), the gradient accumulated during the
    last backward pass (grad), and the nodes it was derived from (parents). Nodes
    produced by an operator carry a _backward closure that pushes this node's
    gradient into its parents; leaves carry a no-op.

    Nodes compare and hash by identity, so two nodes holding the same value are
    still distinct members of a graph.
    """

    def __init__(
        self,
        data: float,
        parents: tuple[Node, ...] = (),
        op: str = "",
        label: str = "",
    ) -> None:
        """
        Initialize a Node in the computational graph.

        Args:
            data: The numerical value stored in this node.
            parents: Nodes this node was computed from, in operator argument order.
                     Duplicates are kept, e.g. x + x has parents (x, x).
            op: The operation that produced this node (e.g. "+", "*", "" for leaves).
            label: Human-readable label for printing and visualization.

        Raises:
            TypeError: If data is not an int or a float.
        """
        if not isinstance(data, (int, float)):
            raise TypeError(
                f"Node only accepts int or float data, but got {type(data).__name__}"
            )

        self._data = float(data)
        self.grad = 0.0
        self.parents = tuple(parents)
        self.op = op
        self.label = label
        self._backward: Callable[[], None] = lambda: None

    @property
    def data(self) -> float:
        """The forward value. Read-only: recomputing means building new nodes."""
        return self._data

    def __repr__(self) -> str:
        return f"Node(label={self.label!r}, data={self.data}, grad={self.grad})"

    def backward(self) -> None:
        """
        Compute d(self)/d(n) for every node n reachable from this node.

        Shorthand for scalargrad.engine.backward(self).
        """
        from .engine import backward

        backward(self)

    def zero_grad(self) -> None:
        """Reset the gradient of this node and all of its ancestors to zero."""
        from .engine import zero_grad

        zero_grad(self)


def leaf(value: float, label: str = "") -> Node:
    """
    Create a leaf node holding a raw value.

    Args:
        value: The numerical value of the leaf.
        label: Optional label for printing and visualization.

    Returns:
        A Node with no parents, zero gradient and a no-op backward rule.
    """
    return Node(value, label=label)
