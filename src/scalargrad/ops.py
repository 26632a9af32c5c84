"""
Operators that build new nodes in the computational graph.

Every operator follows the same contract:
    - compute the output's data from the inputs' data,
    - record the inputs as the output's parents, in argument order,
    - bind a _backward closure on the output that accumulates the local
      derivative times the output's gradient into each input's gradient.

Gradients are always accumulated with += so that a node feeding several
operations (or the same operation twice) collects every contribution.
Adding an operator means adding one function here; the engine is unaware of
which operators exist.
"""

from __future__ import annotations

import math

from .node import Node


def _as_node(value: Node | float) -> Node:
    """Return value unchanged if it is a Node, otherwise wrap it as a constant leaf."""
    if isinstance(value, Node):
        return value
    if isinstance(value, (int, float)):
        return Node(value, label=f"{value:g}")
    raise TypeError(f"unsupported operand type for Node: {type(value).__name__}")


def _name(node: Node) -> str:
    return node.label or f"{node.data:g}"


def add(a: Node | float, b: Node | float) -> Node:
    """
    Add two nodes.

    The derivative of a sum is 1 with respect to each operand, so the output
    gradient flows to both inputs unchanged.

    Args:
        a: Left operand.
        b: Right operand.

    Returns:
        A new Node holding a.data + b.data.
    """
    a, b = _as_node(a), _as_node(b)
    res = Node(a.data + b.data, (a, b), "+", f"({_name(a)} + {_name(b)})")

    def _backward():
        a.grad += res.grad
        b.grad += res.grad

    res._backward = _backward

    return res


def mul(a: Node | float, b: Node | float) -> Node:
    """
    Multiply two nodes.

    Uses the product rule: d(ab)/da = b and d(ab)/db = a.

    Args:
        a: Left operand.
        b: Right operand.

    Returns:
        A new Node holding a.data * b.data.
    """
    a, b = _as_node(a), _as_node(b)
    res = Node(a.data * b.data, (a, b), "*", f"({_name(a)} * {_name(b)})")

    def _backward():
        a.grad += res.grad * b.data
        b.grad += res.grad * a.data

    res._backward = _backward

    return res


def tanh(a: Node | float) -> Node:
    """
    Hyperbolic tangent of a node.

    The derivative is expressed through the output itself,
    d(tanh(x))/dx = 1 - tanh(x)**2, so nothing is recomputed during backward.
    Large inputs saturate to +/-1 and their gradient to 0.

    Args:
        a: Input node.

    Returns:
        A new Node holding tanh(a.data).
    """
    a = _as_node(a)
    res = Node(math.tanh(a.data), (a,), "tanh", f"tanh({_name(a)})")

    def _backward():
        a.grad += res.grad * (1 - res.data**2)

    res._backward = _backward

    return res


def neg(a: Node | float) -> Node:
    """Negate a node."""
    a = _as_node(a)
    res = Node(-a.data, (a,), "neg", f"-{_name(a)}")

    def _backward():
        a.grad -= res.grad

    res._backward = _backward

    return res


def sub(a: Node | float, b: Node | float) -> Node:
    """
    Subtract b from a.

    Returns:
        A new Node holding a.data - b.data.
    """
    a, b = _as_node(a), _as_node(b)
    res = Node(a.data - b.data, (a, b), "-", f"({_name(a)} - {_name(b)})")

    def _backward():
        a.grad += res.grad
        b.grad -= res.grad

    res._backward = _backward

    return res


def exp(a: Node | float) -> Node:
    """
    Exponential of a node. Its derivative is the output itself.

    Inputs past the float range give inf, as IEEE exp does.
    """
    a = _as_node(a)
    try:
        val = math.exp(a.data)
    except OverflowError:
        val = math.inf
    res = Node(val, (a,), "exp", f"exp({_name(a)})")

    def _backward():
        a.grad += res.grad * res.data

    res._backward = _backward

    return res


def relu(a: Node | float) -> Node:
    """Rectified linear unit. The gradient at exactly 0 is taken as 0."""
    a = _as_node(a)
    res = Node(max(0.0, a.data), (a,), "relu", f"relu({_name(a)})")

    def _backward():
        a.grad += res.grad * (res.data > 0)

    res._backward = _backward

    return res


# Bind Python operators to Node.
Node.__add__ = lambda self, other: add(self, other)
Node.__radd__ = lambda self, other: add(other, self)
Node.__sub__ = lambda self, other: sub(self, other)
Node.__rsub__ = lambda self, other: sub(other, self)
Node.__mul__ = lambda self, other: mul(self, other)
Node.__rmul__ = lambda self, other: mul(other, self)
Node.__neg__ = lambda self: neg(self)
Node.tanh = lambda self: tanh(self)
Node.exp = lambda self: exp(self)
Node.relu = lambda self: relu(self)
