# scalargrad/__init__.py
# Reverse-mode automatic differentiation over scalar values.

from .node import Node, leaf
from .ops import add, mul, tanh, neg, sub, exp, relu
from .engine import topological_sort, zero_grad, backward
from .gradcheck import GradientCheck, numerical_gradient, check_gradient

__all__ = [
    # Node
    "Node",
    "leaf",
    # Operators
    "add",
    "mul",
    "tanh",
    "neg",
    "sub",
    "exp",
    "relu",
    # Engine
    "topological_sort",
    "zero_grad",
    "backward",
    # Gradient checking
    "GradientCheck",
    "numerical_gradient",
    "check_gradient",
]
