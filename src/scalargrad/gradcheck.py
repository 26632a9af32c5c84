from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .constants import NUMERIC_EPSILON
from .engine import backward
from .node import Node, leaf


@dataclass(frozen=True)
class GradientCheck:
    """
    Result of comparing a backpropagated gradient with a numerical estimate.

    Attributes:
        analytic: Gradient computed by the backward pass.
        numerical: Central-difference estimate of the same derivative.
        error: Absolute difference between the two.
    """

    analytic: float
    numerical: float
    error: float


def numerical_gradient(
    f: Callable[[float], float], x: float, eps: float = NUMERIC_EPSILON
) -> float:
    """
    Estimate df/dx at x with the central difference (f(x + eps) - f(x - eps)) / (2 eps).

    Args:
        f: Scalar function of one variable.
        x: Point at which to differentiate.
        eps: Step size. Defaults to NUMERIC_EPSILON.

    Returns:
        The finite-difference estimate of the derivative.

    Raises:
        ValueError: If eps is not positive.
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")
    return (f(x + eps) - f(x - eps)) / (2 * eps)


def check_gradient(
    build: Callable[[Node], Node], x: float, eps: float = NUMERIC_EPSILON
) -> GradientCheck:
    """
    Cross-check the backward pass of a one-input graph against finite differences.

    build is called once with a leaf holding x to run the backward pass, and
    again with fresh leaves at x +/- eps, reading only the output's data.

    Args:
        build: Function mapping an input node to the output node of the graph.
        x: Value of the input.
        eps: Finite-difference step size.

    Returns:
        A GradientCheck with both gradients and their absolute difference.
    """
    x_node = leaf(x, label="x")
    backward(build(x_node))
    analytic = x_node.grad

    numerical = numerical_gradient(lambda v: build(leaf(v, label="x")).data, x, eps)

    return GradientCheck(analytic, numerical, abs(analytic - numerical))
