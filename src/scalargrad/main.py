from __future__ import annotations

import argparse
import logging
import math

from .constants import GRADIENT_TOLERANCE, NUMERIC_EPSILON
from .engine import backward
from .gradcheck import GradientCheck, numerical_gradient
from .node import Node, leaf

logger = logging.getLogger(__name__)


def positive_float(text: str) -> float:
    """argparse type for strictly positive floats."""
    value = float(text)
    if not value > 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {text}")
    return value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="scalargrad",
        description="Backpropagate through f(x) = tanh(2x + 3) and compare "
        "the gradient with a central-difference estimate.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--x", type=float, default=1.0, help="input value")
    parser.add_argument(
        "--eps",
        type=positive_float,
        default=NUMERIC_EPSILON,
        help="finite-difference step",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=GRADIENT_TOLERANCE,
        help="largest accepted |backprop - numerical| difference",
    )
    parser.add_argument(
        "--render",
        metavar="PREFIX",
        default=None,
        help="render the computation graph with graphviz to "
        "PREFIX-before-backprop and PREFIX-after-backprop",
    )
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def build_graph(x: Node) -> Node:
    """
    Build x -> y = 2x -> z = y + 3 -> f = tanh(z).

    Args:
        x: Input node.

    Returns:
        The output node f.
    """
    two = leaf(2.0, label="2")
    three = leaf(3.0, label="3")

    y = two * x
    y.label = "y"
    z = y + three
    z.label = "z"
    f = z.tanh()
    f.label = "f"

    return f


def render(root: Node, path: str) -> None:
    """Render the graph to path, warning instead of failing when graphviz is missing."""
    from graphviz import ExecutableNotFound

    from .graph import draw_graph

    try:
        output = draw_graph(root).render(path, cleanup=True)
    except ExecutableNotFound:
        print("Warning: graphviz executable not available, skipping visualization.")
        return
    logger.info("graph written to %s", output)


def run(
    x_value: float, eps: float, render_prefix: str | None = None
) -> tuple[Node, GradientCheck]:
    """
    Backpropagate through the demo graph and cross-check against finite differences.

    Args:
        x_value: Input value.
        eps: Finite-difference step.
        render_prefix: When set, the graph is rendered before and after backprop
                       to render_prefix-before-backprop / render_prefix-after-backprop.

    Returns:
        The output node and the comparison of both gradients.
    """
    x = leaf(x_value, label="x")
    f = build_graph(x)

    if render_prefix:
        render(f, f"{render_prefix}-before-backprop")

    backward(f)

    if render_prefix:
        render(f, f"{render_prefix}-after-backprop")

    got = x.grad
    want = numerical_gradient(lambda xx: math.tanh(2 * xx + 3), x_value, eps)

    return f, GradientCheck(got, want, abs(got - want))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    _, check = run(args.x, args.eps, args.render)

    print(
        f"x.grad (backprop)={check.analytic:.6f}, "
        f"(numerical)={check.numerical:.6f}, err={check.error:.6f}"
    )

    return 0 if check.error <= args.tolerance else 1


if __name__ == "__main__":
    raise SystemExit(main())
