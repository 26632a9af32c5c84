from __future__ import annotations

import math

import pytest

from scalargrad import add, backward, leaf, mul, tanh, topological_sort, zero_grad


def build_chain(x_value: float = 1.0):
    x = leaf(x_value, label="x")
    y = mul(leaf(2.0, label="2"), x)
    z = add(y, leaf(3.0, label="3"))
    f = tanh(z)
    return x, f


def test_chain_rule_gradient():
    x, f = build_chain()

    backward(f)

    expected = (1 - math.tanh(2 * 1.0 + 3) ** 2) * 2
    assert x.grad == pytest.approx(expected, abs=1e-9)
    assert f.grad == 1.0


def test_shared_leaf_accumulates():
    x = leaf(3.0, label="x")
    y = add(x, x)

    backward(y)

    assert y.parents == (x, x)
    assert x.grad == 2.0


def test_square_accumulates_both_factors():
    x = leaf(3.0)
    backward(mul(x, x))
    assert x.grad == 6.0


def test_diamond_paths_add_up():
    # f = a*b + a  =>  df/da = b + 1, df/db = a
    a = leaf(2.0, label="a")
    b = leaf(-4.0, label="b")
    f = add(mul(a, b), a)

    backward(f)

    assert a.grad == -3.0
    assert b.grad == 2.0


def test_backward_twice_is_idempotent():
    x, f = build_chain(0.3)

    backward(f)
    first = [n.grad for n in topological_sort(f)]
    backward(f)
    second = [n.grad for n in topological_sort(f)]

    assert first == second


def test_zero_grad_resets_ancestry():
    x, f = build_chain()
    backward(f)

    zero_grad(f)

    assert all(n.grad == 0.0 for n in topological_sort(f))


def test_reset_is_scoped_to_root_ancestry():
    a = leaf(2.0, label="a")
    b = leaf(5.0, label="b")
    p = mul(a, b)
    backward(p)

    q = add(b, 1.0)
    backward(q)

    # a is not an ancestor of q, so its gradient from the first pass stays.
    assert a.grad == 5.0
    assert b.grad == 1.0


def test_topological_order_of_leaf():
    x = leaf(1.0)
    assert topological_sort(x) == [x]


def test_topological_order_parents_first():
    a = leaf(1.0, label="a")
    b = leaf(2.0, label="b")
    c = mul(a, b)
    d = add(c, a)
    e = tanh(add(d, c))

    order = topological_sort(e)
    position = {id(n): i for i, n in enumerate(order)}

    assert order[-1] is e
    assert len(order) == len(position) == 6
    for node in order:
        for parent in node.parents:
            assert position[id(parent)] < position[id(node)]


def test_topological_order_is_deterministic():
    a = leaf(1.0, label="a")
    b = leaf(2.0, label="b")
    f = add(mul(a, b), b)

    assert topological_sort(f) == topological_sort(f)
    assert topological_sort(f)[:2] == [a, b]


def test_equal_valued_leaves_kept_apart():
    a = leaf(2.0)
    b = leaf(2.0)
    f = mul(a, b)

    backward(f)

    assert len(topological_sort(f)) == 3
    assert a.grad == 2.0
    assert b.grad == 2.0


def test_long_sum_backpropagates():
    xs = [leaf(float(i)) for i in range(5000)]
    total = sum(xs)

    backward(total)

    assert total.data == sum(range(5000))
    assert all(x.grad == 1.0 for x in xs)


def test_deep_chain_order_and_reset():
    x = leaf(1.0, label="x")
    node = x
    for _ in range(6000):
        node = mul(node, 1.0)

    order = topological_sort(node)
    backward(node)
    zero_grad(node)

    # x, then one constant leaf and one product per step.
    assert len(order) == 1 + 2 * 6000
    assert order[0] is x
    assert order[-1] is node
    assert x.grad == 0.0
