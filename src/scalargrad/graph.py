from __future__ import annotations

from graphviz import Digraph

from .constants import RANK_DIR, RENDER_FORMAT
from .engine import topological_sort
from .node import Node


def collect_nodes_and_edges(root: Node) -> tuple[set[Node], set[tuple[Node, Node]]]:
    """
    Gather the nodes and edges of the graph ending at root.

    Args:
        root: The output node of the computational graph.

    Returns:
        A tuple containing:
        - nodes: Set of all nodes reachable from root, root included.
        - edges: Set of (input_node, output_node) tuples. An input used twice
          by the same operator gives a single edge.
    """
    nodes = topological_sort(root)
    edges = {(parent, node) for node in nodes for parent in node.parents}
    return set(nodes), edges


def _record(node: Node) -> str:
    return f"{node.label} | data {node.data:.4f} | grad {node.grad:.4f}"


def draw_graph(root: Node, fmt: str = RENDER_FORMAT) -> Digraph:
    """
    Build a Graphviz picture of the graph ending at root.

    Nodes are emitted in topological order, so the same graph always produces
    the same source. Every node is a record of its label, data and grad; a
    derived node is fed by a small box naming its operator, and its inputs
    point into that box.

    Args:
        root: The output node of the computational graph to visualize.
        fmt: Graphviz output format. Defaults to RENDER_FORMAT.

    Returns:
        A Digraph object representing the computational graph.
    """
    graph = Digraph(format=fmt, graph_attr={"rankdir": RANK_DIR})
    ids = {}

    for index, node in enumerate(topological_sort(root)):
        node_id = f"n{index}"
        ids[node] = node_id
        graph.node(node_id, label=_record(node), shape="record")

        if not node.parents:
            continue

        op_id = f"{node_id}_op"
        graph.node(op_id, label=node.op, shape="box")
        graph.edge(op_id, node_id)
        # Parents were numbered earlier; draw each distinct one once.
        for parent in dict.fromkeys(node.parents):
            graph.edge(ids[parent], op_id)

    return graph
