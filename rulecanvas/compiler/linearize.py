"""Linearization: 2-D canvas layout -> one ordered action sequence.

Actions are ordered by vertical position, ties broken by creation order.
Edges are deliberately not consulted; they are visual guides only. This
is the single place to change if ordering should follow edges from the
trigger instead.
"""

from __future__ import annotations

from collections.abc import Callable

from rulecanvas.graph.models import Node, NodeKind
from rulecanvas.graph.store import GraphStore

Linearizer = Callable[[GraphStore], list[Node]]


def linearize(graph: GraphStore) -> list[Node]:
    """Action nodes top to bottom."""
    return sorted(
        graph.nodes(NodeKind.ACTION),
        key=lambda node: (node.position.y, node.seq),
    )
