"""Connection rules between node kinds.

Legality depends only on the kinds at both ends. The table keeps graphs
layered and acyclic: triggers are roots, conditions gate actions, and
actions only chain forward to other actions.
"""

from __future__ import annotations

from rulecanvas.graph.models import NodeKind

ALLOWED_TARGETS: dict[NodeKind, frozenset[NodeKind]] = {
    NodeKind.TRIGGER: frozenset({NodeKind.ACTION, NodeKind.CONDITION}),
    NodeKind.CONDITION: frozenset({NodeKind.ACTION}),
    NodeKind.ACTION: frozenset({NodeKind.ACTION}),
}


def is_allowed(source_kind: NodeKind, target_kind: NodeKind) -> bool:
    """Whether an edge from a ``source_kind`` node to a ``target_kind`` node is legal."""
    return target_kind in ALLOWED_TARGETS.get(source_kind, frozenset())
