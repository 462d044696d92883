"""Automation graph: data model, connection rules and the node/edge store."""

from __future__ import annotations

from rulecanvas.graph.connections import ALLOWED_TARGETS, is_allowed
from rulecanvas.graph.models import Edge, Node, NodeKind, Position
from rulecanvas.graph.store import (
    Command,
    CreateEdge,
    CreateNode,
    DeleteEdge,
    DeleteNode,
    GraphStore,
    MoveNode,
    Select,
    SetConfig,
    SetType,
)

__all__ = [
    "ALLOWED_TARGETS",
    "Command",
    "CreateEdge",
    "CreateNode",
    "DeleteEdge",
    "DeleteNode",
    "Edge",
    "GraphStore",
    "MoveNode",
    "Node",
    "NodeKind",
    "Position",
    "Select",
    "SetConfig",
    "SetType",
    "is_allowed",
]
