"""Graph data model: node kinds, nodes and edges."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NodeKind(str, Enum):
    """Role of a node in an automation graph."""

    TRIGGER = "trigger"
    CONDITION = "condition"
    ACTION = "action"


@dataclass(frozen=True)
class Position:
    """Canvas coordinates. Only ``y`` matters for linearization."""

    x: float = 0.0
    y: float = 0.0

    def below(self, offset: float) -> Position:
        return Position(self.x, self.y + offset)


@dataclass
class Node:
    """A typed, configurable graph node.

    Attributes:
        id: Stable node id (never reused within a store).
        kind: Trigger, condition or action.
        type_key: Key into the type registry.
        config: Raw config values, keyed by field name.
        position: Canvas position.
        seq: Creation order within the store, used for tie-breaking.
    """

    id: str
    kind: NodeKind
    type_key: str
    config: dict[str, Any] = field(default_factory=dict)
    position: Position = field(default_factory=Position)
    seq: int = 0

    def clone(self) -> Node:
        return Node(
            id=self.id,
            kind=self.kind,
            type_key=self.type_key,
            config=copy.deepcopy(self.config),
            position=self.position,
            seq=self.seq,
        )


@dataclass(frozen=True)
class Edge:
    """Directed link from ``source_id`` to ``target_id``."""

    id: str
    source_id: str
    target_id: str
