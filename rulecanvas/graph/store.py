"""Node & edge store.

The store is an arena of nodes and edges keyed by stable ids. It is
mutated only by dispatching command objects, which keeps every change
atomic and synchronous and gives hosts a single seam for undo/redo or
change notification.

Rejected commands (illegal edges, unknown ids, deleting the trigger)
leave the store untouched and return ``None``/``False`` instead of
raising.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from rulecanvas.graph.connections import is_allowed
from rulecanvas.graph.models import Edge, Node, NodeKind, Position

logger = logging.getLogger(__name__)

# =============================================================================
# COMMANDS
# =============================================================================


@dataclass(frozen=True)
class CreateNode:
    kind: NodeKind
    type_key: str
    position: Position = Position()
    config: Mapping[str, Any] | None = field(default=None, hash=False)


@dataclass(frozen=True)
class DeleteNode:
    node_id: str


@dataclass(frozen=True)
class SetConfig:
    """Merge ``partial`` into the node's config."""

    node_id: str
    partial: Mapping[str, Any] = field(hash=False)


@dataclass(frozen=True)
class SetType:
    """Change the node's type key. Always resets config to ``{}``."""

    node_id: str
    type_key: str


@dataclass(frozen=True)
class MoveNode:
    node_id: str
    position: Position


@dataclass(frozen=True)
class CreateEdge:
    source_id: str
    target_id: str


@dataclass(frozen=True)
class DeleteEdge:
    edge_id: str


@dataclass(frozen=True)
class Select:
    """Select a node, or clear the selection with ``None``."""

    node_id: str | None


Command = CreateNode | DeleteNode | SetConfig | SetType | MoveNode | CreateEdge | DeleteEdge | Select

Listener = Callable[[Command], None]


# =============================================================================
# STORE
# =============================================================================


class GraphStore:
    """Owns all nodes, edges and the selection of one automation graph.

    Args:
        deduplicate_edges: Ignore a CreateEdge whose source -> target pair
            already has an edge.
    """

    def __init__(self, *, deduplicate_edges: bool = True) -> None:
        self.deduplicate_edges = deduplicate_edges
        self._nodes: dict[str, Node] = {}
        self._edges: dict[str, Edge] = {}
        self._selected_id: str | None = None
        self._id_counters: dict[NodeKind, int] = {kind: 0 for kind in NodeKind}
        self._seq = 0
        self._listeners: list[Listener] = []
        self._handlers: dict[type, Callable[[Any], Any]] = {
            CreateNode: self._create_node,
            DeleteNode: self._delete_node,
            SetConfig: self._set_config,
            SetType: self._set_type,
            MoveNode: self._move_node,
            CreateEdge: self._create_edge,
            DeleteEdge: self._delete_edge,
            Select: self._select,
        }

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, command: Command) -> Any:
        """Apply a command.

        Returns:
            The new id for CreateNode/CreateEdge (``None`` if rejected),
            otherwise whether the command changed the store.

        Raises:
            TypeError: If ``command`` is not a store command.
        """
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported graph command: {type(command).__name__}")

        result = handler(command)
        if result is None or result is False:
            logger.debug("Rejected %s", command)
            return result

        for listener in list(self._listeners):
            listener(command)
        return result

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every applied command. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Command shortcuts
    # ------------------------------------------------------------------

    def create_node(
        self,
        kind: NodeKind,
        type_key: str,
        *,
        position: Position | None = None,
        config: Mapping[str, Any] | None = None,
    ) -> str | None:
        return self.dispatch(CreateNode(kind, type_key, position or Position(), config))

    def delete_node(self, node_id: str) -> bool:
        return self.dispatch(DeleteNode(node_id))

    def set_node_config(self, node_id: str, partial: Mapping[str, Any]) -> bool:
        return self.dispatch(SetConfig(node_id, partial))

    def set_node_type(self, node_id: str, type_key: str) -> bool:
        return self.dispatch(SetType(node_id, type_key))

    def move_node(self, node_id: str, position: Position) -> bool:
        return self.dispatch(MoveNode(node_id, position))

    def create_edge(self, source_id: str, target_id: str) -> str | None:
        return self.dispatch(CreateEdge(source_id, target_id))

    def delete_edge(self, edge_id: str) -> bool:
        return self.dispatch(DeleteEdge(edge_id))

    def select(self, node_id: str | None) -> bool:
        return self.dispatch(Select(node_id))

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def get_node(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def nodes(self, kind: NodeKind | None = None) -> list[Node]:
        """Nodes in creation order, optionally filtered by kind."""
        return [n for n in self._nodes.values() if kind is None or n.kind == kind]

    def edges(self) -> list[Edge]:
        return list(self._edges.values())

    def get_edge(self, edge_id: str) -> Edge | None:
        return self._edges.get(edge_id)

    def incoming(self, node_id: str) -> list[Edge]:
        return [e for e in self._edges.values() if e.target_id == node_id]

    def outgoing(self, node_id: str) -> list[Edge]:
        return [e for e in self._edges.values() if e.source_id == node_id]

    @property
    def trigger(self) -> Node | None:
        for node in self._nodes.values():
            if node.kind == NodeKind.TRIGGER:
                return node
        return None

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def selected(self) -> Node | None:
        return self._nodes.get(self._selected_id) if self._selected_id else None

    def snapshot(self) -> GraphStore:
        """Independent deep copy (without listeners)."""
        copy = GraphStore(deduplicate_edges=self.deduplicate_edges)
        copy._nodes = {node_id: node.clone() for node_id, node in self._nodes.items()}
        copy._edges = dict(self._edges)
        copy._selected_id = self._selected_id
        copy._id_counters = dict(self._id_counters)
        copy._seq = self._seq
        return copy

    def __len__(self) -> int:
        return len(self._nodes)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _create_node(self, command: CreateNode) -> str | None:
        if command.kind == NodeKind.TRIGGER and self.trigger is not None:
            logger.warning("Graph already has a trigger node; refusing a second one")
            return None

        self._id_counters[command.kind] += 1
        self._seq += 1
        node_id = f"{command.kind.value}-{self._id_counters[command.kind]}"
        self._nodes[node_id] = Node(
            id=node_id,
            kind=command.kind,
            type_key=command.type_key,
            config=dict(command.config or {}),
            position=command.position,
            seq=self._seq,
        )
        return node_id

    def _delete_node(self, command: DeleteNode) -> bool:
        node = self._nodes.get(command.node_id)
        if node is None or node.kind == NodeKind.TRIGGER:
            return False

        del self._nodes[node.id]
        self._edges = {
            edge_id: edge
            for edge_id, edge in self._edges.items()
            if edge.source_id != node.id and edge.target_id != node.id
        }
        if self._selected_id == node.id:
            self._selected_id = None
        return True

    def _set_config(self, command: SetConfig) -> bool:
        node = self._nodes.get(command.node_id)
        if node is None:
            return False
        node.config = {**node.config, **command.partial}
        return True

    def _set_type(self, command: SetType) -> bool:
        node = self._nodes.get(command.node_id)
        if node is None:
            return False
        node.type_key = command.type_key
        node.config = {}
        return True

    def _move_node(self, command: MoveNode) -> bool:
        node = self._nodes.get(command.node_id)
        if node is None:
            return False
        node.position = command.position
        return True

    def _create_edge(self, command: CreateEdge) -> str | None:
        source = self._nodes.get(command.source_id)
        target = self._nodes.get(command.target_id)
        if source is None or target is None:
            return None
        if not is_allowed(source.kind, target.kind):
            logger.debug(
                "Connection %s -> %s not allowed",
                source.kind.value,
                target.kind.value,
            )
            return None

        if self.deduplicate_edges and any(
            e.source_id == source.id and e.target_id == target.id for e in self._edges.values()
        ):
            return None

        base_id = f"e-{source.id}-{target.id}"
        if base_id in self._edges:
            suffix = 2
            while f"{base_id}-{suffix}" in self._edges:
                suffix += 1
            base_id = f"{base_id}-{suffix}"

        self._edges[base_id] = Edge(id=base_id, source_id=source.id, target_id=target.id)
        return base_id

    def _delete_edge(self, command: DeleteEdge) -> bool:
        return self._edges.pop(command.edge_id, None) is not None

    def _select(self, command: Select) -> bool:
        if command.node_id is not None and command.node_id not in self._nodes:
            return False
        if command.node_id == self._selected_id:
            return False
        self._selected_id = command.node_id
        return True
