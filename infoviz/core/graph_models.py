"""
Graph contracts consumed by neighbor traversal, plus the change
notification model hosts use to announce graph mutations.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

# Column index meaning "every column of the table changed"
ALL_COLUMNS = -1


class Node(Protocol):
    """Graph node. Any hashable object qualifies; no members are required."""


class Edge(Protocol):
    """An edge able to resolve the endpoint opposite a given node"""

    def adjacent_node(self, node: Node) -> Node:
        ...


@dataclass(frozen=True)
class SimpleEdge:
    """Edge between two endpoints"""
    source: Node
    target: Node

    def adjacent_node(self, node: Node) -> Node:
        """
        Return the endpoint opposite ``node``.

        Args:
            node: One of the edge endpoints

        Returns:
            The other endpoint (the node itself for a self-loop)

        Raises:
            ValueError: If node is not an endpoint of this edge
        """
        if node == self.source:
            return self.target
        if node == self.target:
            return self.source
        raise ValueError(f"Node {node!r} is not incident to edge {self!r}")


class EventType(Enum):
    """Kind of table modification carried by a graph change notification"""
    INSERT = "insert"
    DELETE = "delete"
    UPDATE = "update"


@dataclass(frozen=True)
class GraphChangeEvent:
    """A contiguous block of rows in one graph table changed"""
    graph: Any
    table: str
    start: int  # First changed row
    end: int  # Last changed row (inclusive)
    column: int  # Column index, or ALL_COLUMNS
    event_type: EventType

    @property
    def affects_all_columns(self) -> bool:
        return self.column == ALL_COLUMNS

    @property
    def row_count(self) -> int:
        return self.end - self.start + 1


class GraphListener(Protocol):
    """Receives graph change notifications"""

    def graph_changed(self, event: GraphChangeEvent) -> None:
        ...
