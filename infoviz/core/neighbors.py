"""
Traversal from a pivot node over its incident edges.
"""
from typing import Iterable, Iterator, Optional

from .graph_models import Edge, Node

_EXHAUSTED = object()


class NeighborIterator(Iterator[Node]):
    """
    Lazy iterator over the neighbors of a pivot node.

    Each step consumes one incident edge and yields the endpoint opposite
    the pivot. The iterator is forward-only and cannot be restarted.
    Every edge must be incident to the pivot; this is not checked.
    """

    def __init__(self, pivot: Node, edges: Iterable[Edge]):
        self._pivot = pivot
        self._edges = iter(edges)
        self._lookahead: Optional[Edge] = None
        self._has_lookahead = False

    @property
    def pivot(self) -> Node:
        return self._pivot

    def __iter__(self) -> "NeighborIterator":
        return self

    def __next__(self) -> Node:
        if self._has_lookahead:
            edge = self._lookahead
            self._lookahead = None
            self._has_lookahead = False
        else:
            edge = next(self._edges)
        return edge.adjacent_node(self._pivot)

    def has_next(self) -> bool:
        """True while the underlying edge iterator has edges left"""
        if self._has_lookahead:
            return True
        edge = next(self._edges, _EXHAUSTED)
        if edge is _EXHAUSTED:
            return False
        self._lookahead = edge
        self._has_lookahead = True
        return True

    def remove(self) -> None:
        raise TypeError("NeighborIterator does not support removal")


def iter_neighbors(pivot: Node, edges: Iterable[Edge]) -> NeighborIterator:
    """
    Iterate the nodes on the far side of ``edges`` relative to ``pivot``.

    Args:
        pivot: Node every edge is incident to
        edges: Incident edges

    Returns:
        NeighborIterator yielding one node per edge, in edge order
    """
    return NeighborIterator(pivot, edges)
