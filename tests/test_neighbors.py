"""
Unit tests for neighbor traversal and graph models.
"""
import pytest
from infoviz.core.graph_models import (
    ALL_COLUMNS,
    EventType,
    GraphChangeEvent,
    SimpleEdge,
)
from infoviz.core.neighbors import NeighborIterator, iter_neighbors


@pytest.fixture
def star_edges():
    """Edges incident to 'hub', in both directions"""
    return [
        SimpleEdge("hub", "a"),
        SimpleEdge("b", "hub"),
        SimpleEdge("hub", "c"),
    ]


class TestSimpleEdge:
    """Tests for SimpleEdge"""

    def test_adjacent_node_both_directions(self):
        """Test opposite endpoint resolution"""
        edge = SimpleEdge("x", "y")
        assert edge.adjacent_node("x") == "y"
        assert edge.adjacent_node("y") == "x"

    def test_self_loop(self):
        """Test a self-loop resolves to the node itself"""
        assert SimpleEdge("x", "x").adjacent_node("x") == "x"

    def test_not_incident(self):
        """Test asking for the far end of an unrelated node"""
        with pytest.raises(ValueError):
            SimpleEdge("x", "y").adjacent_node("z")


class TestNeighborIterator:
    """Tests for NeighborIterator"""

    def test_yields_opposite_endpoints_in_edge_order(self, star_edges):
        """Test the produced sequence mirrors the edge sequence"""
        assert list(NeighborIterator("hub", star_edges)) == ["a", "b", "c"]

    def test_empty_edges(self):
        """Test traversal over no edges"""
        neighbors = NeighborIterator("hub", [])
        assert not neighbors.has_next()
        with pytest.raises(StopIteration):
            next(neighbors)

    def test_has_next_tracks_exhaustion(self, star_edges):
        """Test has_next is false exactly when the edges run out"""
        neighbors = NeighborIterator("hub", star_edges)
        seen = []
        while neighbors.has_next():
            seen.append(next(neighbors))
        assert seen == ["a", "b", "c"]
        assert not neighbors.has_next()

    def test_has_next_is_idempotent(self, star_edges):
        """Test repeated has_next calls do not skip edges"""
        neighbors = NeighborIterator("hub", star_edges)
        assert neighbors.has_next()
        assert neighbors.has_next()
        assert next(neighbors) == "a"

    def test_lazy_consumption(self):
        """Test edges are pulled one at a time"""
        pulled = []

        def edges():
            for edge in [SimpleEdge("p", 1), SimpleEdge("p", 2)]:
                pulled.append(edge)
                yield edge

        neighbors = NeighborIterator("p", edges())
        assert pulled == []
        assert next(neighbors) == 1
        assert len(pulled) == 1

    def test_not_restartable(self, star_edges):
        """Test a second pass yields nothing"""
        neighbors = iter_neighbors("hub", star_edges)
        assert list(neighbors) == ["a", "b", "c"]
        assert list(neighbors) == []

    def test_remove_unsupported(self, star_edges):
        """Test removal is rejected"""
        with pytest.raises(TypeError, match="removal"):
            NeighborIterator("hub", star_edges).remove()

    def test_pivot(self, star_edges):
        """Test the pivot is exposed"""
        assert iter_neighbors("hub", star_edges).pivot == "hub"


class TestGraphChangeEvent:
    """Tests for graph change notifications"""

    def test_all_columns(self):
        """Test the all-columns sentinel"""
        event = GraphChangeEvent(None, "nodes", 0, 4, ALL_COLUMNS, EventType.INSERT)
        assert event.affects_all_columns
        assert event.row_count == 5

    def test_single_column(self):
        """Test a single-column update"""
        event = GraphChangeEvent(None, "edges", 3, 3, 2, EventType.UPDATE)
        assert not event.affects_all_columns
        assert event.row_count == 1

    def test_listener_receives_event(self):
        """Test a listener implementing graph_changed"""
        received = []

        class Recorder:
            def graph_changed(self, event):
                received.append(event.event_type)

        Recorder().graph_changed(GraphChangeEvent(None, "nodes", 0, 0, ALL_COLUMNS, EventType.DELETE))
        assert received == [EventType.DELETE]
