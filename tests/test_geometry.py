"""
Unit tests for geometry kernels.
"""
import pytest
from infoviz.core.errors import ConfigurationError
from infoviz.core.geometry_models import Point, Rectangle, LineRelation
from infoviz.core.geometry import (
    intersect_line_line,
    intersect_line_rectangle,
    center_of,
    center_x,
    center_y,
)


@pytest.fixture
def square():
    """100 x 100 rectangle at the origin"""
    return Rectangle(0, 0, 100, 100)


class TestRectangle:
    """Tests for Rectangle model"""

    def test_width_and_height(self):
        """Test derived dimensions"""
        rect = Rectangle(10, 20, 40, 80)
        assert rect.width == 30
        assert rect.height == 60

    def test_from_bounds(self):
        """Test construction from origin and size"""
        rect = Rectangle.from_bounds(5, 10, 20, 30)
        assert rect == Rectangle(5, 10, 25, 40)

    def test_inverted_extents_rejected(self):
        """Test that min > max is a configuration error"""
        with pytest.raises(ConfigurationError):
            Rectangle(10, 0, 0, 10)
        with pytest.raises(ValueError):
            Rectangle(0, 10, 10, 0)

    @pytest.mark.parametrize("extents", [
        (float("nan"), 0, 10, 10),
        (0, 0, float("inf"), 10),
        (0, float("-inf"), 10, 10),
        (0, 0, 10, float("nan")),
    ])
    def test_non_finite_extents_rejected(self, extents):
        """Test that NaN or infinite extents are a configuration error"""
        with pytest.raises(ConfigurationError):
            Rectangle(*extents)

    def test_degenerate(self):
        """Test zero-area detection"""
        assert Rectangle(0, 0, 0, 10).is_degenerate()
        assert Rectangle(0, 0, 10, 0).is_degenerate()
        assert not Rectangle(0, 0, 10, 10).is_degenerate()


class TestLineLineIntersection:
    """Tests for segment/segment intersection"""

    def test_crossing_segments(self):
        """Test the diagonals of a square meet at its center"""
        hit = intersect_line_line(Point(0, 0), Point(10, 10), Point(0, 10), Point(10, 0))
        assert hit == Point(5, 5)

    def test_point_uses_first_segment_parameter(self):
        """Test that the returned point lies on the first segment"""
        hit = intersect_line_line(Point(0, 0), Point(4, 0), Point(1, -1), Point(1, 1))
        assert hit == Point(pytest.approx(1.0), pytest.approx(0.0))

    def test_touching_at_endpoint(self):
        """Test that endpoints count as intersections"""
        hit = intersect_line_line(Point(0, 0), Point(10, 0), Point(10, 0), Point(10, 10))
        assert hit == Point(10, 0)

    def test_no_intersection_outside_extent(self):
        """Test lines that would cross beyond the segment ends"""
        result = intersect_line_line(Point(0, 0), Point(1, 1), Point(0, 10), Point(1, 9))
        assert result is LineRelation.NO_INTERSECTION

    def test_parallel(self):
        """Test parallel, non-collinear segments"""
        result = intersect_line_line(Point(0, 0), Point(10, 0), Point(0, 5), Point(10, 5))
        assert result is LineRelation.PARALLEL

    def test_coincident(self):
        """Test collinear segments"""
        result = intersect_line_line(Point(0, 0), Point(10, 0), Point(5, 0), Point(20, 0))
        assert result is LineRelation.COINCIDENT

    def test_arguments_not_mutated(self):
        """Test that the result is returned rather than written to an argument"""
        a1, a2 = Point(0, 0), Point(10, 10)
        b1, b2 = Point(0, 10), Point(10, 0)
        intersect_line_line(a1, a2, b1, b2)
        assert (a1, a2, b1, b2) == (Point(0, 0), Point(10, 10), Point(0, 10), Point(10, 0))


class TestLineRectangleIntersection:
    """Tests for segment/rectangle intersection"""

    def test_horizontal_line_crosses_right_then_left(self, square):
        """Test scan order top, right, bottom, left"""
        points = intersect_line_rectangle(Point(-1, 50), Point(101, 50), square)
        assert points == [Point(100, 50), Point(0, 50)]

    def test_vertical_line_crosses_top_then_bottom(self, square):
        """Test a vertical line hits top before bottom"""
        points = intersect_line_rectangle(Point(30, 150), Point(30, -50), square)
        assert len(points) == 2
        assert points[0] == (pytest.approx(30), pytest.approx(0))
        assert points[1] == (pytest.approx(30), pytest.approx(100))

    def test_segment_inside_has_no_points(self, square):
        """Test a segment strictly inside the rectangle"""
        assert intersect_line_rectangle(Point(10, 10), Point(90, 80), square) == []

    def test_segment_outside_has_no_points(self, square):
        """Test a segment that misses the rectangle"""
        assert intersect_line_rectangle(Point(-10, -10), Point(-5, 200), square) == []

    @pytest.mark.parametrize("outside", [
        Point(50, -20),
        Point(150, 40),
        Point(60, 180),
        Point(-30, 70),
        Point(130, -40),
    ])
    def test_one_endpoint_outside_gives_one_point(self, square, outside):
        """Test that a segment leaving the rectangle crosses exactly one side"""
        center = Point(50, 50)
        points = intersect_line_rectangle(center, outside, square)

        assert len(points) == 1
        x, y = points[0]
        on_vertical_side = x in (pytest.approx(0), pytest.approx(100)) and 0 <= y <= 100
        on_horizontal_side = y in (pytest.approx(0), pytest.approx(100)) and 0 <= x <= 100
        assert on_vertical_side or on_horizontal_side

    def test_corner_hit_not_deduplicated(self, square):
        """Test a diagonal through two corners reports each corner per side"""
        points = intersect_line_rectangle(Point(-10, -10), Point(110, 110), square)
        # Top side catches (0, 0), right side catches (100, 100); scan stops at two
        assert points == [Point(0, 0), Point(100, 100)]

    def test_edge_along_side_is_coincident_not_counted(self, square):
        """Test a segment lying on the top side only hits the perpendicular sides"""
        points = intersect_line_rectangle(Point(-10, 0), Point(110, 0), square)
        assert points == [Point(100, 0), Point(0, 0)]


class TestCenter:
    """Tests for rectangle center helpers"""

    def test_center_of(self):
        """Test center point"""
        assert center_of(Rectangle(10, 20, 30, 60)) == Point(20, 40)

    def test_center_components(self):
        """Test single-axis center helpers"""
        rect = Rectangle.from_bounds(-10, 5, 20, 10)
        assert center_x(rect) == 0
        assert center_y(rect) == 10
