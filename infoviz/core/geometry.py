"""
Geometry kernels used when clipping edges against node bounds.
Pure functions - no state, no rendering imports.
"""
from typing import List, Union

from .geometry_models import Point, Rectangle, LineRelation


def intersect_line_line(
    a1: Point,
    a2: Point,
    b1: Point,
    b2: Point
) -> Union[Point, LineRelation]:
    """
    Intersect segment a1-a2 with segment b1-b2.

    Args:
        a1: Start of the first segment
        a2: End of the first segment
        b1: Start of the second segment
        b2: End of the second segment

    Returns:
        The intersection point, or a LineRelation describing why there is none
    """
    a1x, a1y = a1
    a2x, a2y = a2
    b1x, b1y = b1
    b2x, b2y = b2

    ua_t = (b2x - b1x) * (a1y - b1y) - (b2y - b1y) * (a1x - b1x)
    ub_t = (a2x - a1x) * (a1y - b1y) - (a2y - a1y) * (a1x - b1x)
    u_b = (b2y - b1y) * (a2x - a1x) - (b2x - b1x) * (a2y - a1y)

    if u_b != 0:
        ua = ua_t / u_b
        ub = ub_t / u_b
        if 0 <= ua <= 1 and 0 <= ub <= 1:
            return Point(a1x + ua * (a2x - a1x), a1y + ua * (a2y - a1y))
        return LineRelation.NO_INTERSECTION

    if ua_t == 0 or ub_t == 0:
        return LineRelation.COINCIDENT
    return LineRelation.PARALLEL


def intersect_line_rectangle(a1: Point, a2: Point, rect: Rectangle) -> List[Point]:
    """
    Intersect a segment with the sides of a rectangle.

    Sides are tested in the order top, right, bottom, left (screen
    coordinates, y grows downward) and the scan stops at two hits. Corner
    hits are not deduplicated.

    Args:
        a1: Segment start
        a2: Segment end
        rect: Rectangle to test against

    Returns:
        Up to two intersection points, in scan order
    """
    top_left = Point(rect.min_x, rect.min_y)
    top_right = Point(rect.max_x, rect.min_y)
    bottom_right = Point(rect.max_x, rect.max_y)
    bottom_left = Point(rect.min_x, rect.max_y)

    sides = [
        (top_left, top_right),
        (top_right, bottom_right),
        (bottom_right, bottom_left),
        (bottom_left, top_left),
    ]

    points: List[Point] = []
    for start, end in sides:
        hit = intersect_line_line(start, end, a1, a2)
        if isinstance(hit, Point):
            points.append(hit)
            if len(points) == 2:
                break
    return points


def center_x(rect: Rectangle) -> float:
    return rect.min_x + rect.width / 2


def center_y(rect: Rectangle) -> float:
    return rect.min_y + rect.height / 2


def center_of(rect: Rectangle) -> Point:
    """Center point of a rectangle"""
    return Point(center_x(rect), center_y(rect))
