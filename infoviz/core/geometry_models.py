"""
Data models for points, rectangles and line intersection results.
Pure Python classes with no rendering dependencies.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from .errors import ConfigurationError


class Point(NamedTuple):
    """A 2D point"""
    x: float
    y: float


class LineRelation(Enum):
    """Outcome of a line/line test that did not yield a single point"""
    NO_INTERSECTION = "no_intersection"  # Segments would cross outside their extent
    PARALLEL = "parallel"  # Never meet
    COINCIDENT = "coincident"  # Lie on the same line


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle described by its extremes"""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self):
        extents = (self.min_x, self.min_y, self.max_x, self.max_y)
        if not all(math.isfinite(v) for v in extents):
            raise ConfigurationError(f"Non-finite rectangle extents: {extents}")
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ConfigurationError(
                f"Invalid rectangle extents: ({self.min_x}, {self.min_y}) "
                f"-> ({self.max_x}, {self.max_y})"
            )

    @classmethod
    def from_bounds(cls, x: float, y: float, width: float, height: float) -> "Rectangle":
        """
        Build a rectangle from its origin and size.

        Args:
            x: Minimum x coordinate
            y: Minimum y coordinate
            width: Width (must be >= 0)
            height: Height (must be >= 0)

        Returns:
            Rectangle spanning (x, y) to (x + width, y + height)
        """
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def is_degenerate(self) -> bool:
        """True if the rectangle has zero width or zero height"""
        return self.width == 0 or self.height == 0
