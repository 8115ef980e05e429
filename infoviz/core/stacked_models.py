"""
Data models for the stacked area layout.
Pure Python classes - the host's scene graph only needs to satisfy the
VisualItem and item-collection contracts modelled here.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Protocol, Tuple

from .geometry_models import Rectangle

# Fraction of the peak reserved as headroom above the stack
DEFAULT_PADDING = 0.05

# Layers spanning less than this are hidden
DEFAULT_THRESHOLD = 1.0

START_SUFFIX = ":start"
END_SUFFIX = ":end"


def start_field(field_name: str) -> str:
    """Name of the slot holding the pre-layout snapshot of ``field_name``"""
    return field_name + START_SUFFIX


def end_field(field_name: str) -> str:
    """Name of the slot holding the post-layout snapshot of ``field_name``"""
    return field_name + END_SUFFIX


class Orientation(Enum):
    """Direction in which stacked layers grow"""
    BOTTOM_TOP = "bottom_top"  # Time runs left to right, stack grows upward
    TOP_BOTTOM = "top_bottom"  # Time runs left to right, stack grows downward
    LEFT_RIGHT = "left_right"  # Time runs bottom to top, stack grows rightward
    RIGHT_LEFT = "right_left"  # Time runs bottom to top, stack grows leftward

    @property
    def is_horizontal(self) -> bool:
        """True if the stack grows along the x axis"""
        return self in (Orientation.LEFT_RIGHT, Orientation.RIGHT_LEFT)

    @property
    def grows_from_top(self) -> bool:
        """True if the stack grows toward increasing coordinates"""
        return self in (Orientation.TOP_BOTTOM, Orientation.LEFT_RIGHT)

    @property
    def multiplier(self) -> int:
        return 1 if self.grows_from_top else -1

    def axes(self) -> Tuple[bool, bool, int]:
        """(horizontal, grows_from_top, multiplier) in one call"""
        return self.is_horizontal, self.grows_from_top, self.multiplier


@dataclass
class VisualItem:
    """
    A visual record the layout writes polygons into.

    ``values`` holds the numeric data columns, ``polygons`` the named
    polygon slots (flat [x0, y0, x1, y1, ...] lists).
    """
    values: Dict[str, Any] = field(default_factory=dict)
    polygons: Dict[str, List[float]] = field(default_factory=dict)
    name: Optional[str] = None
    visible: bool = True
    x: float = 0.0
    y: float = 0.0
    validated: bool = True

    def get_value(self, column: str) -> Any:
        return self.values[column]

    def get_polygon(self, slot: str) -> Optional[List[float]]:
        return self.polygons.get(slot)

    def set_polygon(self, slot: str, polygon: List[float]) -> None:
        self.polygons[slot] = polygon

    def set_position(self, x: float, y: float) -> None:
        self.x = x
        self.y = y


class ItemCollection(Protocol):
    """Contract for the group of items a layout runs over"""

    layout_bounds: Rectangle

    def visible_items(self) -> Iterator[VisualItem]:
        ...

    def items(self) -> Iterator[VisualItem]:
        ...


class VisualTable:
    """In-memory item collection keeping items in insertion order"""

    def __init__(self, layout_bounds: Rectangle, items: Optional[List[VisualItem]] = None):
        self.layout_bounds = layout_bounds
        self._items: List[VisualItem] = list(items) if items else []

    def add_item(self, item: VisualItem) -> VisualItem:
        self._items.append(item)
        return item

    def add_row(self, values: Dict[str, Any], name: Optional[str] = None) -> VisualItem:
        """
        Append a new item built from a row of column values.

        Args:
            values: Column name to numeric value
            name: Optional label for the item

        Returns:
            The created VisualItem
        """
        return self.add_item(VisualItem(values=dict(values), name=name))

    def items(self) -> Iterator[VisualItem]:
        return iter(self._items)

    def visible_items(self) -> Iterator[VisualItem]:
        return (item for item in self._items if item.visible)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> VisualItem:
        return self._items[index]


@dataclass
class NumberRangeModel:
    """Value range occupied by the stack, read by axis consumers"""
    low: float = 0.0
    high: float = 1.0
    value_low: float = 0.0
    value_high: float = 1.0

    def set_value_range(self, low: float, high: float, value_low: float, value_high: float) -> None:
        self.low = low
        self.high = high
        self.value_low = value_low
        self.value_high = value_high

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.low, self.high, self.value_low, self.value_high)
