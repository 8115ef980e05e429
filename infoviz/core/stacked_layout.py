"""
Stacked area chart layout.

Computes one closed polygon per visible item: the item's values, one per
column, are stacked on top of the layers laid out before it. Each polygon
is stored as a flat list of 4*N coordinates, the bottom curve in reverse
column order followed by the top curve in column order, so the ring can be
drawn without further processing.

Every run writes three slots on each item: the current polygon, a start
snapshot (the previous current polygon) and an end snapshot (the new one),
which lets an animator interpolate between consecutive layouts.
"""
import math
from typing import Any, List, NamedTuple, Optional, Sequence, Union

from ..utils.log import get_logger
from .errors import ConfigurationError, LayoutDataError
from .geometry_models import Rectangle
from .stacked_models import (
    DEFAULT_PADDING,
    DEFAULT_THRESHOLD,
    ItemCollection,
    NumberRangeModel,
    Orientation,
    VisualItem,
    end_field,
    start_field,
)

logger = get_logger(__name__)


class _StackGeometry(NamedTuple):
    """Orientation-resolved layout parameters for one run"""
    time_min: float  # Time-axis coordinate of column 0
    time_step: float  # Signed time-axis distance between columns
    span: float  # Extent available to the stack
    base: float  # Stack-axis coordinate the first layer starts from
    far: float  # Stack-axis coordinate used for freshly allocated polygons
    mult: int  # +1 if the stack grows toward larger coordinates
    xbias: int  # Offset of the time coordinate within an (x, y) pair
    ybias: int  # Offset of the stack coordinate within an (x, y) pair


class StackedAreaChart:
    """
    Layout action computing a stacked area chart over a group of items.

    Args:
        group: Items to lay out (visible_items(), items(), layout_bounds)
        field: Name of the polygon slot holding the current polygon
        columns: Data columns, in time order, read for each stack point
        threshold: Layers spanning less than this are hidden
    """

    def __init__(
        self,
        group: ItemCollection,
        field: str,
        columns: Sequence[str],
        threshold: float = DEFAULT_THRESHOLD
    ):
        self._group = group
        self._field = field
        self._start = start_field(field)
        self._end = end_field(field)

        self._padding = DEFAULT_PADDING
        self._orientation = Orientation.BOTTOM_TOP
        self._normalized = False
        self._layout_bounds: Optional[Rectangle] = None
        self._range_model = NumberRangeModel(0.0, 1.0, 0.0, 1.0)

        self._columns: List[str] = []
        self._baseline: List[float] = []
        self._peaks: List[float] = []
        self._poly: List[float] = []

        self.columns = columns
        self.threshold = threshold

    # ------------------------------------------------------------------------
    # Configuration

    @property
    def group(self) -> ItemCollection:
        return self._group

    @property
    def field(self) -> str:
        return self._field

    @property
    def start_field(self) -> str:
        return self._start

    @property
    def end_field(self) -> str:
        return self._end

    @property
    def columns(self) -> List[str]:
        return list(self._columns)

    @columns.setter
    def columns(self, columns: Sequence[str]) -> None:
        columns = list(columns)
        if len(columns) < 2:
            raise ConfigurationError(
                f"Stacked area layout needs at least 2 columns, got {len(columns)}"
            )
        self._columns = columns
        n = len(columns)
        self._baseline = [0.0] * n
        self._peaks = [0.0] * n
        self._poly = [0.0] * (4 * n)
        logger.debug("Stacked area columns set to %s", columns)

    @property
    def normalized(self) -> bool:
        """True if each column is scaled independently to the full span"""
        return self._normalized

    @normalized.setter
    def normalized(self, value: bool) -> None:
        self._normalized = bool(value)

    @property
    def padding(self) -> float:
        """Fraction of the peak reserved as empty space above the stack"""
        return self._padding

    @padding.setter
    def padding(self, value: float) -> None:
        value = float(value)
        if not 0.0 <= value <= 1.0:
            raise ConfigurationError(f"Illegal padding percentage: {value}")
        self._padding = value

    @property
    def threshold(self) -> float:
        """Minimum layer span under which an item is hidden"""
        return self._threshold

    @threshold.setter
    def threshold(self, value: float) -> None:
        value = float(value)
        if not math.isfinite(value) or value < 0:
            raise ConfigurationError(f"Illegal visibility threshold: {value}")
        self._threshold = value

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @orientation.setter
    def orientation(self, value: Union[Orientation, str]) -> None:
        if not isinstance(value, Orientation):
            try:
                value = Orientation(value)
            except ValueError:
                raise ConfigurationError(f"Invalid orientation value: {value!r}") from None
        self._orientation = value

    @property
    def range_model(self) -> NumberRangeModel:
        """Range occupied by the value stack, updated on every run"""
        return self._range_model

    @property
    def layout_bounds(self) -> Rectangle:
        if self._layout_bounds is not None:
            return self._layout_bounds
        return self._group.layout_bounds

    def set_layout_bounds(self, bounds: Optional[Rectangle]) -> None:
        """Override the group's bounds; None reverts to the group's own"""
        self._layout_bounds = bounds

    # ------------------------------------------------------------------------
    # Layout

    def run(self, frac: float = 0.0) -> None:
        """
        Lay out every visible item of the group as a stacked layer.

        Args:
            frac: Animation fraction; unused by this layout

        Raises:
            ConfigurationError: If the layout bounds are degenerate
            LayoutDataError: If a visible item lacks a numeric column value
        """
        bounds = self.layout_bounds
        if bounds.is_degenerate():
            raise ConfigurationError(f"Degenerate layout bounds: {bounds}")

        geom = self._resolve_geometry(bounds)
        n = len(self._columns)

        # First walk: per-column totals and the value range
        max_value = self._compute_peaks()
        self._range_model.set_value_range(0.0, max_value, 0.0, max_value)

        baseline = self._baseline
        peaks = self._peaks
        poly = self._poly
        baseline[:] = [geom.base] * n

        # Second walk: earlier items end up on top of the stack
        laid_out = 0
        hidden = 0
        for item in reversed(list(self._group.items())):
            if not item.visible:
                continue

            # Bottom curve, reversed, from the current baseline
            for i in range(n - 1, -1, -1):
                poly[2 * (n - 1 - i) + geom.xbias] = geom.time_min + i * geom.time_step
                poly[2 * (n - 1 - i) + geom.ybias] = baseline[i]

            # Top curve, forward, after stacking this item's values
            height = 0.0
            for i, column in enumerate(self._columns):
                top = 2 * (n + i)
                value = _read_value(item, column)
                baseline[i] += geom.mult * geom.span * _fraction(value, peaks[i])
                poly[top + geom.xbias] = geom.time_min + i * geom.time_step
                poly[top + geom.ybias] = baseline[i]
                height = max(height, abs(poly[2 * (n - 1 - i) + geom.ybias] - poly[top + geom.ybias]))

            if height < self._threshold:
                item.visible = False
                hidden += 1

            item.set_position(0.0, 0.0)
            self._install_polygon(item, poly, geom)
            item.validated = False
            laid_out += 1

        logger.debug(
            "Stacked %d layers (%d hidden below threshold %s), value range 0..%s",
            laid_out, hidden, self._threshold, max_value
        )

    def _resolve_geometry(self, bounds: Rectangle) -> _StackGeometry:
        horiz, top, mult = self._orientation.axes()
        n = len(self._columns)

        if horiz:
            time_min = bounds.max_y
            time_step = (bounds.min_y - bounds.max_y) / (n - 1)
            span = bounds.width
            base = bounds.min_x if top else bounds.max_x
            far = bounds.max_x if top else bounds.min_x
        else:
            time_min = bounds.min_x
            time_step = (bounds.max_x - bounds.min_x) / (n - 1)
            span = bounds.height
            base = bounds.min_y if top else bounds.max_y
            far = base

        xbias = 1 if horiz else 0
        return _StackGeometry(
            time_min=time_min,
            time_step=time_step,
            span=span,
            base=base,
            far=far,
            mult=mult,
            xbias=xbias,
            ybias=1 - xbias,
        )

    def _compute_peaks(self) -> float:
        """
        Fill the peaks buffer and return the maximum stack value.

        Returns:
            Padded maximum column total, 1.0 when normalized, or 0 when the
            totals are undefined
        """
        peaks = self._peaks
        peaks[:] = [0.0] * len(peaks)

        for item in self._group.visible_items():
            for i, column in enumerate(self._columns):
                peaks[i] += _read_value(item, column)

        if any(math.isnan(p) for p in peaks):
            max_value = math.nan
        else:
            max_value = max(peaks)

        if self._normalized:
            # Each column keeps its own total as its scale
            max_value = 1.0
        else:
            max_value += self._padding * max_value
            peaks[:] = [max_value] * len(peaks)

        if math.isnan(max_value):
            logger.debug("Column totals are undefined; collapsing the stack")
            max_value = 0.0
        elif max_value == 0:
            logger.debug("All column totals are zero; collapsing the stack")
        return max_value

    def _install_polygon(self, item: VisualItem, poly: List[float], geom: _StackGeometry) -> None:
        current = self._polygon_slot(item, self._field, geom)
        start = self._polygon_slot(item, self._start, geom)
        end = self._polygon_slot(item, self._end, geom)
        start[:] = current
        current[:] = poly
        end[:] = poly

    def _polygon_slot(self, item: VisualItem, slot: str, geom: _StackGeometry) -> List[float]:
        """
        Get a polygon slot of the right size, allocating it if needed.

        New polygons are collapsed onto the far edge so that a layer that
        appears for the first time grows out of a flat line.
        """
        n = len(self._columns)
        polygon = item.get_polygon(slot)
        if polygon is None or len(polygon) != 4 * n:
            polygon = [geom.far] * (4 * n)
            for i in range(n):
                t = geom.time_min + i * geom.time_step
                polygon[2 * (n + i) + geom.xbias] = t
                polygon[2 * (n - 1 - i) + geom.xbias] = t
            item.set_polygon(slot, polygon)
        return polygon


def _read_value(item: VisualItem, column: str) -> float:
    try:
        raw: Any = item.get_value(column)
    except KeyError:
        raise LayoutDataError(
            f"Item {_describe(item)} has no value for column '{column}'"
        ) from None
    try:
        return float(raw)
    except (TypeError, ValueError) as e:
        raise LayoutDataError(
            f"Item {_describe(item)} has non-numeric value {raw!r} for column '{column}'"
        ) from e


def _fraction(value: float, peak: float) -> float:
    """Position of value within 0..peak; empty or undefined peaks contribute nothing"""
    if peak == 0 or not math.isfinite(peak):
        return 0.0
    return value / peak


def _describe(item: VisualItem) -> str:
    name = getattr(item, "name", None)
    return repr(name) if name is not None else repr(item)
