"""Trimmed and offset cubic Bezier segments linked into a chain."""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from offcurve.arc_length import ArcLengthTable
from offcurve.bezier import BezierCurve, CubicBezier
from offcurve.consts import DEFAULT_SETTINGS, CurveSettings
from offcurve.errors import InvalidDistanceError
from offcurve.geom import Vec3Like


class CurveSegment:
    """One node of a curve chain: a cubic Bezier with trims, an offset and a successor.

    The head segment of a chain stands for the whole curve. All distances are
    arc lengths. `start_distance` and `end_distance` trim the underlying Bezier
    at its native start and end, `offset` displaces every evaluated position
    along the horizontal normal. The control points, the raw length and the
    arc-length table never change after construction and may be shared between
    duplicated segments; everything else is per-segment state.

    A segment whose effective length is zero is kept as a pass-through:
    start queries and distance evaluation skip it in favour of `next`.

    Degenerate input is not guarded. Coincident control points give a zero
    length curve with a constant position, and a vertical tangent gives a zero
    horizontal normal, so offsets vanish at such points.
    """

    # pylint: disable=too-many-instance-attributes

    def __init__(self, bezier: CubicBezier, settings: CurveSettings = DEFAULT_SETTINGS):
        self.bezier: CubicBezier = bezier
        self.settings: CurveSettings = settings
        self.table: ArcLengthTable = ArcLengthTable.build(bezier, settings.table_size)
        self.raw_length: float = self.table.total_length
        self.start_distance: float = 0.0
        self.end_distance: float = 0.0
        self.start_param: float = 0.0
        self.end_param: float = 1.0
        self.offset: float = 0.0
        self.next: Optional[CurveSegment] = None

    @classmethod
    def from_quadratic(
        cls, p0: Vec3Like, p1: Vec3Like, p2: Vec3Like, settings: CurveSettings = DEFAULT_SETTINGS
    ) -> CurveSegment:
        """Create a segment from a quadratic Bezier, degree-elevated to cubic."""
        return cls(CubicBezier.from_quadratic(p0, p1, p2), settings)

    @classmethod
    def from_points(
        cls, p0: Vec3Like, p1: Vec3Like, p2: Vec3Like, p3: Vec3Like, settings: CurveSettings = DEFAULT_SETTINGS
    ) -> CurveSegment:
        """Create a segment from four cubic control points."""
        return cls(CubicBezier(p0, p1, p2, p3), settings)

    ###########################################################################
    # Single node helpers
    ###########################################################################

    def copy_node(self) -> CurveSegment:
        """Unlinked copy sharing bezier and table, with its own trim and offset state."""
        node = CurveSegment.__new__(CurveSegment)
        node.bezier = self.bezier
        node.settings = self.settings
        node.table = self.table
        node.raw_length = self.raw_length
        node.start_distance = self.start_distance
        node.end_distance = self.end_distance
        node.start_param = self.start_param
        node.end_param = self.end_param
        node.offset = self.offset
        node.next = None
        return node

    def reversed_node(self) -> CurveSegment:
        """Unlinked segment covering the same span traversed backwards.

        Trims are swapped, the offset is negated and the table is rebuilt for the
        inverted control points. The raw length is carried over unchanged.
        """
        node = CurveSegment(BezierCurve.invert(self.bezier), self.settings)
        node.raw_length = self.raw_length
        node.start_distance = self.end_distance
        node.end_distance = self.start_distance
        node.offset = -self.offset
        node.start_param = node.table.invert(node.start_distance)
        node.end_param = node.table.invert(node.raw_length - node.end_distance)
        return node

    def grow_start_trim(self, distance: float) -> None:
        """Trim _distance_ more off the start of this node only."""
        self.start_distance += distance
        self.start_param = self.table.invert(self.start_distance)

    def grow_end_trim(self, distance: float) -> None:
        """Trim _distance_ more off the end of this node only."""
        self.end_distance += distance
        self.end_param = self.table.invert(self.raw_length - self.end_distance)

    @property
    def effective_length(self) -> float:
        """float: Arc length of this node after trimming."""
        return max(0.0, self.raw_length - self.start_distance - self.end_distance)

    ###########################################################################
    # Chain traversal
    ###########################################################################

    def segments(self) -> Iterator[CurveSegment]:
        """Iterate over this segment and all its successors."""
        segment: Optional[CurveSegment] = self
        while segment is not None:
            yield segment
            segment = segment.next

    @property
    def segment_count(self) -> int:
        """int: Number of segments in the chain starting here."""
        return sum(1 for _ in self.segments())

    def first_segment(self) -> CurveSegment:
        """First segment with a non-zero length, skipping leading pass-throughs."""
        segment = self
        while segment.effective_length == 0 and segment.next is not None:
            segment = segment.next
        return segment

    def last_segment(self) -> CurveSegment:
        """Last segment with a non-zero length, or this segment if there is none."""
        last = self
        for segment in self.segments():
            if segment.effective_length != 0:
                last = segment
        return last

    @property
    def length(self) -> float:
        """float: Total arc length of the chain starting here."""
        return sum(segment.effective_length for segment in self.segments())

    ###########################################################################
    # Start and end queries
    ###########################################################################

    def _position_at(self, t: float) -> NDArray[np.float64]:
        position = BezierCurve.evaluate_position(self.bezier, t)
        if self.offset == 0:
            return position
        return position + self.offset * BezierCurve.horizontal_normal(self.bezier, t, self.settings.up_axis)

    @property
    def start_pos(self) -> NDArray[np.float64]:
        """NDArray: Offset position at the start of the chain."""
        first = self.first_segment()
        return first._position_at(first.start_param)

    @property
    def end_pos(self) -> NDArray[np.float64]:
        """NDArray: Offset position at the end of the chain."""
        last = self.last_segment()
        return last._position_at(last.end_param)

    @property
    def start_tangent(self) -> NDArray[np.float64]:
        """NDArray: Tangent (not normalized) at the start of the chain."""
        first = self.first_segment()
        return BezierCurve.evaluate_tangent(first.bezier, first.start_param)

    @property
    def end_tangent(self) -> NDArray[np.float64]:
        """NDArray: Tangent (not normalized) at the end of the chain."""
        last = self.last_segment()
        return BezierCurve.evaluate_tangent(last.bezier, last.end_param)

    @property
    def start_normal(self) -> NDArray[np.float64]:
        """NDArray: Horizontal unit normal at the start of the chain."""
        first = self.first_segment()
        return BezierCurve.horizontal_normal(first.bezier, first.start_param, first.settings.up_axis)

    @property
    def end_normal(self) -> NDArray[np.float64]:
        """NDArray: Horizontal unit normal at the end of the chain."""
        last = self.last_segment()
        return BezierCurve.horizontal_normal(last.bezier, last.end_param, last.settings.up_axis)

    ###########################################################################
    # Evaluation by distance
    ###########################################################################

    def locate(self, distance: float) -> Tuple[CurveSegment, float]:
        """
        Find the segment and its curve parameter at _distance_ along the chain.

        Distances past the end of the chain stay on the last segment, whose
        table clamps them to the end of its underlying Bezier.

        Args:
            distance: Arc length from the start of the chain

        Returns:
            Tuple (segment, t)

        Raises:
            InvalidDistanceError: If distance is negative
        """
        if distance < 0:
            raise InvalidDistanceError(f"distance cannot be negative, got {distance}")
        segment = self
        while segment.next is not None and (distance > segment.effective_length or segment.effective_length == 0):
            distance -= segment.effective_length
            segment = segment.next
        return segment, segment.table.invert(segment.start_distance + distance)

    def evaluate_position(self, distance: float) -> NDArray[np.float64]:
        """Offset position at _distance_ along the chain."""
        segment, t = self.locate(distance)
        return segment._position_at(t)

    def evaluate_tangent(self, distance: float) -> NDArray[np.float64]:
        """Tangent (not normalized) at _distance_ along the chain."""
        segment, t = self.locate(distance)
        return BezierCurve.evaluate_tangent(segment.bezier, t)

    def evaluate_2d_normal(self, distance: float) -> NDArray[np.float64]:
        """Horizontal unit normal at _distance_ along the chain."""
        segment, t = self.locate(distance)
        return BezierCurve.horizontal_normal(segment.bezier, t, segment.settings.up_axis)

    ###########################################################################
    # Comparison
    ###########################################################################

    def _node_equal(self, other: CurveSegment) -> bool:
        return (
            self.bezier == other.bezier
            and self.raw_length == other.raw_length
            and self.offset == other.offset
            and self.start_distance == other.start_distance
            and self.end_distance == other.end_distance
            and self.start_param == other.start_param
            and self.end_param == other.end_param
        )

    def __eq__(self, other):
        if not isinstance(other, CurveSegment):
            return NotImplemented
        mine: Optional[CurveSegment] = self
        theirs: Optional[CurveSegment] = other
        while mine is not None and theirs is not None:
            if not mine._node_equal(theirs):
                return False
            mine, theirs = mine.next, theirs.next
        return mine is None and theirs is None

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self):
        return (
            f"CurveSegment({self.bezier!r}, start_distance={self.start_distance}, "
            f"end_distance={self.end_distance}, offset={self.offset}, "
            f"has_next={self.next is not None})"
        )
