"""Structural operations on curve chains: trimming, splitting, merging and reversal."""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from offcurve.bezier import BezierCurve
from offcurve.errors import InvalidDistanceError
from offcurve.segment import CurveSegment

logger = logging.getLogger(__name__)


###############################################################################
# CurveChain
###############################################################################


class CurveChain:
    """Operations on chains of CurveSegments, each chain given by its head segment.

    trim_start, trim_end, offset and merge mutate the chain passed in.
    split consumes it: its tail is redistributed to the returned halves, so the
    original head must not be used afterwards. duplicate and reverse build new
    chains and leave their input untouched.
    """

    @staticmethod
    def _check_distance(distance: float, limit: float, what: str) -> None:
        if distance < 0:
            raise InvalidDistanceError(f"{what} distance cannot be negative, got {distance}")
        if distance > limit:
            raise InvalidDistanceError(f"{what} distance {distance} exceeds curve length {limit}")

    @staticmethod
    def trim_start(head: CurveSegment, distance: float) -> CurveSegment:
        """
        Remove _distance_ of arc length from the start of the chain.

        Segments that are used up entirely stay linked in front of the returned
        segment but are no longer part of the curve it describes.

        Args:
            head: Chain to trim
            distance: Arc length to remove

        Returns:
            CurveSegment: The new head, the segment the trim ends in

        Raises:
            InvalidDistanceError: If distance is negative or longer than the chain
        """
        CurveChain._check_distance(distance, head.length, "trim")
        segment = head
        remaining = distance
        while segment.effective_length < remaining and segment.next is not None:
            remaining -= segment.effective_length
            segment = segment.next
        segment.grow_start_trim(min(remaining, segment.effective_length))
        logger.debug("trim_start %s: start_distance now %s", distance, segment.start_distance)
        return segment

    @staticmethod
    def trim_end(head: CurveSegment, distance: float) -> CurveSegment:
        """
        Remove _distance_ of arc length from the end of the chain.

        Segments that are used up entirely are unlinked from the chain.

        Args:
            head: Chain to trim
            distance: Arc length to remove

        Returns:
            CurveSegment: The unchanged head

        Raises:
            InvalidDistanceError: If distance is negative or longer than the chain
        """
        CurveChain._check_distance(distance, head.length, "trim")
        segments = list(head.segments())
        index = len(segments) - 1
        segment = segments[index]
        remaining = distance
        while segment.effective_length < remaining and index > 0:
            remaining -= segment.effective_length
            index -= 1
            segment = segments[index]
            segment.next = None
        segment.grow_end_trim(min(remaining, segment.effective_length))
        logger.debug("trim_end %s: %d of %d segments kept", distance, index + 1, len(segments))
        return head

    @staticmethod
    def split(head: CurveSegment, distance: float) -> Tuple[CurveSegment, CurveSegment]:
        """
        Cut the chain in two at _distance_.

        A cut within settings.min_segment_length of the end of a segment that has
        a successor snaps onto that boundary: the chain is unlinked there and no
        new geometry is made. Otherwise the Bezier under the cut is subdivided and
        both pieces inherit its offset and its start or end trim.

        This consumes _head_. Its tail segments now belong to the returned chains.

        Args:
            head: Chain to split
            distance: Arc length of the cut

        Returns:
            Tuple (left, right) of independent chains

        Raises:
            InvalidDistanceError: If distance is negative or not shorter than the chain
        """
        total_length = head.length
        if distance < 0:
            raise InvalidDistanceError(f"split distance cannot be negative, got {distance}")
        if distance >= total_length:
            raise InvalidDistanceError(
                f"split distance {distance} has to be smaller than curve length {total_length}"
            )

        tolerance = head.settings.min_segment_length
        index = 0
        segment = head
        remaining = distance
        while True:
            if segment.next is not None and abs(remaining - segment.effective_length) < tolerance:
                right_head = segment.next
                segment.next = None
                logger.debug("split %s: snapped to boundary after segment %d", distance, index)
                return head, right_head
            if remaining >= segment.effective_length and segment.next is not None:
                remaining -= segment.effective_length
                segment = segment.next
                index += 1
            else:
                break

        t = segment.table.invert(segment.start_distance + remaining)
        left_curve, right_curve = BezierCurve.split(segment.bezier, t)

        left = CurveSegment(left_curve, segment.settings)
        left.offset = segment.offset
        left.grow_start_trim(min(segment.start_distance, left.effective_length))

        right = CurveSegment(right_curve, segment.settings)
        right.offset = segment.offset
        right.grow_end_trim(min(segment.end_distance, right.effective_length))

        logger.debug("split %s: subdivided segment %d at t=%s", distance, index, t)
        if index == 0:
            right.next = head.next
            return left, right

        new_head = CurveChain.duplicate(head)
        prev = new_head
        for _ in range(index - 1):
            prev = prev.next  # type: ignore[assignment]
        right.next = prev.next.next  # type: ignore[union-attr]
        prev.next = left
        return new_head, right

    @staticmethod
    def merge(head: CurveSegment, other: CurveSegment) -> CurveSegment:
        """
        Append a copy of _other_ to the end of the chain.

        The copy replaces any zero-length segments trailing the chain.
        _other_ itself is left unmodified.

        Returns:
            CurveSegment: The head of the extended chain
        """
        last = head.last_segment()
        last.next = CurveChain.duplicate(other)
        logger.debug("merge: attached copy of other chain after last segment")
        return head

    @staticmethod
    def reverse(head: CurveSegment) -> CurveSegment:
        """
        Build the chain traversed in the opposite direction.

        Segment order is reversed and every segment is rebuilt from its inverted
        control points with swapped trims and negated offset, so a curve offset
        to the right of forward travel stays at the same place, which is to the
        left of reversed travel.

        Returns:
            CurveSegment: Head of the new chain, starting where _head_ ended
        """
        new_head: Optional[CurveSegment] = None
        count = 0
        for segment in head.segments():
            node = segment.reversed_node()
            node.next = new_head
            new_head = node
            count += 1
        logger.debug("reverse: rebuilt %d segments", count)
        return new_head  # type: ignore[return-value]

    @staticmethod
    def duplicate(head: CurveSegment) -> CurveSegment:
        """
        Copy the chain.

        Control points and arc-length tables are shared with the source since
        they never change; trims, offsets and links are copied.
        """
        new_head = head.copy_node()
        tail = new_head
        for segment in head.segments():
            if segment is head:
                continue
            tail.next = segment.copy_node()
            tail = tail.next
        return new_head

    @staticmethod
    def offset(head: CurveSegment, distance: float) -> CurveSegment:
        """Add _distance_ to the offset of every segment, in place."""
        for segment in head.segments():
            segment.offset += distance
        return head

    @staticmethod
    def outline(head: CurveSegment, num_points: int) -> CurveOutline:
        """Lazy sequence of _num_points_ positions spaced evenly by arc length."""
        return CurveOutline(head, num_points)

    @staticmethod
    def _scalars(segment: CurveSegment) -> Tuple[float, ...]:
        return (
            segment.raw_length,
            segment.offset,
            segment.start_distance,
            segment.end_distance,
            segment.start_param,
            segment.end_param,
        )

    @staticmethod
    def approx_equal(head: CurveSegment, other: CurveSegment, rtol: float = 1e-9, atol: float = 1e-9) -> bool:
        """
        Check if two chains are structurally equal within a tolerance.

        Compares segment count, control points, raw lengths, offsets, trims and
        parameters using numpy.allclose semantics.

        Args:
            head: First chain
            other: Second chain
            rtol: Relative tolerance
            atol: Absolute tolerance

        Returns:
            bool: True if both chains match within tolerance
        """
        mine = list(head.segments())
        theirs = list(other.segments())
        if len(mine) != len(theirs):
            return False
        for seg_a, seg_b in zip(mine, theirs):
            if not np.allclose(seg_a.bezier.points, seg_b.bezier.points, rtol=rtol, atol=atol):
                return False
            if not np.allclose(CurveChain._scalars(seg_a), CurveChain._scalars(seg_b), rtol=rtol, atol=atol):
                return False
        return True


###############################################################################
# CurveOutline
###############################################################################


class CurveOutline:
    """Finite, restartable sequence of positions evenly spaced along a chain.

    Positions are evaluated lazily on iteration against the current state of
    the chain, so iterating again after a mutation reflects the change.
    """

    def __init__(self, head: CurveSegment, num_points: int):
        self.head = head
        self.num_points = max(0, int(num_points))

    def __iter__(self) -> Iterator[NDArray[np.float64]]:
        if self.num_points == 0:
            return
        separation = self.head.length / (self.num_points - 1) if self.num_points > 1 else 0.0
        for i in range(self.num_points):
            yield self.head.evaluate_position(i * separation)

    def __len__(self):
        return self.num_points

    def to_array(self) -> NDArray[np.float64]:
        """NDArray of shape (num_points, 3) with all positions."""
        if self.num_points == 0:
            return np.empty((0, 3), dtype=np.float64)
        return np.array(list(self), dtype=np.float64)
