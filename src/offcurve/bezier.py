"""Cubic Bezier curve evaluation, subdivision and sampling utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from offcurve.consts import UP_AXIS
from offcurve.geom import GeomMath, Vec3Like

###############################################################################
# CubicBezier
###############################################################################


@dataclass(frozen=True, eq=False)
class CubicBezier:
    """Immutable control points P0..P3 of one cubic Bezier curve in 3D.

    The stored arrays are flagged read-only so that arc-length tables computed
    from them stay valid for every segment sharing this instance.

    Attributes:
        p0: Start point.
        p1: First control point.
        p2: Second control point.
        p3: End point.
    """

    p0: NDArray[np.float64]
    p1: NDArray[np.float64]
    p2: NDArray[np.float64]
    p3: NDArray[np.float64]

    def __init__(self, p0: Vec3Like, p1: Vec3Like, p2: Vec3Like, p3: Vec3Like):
        for name, value in (("p0", p0), ("p1", p1), ("p2", p2), ("p3", p3)):
            point = np.array(GeomMath.as_vec3(value), dtype=np.float64)
            point.setflags(write=False)
            object.__setattr__(self, name, point)

    @classmethod
    def from_points(cls, points: Union[Sequence[Vec3Like], NDArray[np.float64]]) -> CubicBezier:
        """Create a CubicBezier from an array-like of shape (4, 3).

        Raises:
            ValueError: If _points_ does not contain exactly four 3D points
        """
        points_array = np.asarray(points, dtype=np.float64)
        if points_array.shape != (4, 3):
            raise ValueError(f"Cubic Bezier needs 4 points of dimension 3, got shape {points_array.shape}")
        return cls(*points_array)

    @classmethod
    def from_quadratic(cls, p0: Vec3Like, p1: Vec3Like, p2: Vec3Like) -> CubicBezier:
        """Degree-elevate the quadratic Bezier (p0, p1, p2) to an equivalent cubic.

        Evenly spaced collinear quadratic points give a uniformly parameterized line.
        """
        q0 = GeomMath.as_vec3(p0)
        q1 = GeomMath.as_vec3(p1)
        q2 = GeomMath.as_vec3(p2)
        return cls(q0, q0 / 3.0 + 2.0 * q1 / 3.0, q2 / 3.0 + 2.0 * q1 / 3.0, q2)

    @property
    def points(self) -> NDArray[np.float64]:
        """NDArray of shape (4, 3) with the control points."""
        return np.stack((self.p0, self.p1, self.p2, self.p3))

    def __eq__(self, other):
        if not isinstance(other, CubicBezier):
            return NotImplemented
        return bool(np.array_equal(self.points, other.points))

    def __hash__(self):
        return hash(self.points.tobytes())

    def __repr__(self):
        return (
            f"CubicBezier(p0={self.p0.tolist()}, p1={self.p1.tolist()}, "
            f"p2={self.p2.tolist()}, p3={self.p3.tolist()})"
        )


###############################################################################
# BezierCurve
###############################################################################


class BezierCurve:
    """Class to handle cubic Bezier curve math.

    All methods are stateless class methods working on CubicBezier control points.
    The curve parameter _t_ is never clamped here, callers keep it inside [0, 1].
    """

    @classmethod
    def evaluate_position(cls, bezier: CubicBezier, t: float) -> NDArray[np.float64]:
        """Position B(t) = (1-t)^3*P0 + 3*(1-t)^2*t*P1 + 3*(1-t)*t^2*P2 + t^3*P3.

        Evaluated relative to P0, so coincident control points give exactly P0.
        """
        omt = 1.0 - t
        omt2 = omt * omt
        t2 = t * t
        return (
            bezier.p0
            + 3.0 * omt2 * t * (bezier.p1 - bezier.p0)
            + 3.0 * omt * t2 * (bezier.p2 - bezier.p0)
            + t2 * t * (bezier.p3 - bezier.p0)
        )

    @classmethod
    def evaluate_tangent(cls, bezier: CubicBezier, t: float) -> NDArray[np.float64]:
        """First derivative B'(t), not normalized."""
        omt = 1.0 - t
        return (
            3.0 * omt * omt * (bezier.p1 - bezier.p0)
            + 6.0 * omt * t * (bezier.p2 - bezier.p1)
            + 3.0 * t * t * (bezier.p3 - bezier.p2)
        )

    @classmethod
    def horizontal_normal(
        cls, bezier: CubicBezier, t: float, up: Vec3Like = UP_AXIS
    ) -> NDArray[np.float64]:
        """
        Unit normal at _t_ lying in the horizontal plane perpendicular to _up_.

        Used as offset direction. A purely vertical tangent has no horizontal normal,
        the result is then the zero vector and offsets have no effect at that point.

        Args:
            bezier: Control points
            t: Curve parameter
            up: Unit vertical axis

        Returns:
            NDArray[np.float64] of shape (3,)
        """
        return GeomMath.horizontal_normal(cls.evaluate_tangent(bezier, t), up)

    @classmethod
    def polygonize(cls, bezier: CubicBezier, steps: int) -> NDArray[np.float64]:
        """
        Sample the curve at steps+1 evenly spaced parameters in [0, 1].

        Uses direct evaluation with vectorized operations.

        Args:
            bezier: Control points
            steps: Number of segments to divide the curve into

        Returns:
            NDArray[np.float64] of shape (steps+1, 3) containing the sampled positions
        """
        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)[:, np.newaxis]

        # Cubic Bezier basis functions, P0 weight folded into the offsets
        omt = 1.0 - t
        omt2 = omt**2
        t2 = t**2

        return (
            bezier.p0
            + 3.0 * omt2 * t * (bezier.p1 - bezier.p0)
            + 3.0 * omt * t2 * (bezier.p2 - bezier.p0)
            + t2 * t * (bezier.p3 - bezier.p0)
        )

    @classmethod
    def split(cls, bezier: CubicBezier, t: float) -> Tuple[CubicBezier, CubicBezier]:
        """
        Subdivide the curve at _t_ using de Casteljau's algorithm.

        Args:
            bezier: Control points
            t: Curve parameter of the cut

        Returns:
            Tuple (left, right) where left covers [0, t] and right covers [t, 1]
            of the given curve, each reparameterized to [0, 1].
        """
        p01 = bezier.p0 + (bezier.p1 - bezier.p0) * t
        p12 = bezier.p1 + (bezier.p2 - bezier.p1) * t
        p23 = bezier.p2 + (bezier.p3 - bezier.p2) * t
        p012 = p01 + (p12 - p01) * t
        p123 = p12 + (p23 - p12) * t
        cut = p012 + (p123 - p012) * t
        return CubicBezier(bezier.p0, p01, p012, cut), CubicBezier(cut, p123, p23, bezier.p3)

    @classmethod
    def invert(cls, bezier: CubicBezier) -> CubicBezier:
        """Same curve traversed from P3 to P0."""
        return CubicBezier(bezier.p3, bezier.p2, bezier.p1, bezier.p0)
