"""Arc-length lookup tables mapping distance along a curve to its parameter."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from offcurve.bezier import BezierCurve, CubicBezier
from offcurve.consts import TABLE_SIZE


class ArcLengthTable:
    """Monotonic table of (parameter, cumulative distance) samples of one curve.

    The first sample is (0, 0) and the last is (1, total_length). Both columns are
    read-only, so a table can be shared by every segment built on the same
    control points.
    """

    __slots__ = ("parameters", "distances")

    def __init__(self, parameters: NDArray[np.float64], distances: NDArray[np.float64]):
        if parameters.shape != distances.shape or parameters.ndim != 1 or len(parameters) < 2:
            raise ValueError("Arc-length table needs two 1D columns of equal length >= 2")
        self.parameters = np.array(parameters, dtype=np.float64)
        self.distances = np.array(distances, dtype=np.float64)
        self.parameters.setflags(write=False)
        self.distances.setflags(write=False)

    @classmethod
    def build(cls, bezier: CubicBezier, table_size: int = TABLE_SIZE) -> ArcLengthTable:
        """
        Sample _table_size_ evenly spaced parameters (endpoints included) and
        accumulate the chord lengths between consecutive samples.

        A curve whose control points coincide gives an all-zero distance column.

        Args:
            bezier: Control points of the curve
            table_size: Number of samples

        Returns:
            ArcLengthTable

        Raises:
            ValueError: If table_size is smaller than 2
        """
        if table_size < 2:
            raise ValueError(f"table_size must be at least 2, got {table_size}")
        positions = BezierCurve.polygonize(bezier, table_size - 1)
        chords = np.linalg.norm(np.diff(positions, axis=0), axis=1)
        distances = np.concatenate(([0.0], np.cumsum(chords)))
        parameters = np.linspace(0.0, 1.0, table_size, dtype=np.float64)
        return cls(parameters, distances)

    @property
    def total_length(self) -> float:
        """float: Cumulative distance of the last sample."""
        return float(self.distances[-1])

    def invert(self, distance: float) -> float:
        """
        Curve parameter at _distance_ along the curve.

        Distances outside [0, total_length] clamp to the parameters 0 and 1.
        Inside, the bracketing samples are located by binary search and the
        parameter is interpolated linearly between them.
        """
        if distance <= 0.0:
            return 0.0
        if distance >= self.total_length:
            return 1.0
        upper = int(np.searchsorted(self.distances, distance, side="right"))
        lower = upper - 1
        d0 = self.distances[lower]
        d1 = self.distances[upper]
        t0 = self.parameters[lower]
        t1 = self.parameters[upper]
        return float(t0 + (t1 - t0) * (distance - d0) / (d1 - d0))

    def __len__(self):
        return len(self.parameters)

    def __repr__(self):
        return f"ArcLengthTable(size={len(self)}, total_length={self.total_length})"
