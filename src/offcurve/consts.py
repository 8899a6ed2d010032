"""Central module containing constants and settings for curve chain processing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

###############################################################################
# Consts
###############################################################################

# Number of (parameter, distance) samples per arc-length table
TABLE_SIZE: int = 30

# Split distances closer than this to a segment boundary snap onto the boundary
MIN_SEGMENT_LENGTH: float = 0.005

# Bisection tolerance and defaults for the nearest-point search
NEAREST_TOLERANCE: float = 0.001
NEAREST_RESOLUTION: int = 10
NEAREST_MAX_ITERATIONS: int = 64

# Vectors shorter than this normalize to the zero vector
NORMALIZE_EPS: float = 1.0e-5

# Vertical axis, the horizontal plane is perpendicular to it
UP_AXIS: Tuple[float, float, float] = (0.0, 1.0, 0.0)


###############################################################################
# CurveSettings
###############################################################################


@dataclass(frozen=True)
class CurveSettings:
    """Tunable values shared by all segments of a chain.

    Attributes:
        table_size: Number of samples in each arc-length table (>= 2).
        min_segment_length: Snap distance used by split at segment boundaries.
        nearest_tolerance: Bracket width at which the nearest-point bisection stops.
        nearest_max_iterations: Hard cap on nearest-point bisection steps.
        up_axis: Vertical axis used for horizontal normals.
    """

    table_size: int = TABLE_SIZE
    min_segment_length: float = MIN_SEGMENT_LENGTH
    nearest_tolerance: float = NEAREST_TOLERANCE
    nearest_max_iterations: int = NEAREST_MAX_ITERATIONS
    up_axis: Tuple[float, float, float] = UP_AXIS

    def __post_init__(self):
        if self.table_size < 2:
            raise ValueError(f"table_size must be at least 2, got {self.table_size}")
        if self.nearest_max_iterations < 1:
            raise ValueError(f"nearest_max_iterations must be positive, got {self.nearest_max_iterations}")

    def to_dict(self) -> dict:
        """Convert settings to a dictionary."""
        return {
            "table_size": self.table_size,
            "min_segment_length": self.min_segment_length,
            "nearest_tolerance": self.nearest_tolerance,
            "nearest_max_iterations": self.nearest_max_iterations,
            "up_axis": list(self.up_axis),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CurveSettings":
        """Create CurveSettings from a dictionary, missing keys fall back to defaults."""
        return cls(
            table_size=data.get("table_size", TABLE_SIZE),
            min_segment_length=data.get("min_segment_length", MIN_SEGMENT_LENGTH),
            nearest_tolerance=data.get("nearest_tolerance", NEAREST_TOLERANCE),
            nearest_max_iterations=data.get("nearest_max_iterations", NEAREST_MAX_ITERATIONS),
            up_axis=tuple(data.get("up_axis", UP_AXIS)),
        )


DEFAULT_SETTINGS = CurveSettings()
