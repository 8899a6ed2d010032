#!/usr/bin/env python3
"""Build a two-piece road centerline, offset its edges and sample their outlines."""

import numpy as np

from offcurve.chain import CurveChain
from offcurve.segment import CurveSegment

ROAD_HALF_WIDTH = 3.5
NUM_POINTS = 9


def build_centerline() -> CurveSegment:
    """Straight run followed by a left-hand bend, lying in the xz plane."""
    straight = CurveSegment.from_quadratic((0.0, 0.0, 0.0), (50.0, 0.0, 0.0), (100.0, 0.0, 0.0))
    bend = CurveSegment.from_points((100.0, 0.0, 0.0), (140.0, 0.0, 0.0), (160.0, 0.0, 20.0), (160.0, 0.0, 60.0))
    return CurveChain.merge(straight, bend)


def main():
    """Main"""
    centerline = build_centerline()
    print(f"centerline: {centerline.segment_count} segments, length {centerline.length:.3f}")

    left_edge = CurveChain.offset(CurveChain.duplicate(centerline), -ROAD_HALF_WIDTH)
    right_edge = CurveChain.offset(CurveChain.duplicate(centerline), ROAD_HALF_WIDTH)

    with np.printoptions(precision=3, suppress=True):
        for name, edge in (("left", left_edge), ("right", right_edge)):
            print(f"{name} edge:")
            for point in CurveChain.outline(edge, NUM_POINTS):
                print(f"  {point}")

    reversed_centerline = CurveChain.reverse(centerline)
    print(f"reversed start {reversed_centerline.start_pos}, end {reversed_centerline.end_pos}")


if __name__ == "__main__":
    main()
