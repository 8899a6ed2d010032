#!/usr/bin/env python3
"""Pick the point of a curve under a vertical view ray and split the curve there."""

from offcurve.chain import CurveChain
from offcurve.geom import Ray
from offcurve.nearest import NearestPointSearch
from offcurve.segment import CurveSegment


def main():
    """Main"""
    curve = CurveSegment.from_points((0.0, 0.0, 0.0), (30.0, 0.0, 40.0), (70.0, 0.0, -40.0), (100.0, 0.0, 0.0))
    ray = Ray(origin=(42.0, 25.0, 3.0), direction=(0.0, -1.0, 0.0))

    min_distance, distance_on_curve = NearestPointSearch.nearest_distance(curve, ray, resolution=20)
    print(f"ray passes {min_distance:.4f} from the curve at distance {distance_on_curve:.4f}")
    print(f"picked point {curve.evaluate_position(distance_on_curve)}")

    left, right = CurveChain.split(curve, distance_on_curve)
    print(f"left length {left.length:.4f}, right length {right.length:.4f}")


if __name__ == "__main__":
    main()
