"""Test module for offcurve.nearest

The tests are run using pytest.
"""

import logging

import numpy as np
import pytest

from offcurve.chain import CurveChain
from offcurve.geom import Ray
from offcurve.nearest import NearestPointSearch
from offcurve.segment import CurveSegment

TOLERANCE = 0.001


def line_along(axis, length: float) -> CurveSegment:
    """Straight segment from the origin along _axis_."""
    direction = np.asarray(axis, dtype=np.float64)
    return CurveSegment.from_quadratic(np.zeros(3), direction * length / 2, direction * length)


class TestNearestDistance:
    """Test class for the ray to curve search."""

    def test_long_curve(self):
        """A ray crossing a long curve near its start is found."""
        up = np.array([0.0, 0.0, 1.0])
        curve = line_along(up, 2000.0)
        ray = Ray(up + np.array([0.0, 1.0, 0.0]), (0.0, -1.0, 0.0))

        min_distance, distance_on_curve = NearestPointSearch.nearest_distance(curve, ray)

        assert distance_on_curve == pytest.approx(1.0, abs=TOLERANCE)
        assert min_distance == pytest.approx(0.0, abs=TOLERANCE)

    @pytest.mark.parametrize("x", [3.0, 17.5, 50.0, 81.25, 99.0])
    def test_perpendicular_ray(self, x):
        """A ray perpendicular to a straight curve finds the crossing distance."""
        curve = line_along((1.0, 0.0, 0.0), 100.0)
        ray = Ray((x, 5.0, 2.0), (0.0, -1.0, 0.0))

        min_distance, distance_on_curve = NearestPointSearch.nearest_distance(curve, ray)

        assert distance_on_curve == pytest.approx(x, abs=TOLERANCE)
        assert min_distance == pytest.approx(2.0, abs=TOLERANCE)

    def test_near_end(self):
        """Rays close to the end of curves of many lengths give distinct results."""
        for length in range(100, 2000, 50):
            curve = line_along((1.0, 0.0, 0.0), float(length))
            _, dist_a = NearestPointSearch.nearest_distance(curve, Ray((length - 1, -1.0, 1.0), (0.0, 1.0, 0.0)))
            _, dist_b = NearestPointSearch.nearest_distance(curve, Ray((length - 2, -1.0, 1.0), (0.0, 1.0, 0.0)))
            assert dist_a != dist_b
            assert dist_a == pytest.approx(length - 1, abs=TOLERANCE)
            assert dist_b == pytest.approx(length - 2, abs=TOLERANCE)

    def test_multi_segment_chain(self):
        """The search runs over the whole chain."""
        first = line_along((1.0, 0.0, 0.0), 20.0)
        second = CurveSegment.from_quadratic((20.0, 0.0, 0.0), (30.0, 0.0, 0.0), (40.0, 0.0, 0.0))
        chain = CurveChain.merge(first, second)

        _, distance_on_curve = NearestPointSearch.nearest_distance(chain, Ray((27.0, 3.0, 0.0), (0.0, -1.0, 0.0)))

        assert distance_on_curve == pytest.approx(27.0, abs=TOLERANCE)

    def test_offset_curve(self):
        """The search measures against offset positions."""
        curve = CurveChain.offset(line_along((1.0, 0.0, 0.0), 50.0), 4.0)
        min_distance, distance_on_curve = NearestPointSearch.nearest_distance(
            curve, Ray((12.0, 10.0, 4.0), (0.0, -1.0, 0.0))
        )
        assert distance_on_curve == pytest.approx(12.0, abs=TOLERANCE)
        assert min_distance == pytest.approx(0.0, abs=TOLERANCE)

    def test_curved_result_is_local_minimum(self):
        """On a bend the result is not beaten by its neighbours."""
        curve = CurveSegment.from_points((0.0, 0.0, 0.0), (0.0, 0.0, 50.0), (50.0, 0.0, 100.0), (100.0, 0.0, 100.0))
        ray = Ray((40.0, 10.0, 60.0), (0.0, -1.0, 0.0))

        min_distance, distance_on_curve = NearestPointSearch.nearest_distance(curve, ray, resolution=20)

        assert min_distance == pytest.approx(ray.distance_to(curve.evaluate_position(distance_on_curve)))
        for neighbour in (distance_on_curve - 0.5, distance_on_curve + 0.5):
            assert ray.distance_to(curve.evaluate_position(neighbour)) >= min_distance

    def test_invalid_arguments(self):
        """Resolution and tolerance have to be positive."""
        curve = line_along((1.0, 0.0, 0.0), 10.0)
        ray = Ray((5.0, 1.0, 0.0), (0.0, -1.0, 0.0))
        with pytest.raises(ValueError):
            NearestPointSearch.nearest_distance(curve, ray, resolution=0)
        with pytest.raises(ValueError):
            NearestPointSearch.nearest_distance(curve, ray, tolerance=0.0)

    def test_iteration_cap(self, caplog):
        """Bisection stops at the iteration cap and logs a warning."""
        curve = line_along((1.0, 0.0, 0.0), 100.0)
        ray = Ray((37.0, 1.0, 0.0), (0.0, -1.0, 0.0))
        with caplog.at_level(logging.WARNING, logger="offcurve.nearest"):
            _, distance_on_curve = NearestPointSearch.nearest_distance(curve, ray, max_iterations=2)
        assert "stopped after 2 iterations" in caplog.text
        assert 30.0 <= distance_on_curve <= 50.0

    def test_zero_length_curve(self):
        """A degenerate curve returns its only point."""
        point = (1.0, 0.0, 0.0)
        curve = CurveSegment.from_points(point, point, point, point)
        min_distance, distance_on_curve = NearestPointSearch.nearest_distance(
            curve, Ray((1.0, 5.0, 3.0), (0.0, -1.0, 0.0))
        )
        assert distance_on_curve == 0.0
        assert min_distance == pytest.approx(3.0)
