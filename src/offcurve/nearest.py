"""Nearest point on a curve chain to a ray."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from offcurve.consts import NEAREST_RESOLUTION
from offcurve.geom import Ray
from offcurve.segment import CurveSegment

logger = logging.getLogger(__name__)


class NearestPointSearch:
    """Coarse sampling followed by local bisection along the chain."""

    @staticmethod
    def nearest_distance(
        head: CurveSegment,
        ray: Ray,
        resolution: int = NEAREST_RESOLUTION,
        tolerance: Optional[float] = None,
        max_iterations: Optional[int] = None,
    ) -> Tuple[float, float]:
        """
        Minimum distance between the chain and the line of _ray_.

        The chain is sampled at resolution+1 evenly spaced distances and the best
        sample is refined by bisection within one sampling step around it. Each
        bisection step compares the ray distance just before and just after the
        midpoint and keeps the half that goes downhill. This finds the true
        minimum only if the distance profile has a single minimum within that
        step; a higher resolution makes a narrow minimum less likely to be missed.

        Args:
            head: Chain to search
            ray: Query ray, its direction does not have to be normalized
            resolution: Number of coarse sampling intervals
            tolerance: Bracket width at which bisection stops,
                defaults to settings.nearest_tolerance
            max_iterations: Hard cap on bisection steps,
                defaults to settings.nearest_max_iterations

        Returns:
            Tuple (min_distance, distance_on_curve)

        Raises:
            ValueError: If resolution is smaller than 1 or tolerance is not positive
        """
        if resolution < 1:
            raise ValueError(f"resolution must be at least 1, got {resolution}")
        settings = head.settings
        tolerance = settings.nearest_tolerance if tolerance is None else tolerance
        max_iterations = settings.nearest_max_iterations if max_iterations is None else max_iterations
        if tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {tolerance}")

        length = head.length
        step = length / resolution

        def distance_at(distance: float) -> float:
            return ray.distance_to(head.evaluate_position(min(max(distance, 0.0), length)))

        # Coarse pass
        min_distance = float("inf")
        local_min = 0.0
        for i in range(resolution + 1):
            distance_on_curve = min(i * step, length)
            distance = distance_at(distance_on_curve)
            if distance < min_distance:
                min_distance = distance
                local_min = distance_on_curve

        # Refinement
        low = max(local_min - step, 0.0)
        high = min(local_min + step, length)
        iterations = 0
        while True:
            mid = (low + high) / 2.0
            if distance_at(mid - tolerance) < distance_at(mid + tolerance):
                high = mid
            else:
                low = mid
            iterations += 1
            if high - low <= tolerance:
                break
            if iterations >= max_iterations:
                logger.warning(
                    "nearest_distance: stopped after %d iterations with bracket [%s, %s]", iterations, low, high
                )
                break

        return distance_at(low), low
