"""Handling vectors and rays"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from offcurve.consts import NORMALIZE_EPS, UP_AXIS

Vec3Like = Union[Sequence[float], NDArray[np.float64]]


###############################################################################
# GeomMath
###############################################################################
class GeomMath:
    """Class to provide various static methods related to vector handling."""

    @staticmethod
    def as_vec3(vector: Vec3Like) -> NDArray[np.float64]:
        """
        Convert the given vector into a float64 array of shape (3,).

        Args:
            vector (Sequence[float] or NDArray): 3D vector - (x, y, z)

        Returns:
            NDArray[np.float64]: the vector as numpy array

        Raises:
            ValueError: If the vector does not have exactly 3 components
        """
        result = np.asarray(vector, dtype=np.float64)
        if result.shape != (3,):
            raise ValueError(f"Expected a 3D vector, got shape {result.shape}")
        return result

    @staticmethod
    def normalize(vector: NDArray[np.float64]) -> NDArray[np.float64]:
        """
        Normalize the given vector.

        Vectors with a magnitude not above NORMALIZE_EPS normalize to the zero vector
        instead of producing NaN components.

        Args:
            vector (NDArray): vector to normalize

        Returns:
            NDArray[np.float64]: unit vector or zero vector
        """
        magnitude = float(np.linalg.norm(vector))
        if magnitude > NORMALIZE_EPS:
            return vector / magnitude
        return np.zeros_like(vector, dtype=np.float64)

    @staticmethod
    def flatten(vector: NDArray[np.float64], up: Vec3Like = UP_AXIS) -> NDArray[np.float64]:
        """Remove the component of _vector_ along the (unit) _up_ axis."""
        up_vec = np.asarray(up, dtype=np.float64)
        return vector - np.dot(vector, up_vec) * up_vec

    @staticmethod
    def horizontal_normal(tangent: NDArray[np.float64], up: Vec3Like = UP_AXIS) -> NDArray[np.float64]:
        """
        Normal of _tangent_ lying in the horizontal plane.

        The tangent is flattened into the plane perpendicular to _up_, crossed with _up_
        and normalized. A purely vertical tangent gives the zero vector.

        Args:
            tangent (NDArray): tangent vector
            up (Sequence[float]): unit vertical axis

        Returns:
            NDArray[np.float64]: horizontal unit normal or zero vector
        """
        up_vec = np.asarray(up, dtype=np.float64)
        return GeomMath.normalize(np.cross(GeomMath.flatten(tangent, up_vec), up_vec))


###############################################################################
# Ray
###############################################################################
@dataclass(frozen=True, eq=False)
class Ray:
    """
    Half-line given by origin and direction.

    Attributes:
        origin (NDArray[np.float64]): start point of the ray
        direction (NDArray[np.float64]): direction, not required to be normalized
    """

    origin: NDArray[np.float64]
    direction: NDArray[np.float64]

    def __init__(self, origin: Vec3Like, direction: Vec3Like):
        object.__setattr__(self, "origin", GeomMath.as_vec3(origin))
        object.__setattr__(self, "direction", GeomMath.as_vec3(direction))

    def distance_to(self, point: Vec3Like) -> float:
        """
        Perpendicular distance of _point_ to the line of the ray.

        Computed as |direction x (point - origin)|, so the result is scaled by the
        length of the direction when it is not a unit vector.
        """
        delta = np.asarray(point, dtype=np.float64) - self.origin
        return float(np.linalg.norm(np.cross(self.direction, delta)))

    def normalized(self) -> Ray:
        """Ray with the same origin and a unit direction."""
        return Ray(self.origin, GeomMath.normalize(self.direction))

    def __str__(self):
        return f"Ray(origin={self.origin.tolist()}, direction={self.direction.tolist()})"
