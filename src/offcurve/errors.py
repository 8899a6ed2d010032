"""Exceptions raised by curve chain operations."""

from __future__ import annotations


class CurveError(Exception):
    """Base exception for curve chain errors."""


class InvalidDistanceError(CurveError, ValueError):
    """Raised when a distance along the curve is negative or out of range."""
