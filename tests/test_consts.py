"""Test module for offcurve.consts

The tests are run using pytest.
"""

import numpy as np
import pytest

from offcurve.consts import DEFAULT_SETTINGS, CurveSettings
from offcurve.segment import CurveSegment


class TestCurveSettings:
    """Test class for CurveSettings."""

    def test_defaults(self):
        """Default values match the documented constants."""
        assert DEFAULT_SETTINGS.table_size == 30
        assert DEFAULT_SETTINGS.min_segment_length == pytest.approx(0.005)
        assert DEFAULT_SETTINGS.nearest_tolerance == pytest.approx(0.001)
        assert DEFAULT_SETTINGS.up_axis == (0.0, 1.0, 0.0)

    def test_dict_round_trip(self):
        """to_dict and from_dict preserve all values."""
        settings = CurveSettings(table_size=64, min_segment_length=0.01, up_axis=(0.0, 0.0, 1.0))
        assert CurveSettings.from_dict(settings.to_dict()) == settings

    def test_from_partial_dict(self):
        """Missing keys fall back to defaults."""
        assert CurveSettings.from_dict({"table_size": 12}) == CurveSettings(table_size=12)

    def test_invalid_values(self):
        """Unusable values are rejected at construction."""
        with pytest.raises(ValueError):
            CurveSettings(table_size=1)
        with pytest.raises(ValueError):
            CurveSettings(nearest_max_iterations=0)

    def test_frozen(self):
        """Settings are immutable."""
        with pytest.raises(AttributeError):
            DEFAULT_SETTINGS.table_size = 10  # type: ignore[misc]

    def test_segments_use_settings(self):
        """Segments build their tables and normals from the given settings."""
        settings = CurveSettings(table_size=7, up_axis=(0.0, 0.0, 1.0))
        segment = CurveSegment.from_quadratic((0, 0, 0), (10, 0, 0), (20, 0, 0), settings=settings)
        assert len(segment.table) == 7
        assert np.allclose(segment.start_normal, [0.0, -1.0, 0.0])
