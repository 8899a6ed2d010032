"""Test module to run examples from the examples.curve package

The tests are run using pytest.
"""

import pytest  # pylint: disable=unused-import

from examples.curve import pick_point, road_outline


def test_examples_road_outline():
    """Test function for road_outline example"""
    road_outline.main()
    assert True


def test_examples_pick_point():
    """Test function for pick_point example"""
    pick_point.main()
    assert True
