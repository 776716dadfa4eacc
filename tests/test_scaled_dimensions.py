# tests/test_scaled_dimensions.py
"""
Tests for scaled_dimensions: aspect ratio kept, larger side at the bound,
smaller side floored.
"""

import pytest

from mummy.mummify.image import scaled_dimensions


@pytest.mark.parametrize(
    "width,height,max_length,expected",
    [
        (4000, 2000, 2560, (2560, 1280)),
        (2000, 4000, 2560, (1280, 2560)),
        (3000, 3000, 800, (800, 800)),
        (1000, 333, 100, (100, 33)),
        (10000, 1, 2560, (2560, 1)),
    ],
)
def test_scaled_dimensions(width, height, max_length, expected):
    assert scaled_dimensions(width, height, max_length) == expected


def test_never_exceeds_bound():
    for height in range(1, 200):
        width, scaled_height = scaled_dimensions(997, height, 100)
        assert width <= 100 and scaled_height <= 100


def test_invalid_dimensions():
    with pytest.raises(ValueError):
        scaled_dimensions(0, 10, 100)
    with pytest.raises(ValueError):
        scaled_dimensions(10, 10, 0)
