"""Orientation buckets derived from frame size."""

from __future__ import annotations

import pytest

from app.modules.videos.aspect import LANDSCAPE, OTHER, PORTRAIT, classify_orientation


@pytest.mark.parametrize(
    "width,height,expected",
    [
        (1920, 1080, LANDSCAPE),
        (1280, 720, LANDSCAPE),
        (1080, 1920, PORTRAIT),
        (720, 1280, PORTRAIT),
        (1000, 1000, OTHER),
        (640, 480, OTHER),
    ],
)
def test_common_resolutions(width, height, expected):
    assert classify_orientation(width, height) == expected


def test_ratios_that_round_onto_the_boundaries():
    # 1366/768 = 1.7786 -> 1.78, 608/1080 = 0.5629 -> 0.56
    assert classify_orientation(1366, 768) == LANDSCAPE
    assert classify_orientation(608, 1080) == PORTRAIT


def test_ratios_just_past_the_boundaries():
    # 1.7708 -> 1.77 and 0.5666 -> 0.57
    assert classify_orientation(1700, 960) == OTHER
    assert classify_orientation(612, 1080) == OTHER


def test_degenerate_geometry_is_other():
    assert classify_orientation(1920, 0) == OTHER
    assert classify_orientation(0, 1080) == OTHER
