"""
Tests for resolution planning.
"""

import pytest

from image_optimizer.core.errors import InvalidResolution
from image_optimizer.core.resolution import Dimensions, plan_resolution


def test_auto_width_preserves_aspect_ratio():
    assert plan_resolution("autox200", 800, 400) == Dimensions(400, 200)


def test_auto_height_preserves_aspect_ratio():
    assert plan_resolution("200xauto", 800, 400) == Dimensions(200, 100)


def test_exact_size_ignores_native_ratio():
    assert plan_resolution("200x150", 800, 400) == Dimensions(200, 150)


@pytest.mark.parametrize("spec", ["auto x auto", "autoxauto", "AUTOxAuto"])
def test_double_auto_is_passthrough(spec):
    assert plan_resolution(spec, 640, 480) == Dimensions(640, 480)


def test_whitespace_around_sides():
    assert plan_resolution(" 300 x auto ", 600, 300) == Dimensions(300, 150)


def test_rounds_half_up():
    # 3 * 5 / 2 = 7.5
    assert plan_resolution("autox3", 5, 2) == Dimensions(8, 3)


def test_computed_side_never_zero():
    assert plan_resolution("1xauto", 1000, 1) == Dimensions(1, 1)


@pytest.mark.parametrize("spec", [
    "200",
    "200x100x50",
    "abcx100",
    "100x",
    "-5x100",
    "0x100",
    "100x0",
    "1.5x2",
])
def test_malformed_specs_are_rejected(spec):
    with pytest.raises(InvalidResolution):
        plan_resolution(spec, 800, 400)


@pytest.mark.parametrize("native", [(0, 400), (800, 0)])
def test_zero_native_dimension_is_rejected(native):
    with pytest.raises(InvalidResolution):
        plan_resolution("autox100", *native)
