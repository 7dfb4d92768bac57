"""
Resolution specs: "<W>x<H>" where either side may be "auto".

    "800x600"    exact size, aspect ratio ignored
    "auto x 200" height 200, width follows the native aspect ratio
    "300xauto"   width 300, height follows the native aspect ratio
    "autoxauto"  native size
"""

import math
from typing import NamedTuple, Optional

from .errors import InvalidResolution

AUTO = "auto"


class Dimensions(NamedTuple):
    width: int
    height: int


def _parse_side(value: str, spec: str) -> Optional[int]:
    """Return None for "auto", otherwise a positive pixel count."""
    if value == AUTO:
        return None
    if not (value.isascii() and value.isdigit()):
        raise InvalidResolution(f"{spec!r}: {value!r} is not a number or 'auto'")
    size = int(value)
    if size == 0:
        raise InvalidResolution(f"{spec!r}: dimensions must be greater than zero")
    return size


def _scale(target: int, numerator: int, denominator: int) -> int:
    # Round half up, never collapse to 0 px
    return max(1, math.floor(target * numerator / denominator + 0.5))


def plan_resolution(spec: str, native_width: int, native_height: int) -> Dimensions:
    parts = spec.lower().split("x")
    if len(parts) != 2:
        raise InvalidResolution(f"{spec!r}: expected <width>x<height>")
    if native_width <= 0 or native_height <= 0:
        raise InvalidResolution(f"source image has no area ({native_width}x{native_height})")

    width = _parse_side(parts[0].strip(), spec)
    height = _parse_side(parts[1].strip(), spec)

    if width is None and height is None:
        return Dimensions(native_width, native_height)
    if width is None:
        return Dimensions(_scale(height, native_width, native_height), height)
    if height is None:
        return Dimensions(width, _scale(width, native_height, native_width))
    return Dimensions(width, height)
