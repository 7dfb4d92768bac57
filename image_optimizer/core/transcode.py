"""
Resize + re-encode decoded images.

Fixed policies: PNG always uses the slowest/best zlib level, WEBP is always
lossless (quality is ignored), JPEG honours the requested quality.
"""

from io import BytesIO
from typing import Optional

from PIL import Image

from ..schemas.transform import OutputFormat
from .errors import EncodeError, UnsupportedFormat
from .resolution import Dimensions

PNG_COMPRESS_LEVEL = 9

_PNG_MODES = ("1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA")


def _has_alpha(im: Image.Image) -> bool:
    return "A" in im.getbands() or "transparency" in im.info


def _to_rgb(im: Image.Image) -> Image.Image:
    return im.convert("RGBA" if _has_alpha(im) else "RGB")


def resize_image(im: Image.Image, dimensions: Dimensions) -> Image.Image:
    """Lanczos resample into a new image; `im` is left untouched."""
    if tuple(dimensions) == im.size:
        return im
    # Pillow falls back to NEAREST for palette and bilevel images
    if im.mode == "1":
        im = im.convert("L")
    elif im.mode == "P":
        im = _to_rgb(im)
    return im.resize(tuple(dimensions), Image.LANCZOS)


def _flatten_for_jpeg(im: Image.Image) -> Image.Image:
    if im.mode in ("RGB", "L", "CMYK"):
        return im
    return im.convert("RGB")


def encode_image(
    im: Image.Image,
    output_format: OutputFormat,
    quality: int,
    dimensions: Optional[Dimensions] = None,
) -> bytes:
    if output_format not in (OutputFormat.JPEG, OutputFormat.PNG, OutputFormat.WEBP):
        raise UnsupportedFormat(f"unsupported output format {output_format!r}")

    if dimensions is not None:
        im = resize_image(im, dimensions)

    buffer = BytesIO()
    try:
        if output_format == OutputFormat.JPEG:
            # Out-of-range quality is left to the codec
            _flatten_for_jpeg(im).save(buffer, format="JPEG", quality=quality)
        elif output_format == OutputFormat.PNG:
            if im.mode not in _PNG_MODES:
                im = _to_rgb(im)
            im.save(buffer, format="PNG", compress_level=PNG_COMPRESS_LEVEL)
        else:
            if im.mode not in ("RGB", "RGBA"):
                im = _to_rgb(im)
            im.save(buffer, format="WEBP", lossless=True)
    except (OSError, ValueError, KeyError, OverflowError) as exc:
        raise EncodeError(str(exc)) from exc
    return buffer.getvalue()
