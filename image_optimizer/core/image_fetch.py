"""
Download source images and decode them with Pillow.
"""

import asyncio
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

import httpx
from PIL import Image

from ..schemas.transform import OutputFormat
from .errors import DecodeError, FetchError, UnsupportedFormat

logger = logging.getLogger(__name__)

# Checked in this order, first containment match wins
_CONTENT_TYPE_MARKERS = (
    ("jpeg", OutputFormat.JPEG),
    ("png", OutputFormat.PNG),
    ("webp", OutputFormat.WEBP),
)

_PIL_FORMATS = {
    OutputFormat.JPEG: "JPEG",
    OutputFormat.PNG: "PNG",
    OutputFormat.WEBP: "WEBP",
}


@dataclass
class DecodedImage:
    image: Image.Image
    source_format: OutputFormat

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height


def detect_source_format(content_type: str) -> OutputFormat:
    for marker, fmt in _CONTENT_TYPE_MARKERS:
        if marker in content_type:
            return fmt
    raise UnsupportedFormat(f"unsupported image format {content_type!r}")


def decode_image(content: bytes, source_format: OutputFormat) -> DecodedImage:
    """Decode `content` using only the decoder for `source_format`."""
    try:
        im = Image.open(BytesIO(content), formats=[_PIL_FORMATS[source_format]])
        im.load()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(str(exc)) from exc
    return DecodedImage(image=im, source_format=source_format)


class SourceFetcher:
    """
    Fetch + decode of a source image.

    Pass `client` to reuse a pooled httpx client; otherwise one is opened per
    fetch with `timeout` applied.
    """

    def __init__(self, timeout: float, client: Optional[httpx.AsyncClient] = None):
        self.timeout = timeout
        self._client = client

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            return await client.get(url)

    async def fetch(self, url: str) -> DecodedImage:
        try:
            resp = await self._get(url)
        except httpx.TimeoutException as exc:
            logger.warning("[fetch] timeout after %.1fs: %s", self.timeout, url[:80])
            raise FetchError(f"timeout after {self.timeout}s") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("[fetch] request failed for %s: %s", url[:80], exc)
            raise FetchError(str(exc) or exc.__class__.__name__) from exc

        # Non-2xx bodies go to the decoder like any other
        content_type = resp.headers.get("content-type", "")
        source_format = detect_source_format(content_type)
        logger.debug(
            "[fetch] %s -> %s (%s, %d bytes)",
            url[:80], resp.status_code, source_format.value, len(resp.content),
        )
        return await asyncio.to_thread(decode_image, resp.content, source_format)
