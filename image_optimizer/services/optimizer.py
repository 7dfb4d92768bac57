"""
Per-request transform pipeline.

allow-list -> cache key -> lookup -> (miss) fetch/decode -> plan -> encode
-> store -> serve. No state is kept between requests apart from the files in
the output directory.

Two concurrent misses for the same key both run the full pipeline and both
write the entry; the writes are atomic and produce identical bytes, so the
duplicate work is accepted instead of adding per-key locks.
"""

import asyncio
import logging
from typing import Optional

from ..core.allowlist import is_domain_allowed
from ..core.cache_keys import cache_entry_name, derive_cache_key
from ..core.config import Settings
from ..core.errors import DomainNotAllowed, ImageOptimizerError
from ..core.image_fetch import DecodedImage, SourceFetcher
from ..core.image_store import ImageStore
from ..core.resolution import plan_resolution
from ..core.transcode import encode_image
from ..schemas.transform import OutputFormat, ServedImage, TransformRequest

logger = logging.getLogger(__name__)


def _transcode(decoded: DecodedImage, output_format: OutputFormat, quality: int, resolution: str) -> bytes:
    dimensions = None
    if resolution:
        dimensions = plan_resolution(resolution, decoded.width, decoded.height)
    return encode_image(decoded.image, output_format, quality, dimensions)


class ImageOptimizer:
    def __init__(
        self,
        settings: Settings,
        store: Optional[ImageStore] = None,
        fetcher: Optional[SourceFetcher] = None,
    ):
        self.settings = settings
        self.store = store or ImageStore(settings.OUTPUT_DIRECTORY)
        self.fetcher = fetcher or SourceFetcher(timeout=settings.FETCH_TIMEOUT_SECONDS)

    def _lookup(self, key: str, output_format: Optional[OutputFormat]) -> Optional[str]:
        if output_format is None:
            return self.store.find(key)
        entry_name = cache_entry_name(key, output_format)
        return entry_name if self.store.exists(entry_name) else None

    async def _serve(self, entry_name: str, cache_hit: bool) -> ServedImage:
        content = await asyncio.to_thread(self.store.read, entry_name)
        fmt = OutputFormat(entry_name.rsplit(".", 1)[1])
        return ServedImage(content=content, output_format=fmt, entry_name=entry_name, cache_hit=cache_hit)

    async def optimize(self, request: TransformRequest) -> ServedImage:
        url = request.source_url
        try:
            if not is_domain_allowed(url, self.settings.ALLOWED_DOMAINS):
                raise DomainNotAllowed(url)

            key = derive_cache_key(request)
            entry_name = await asyncio.to_thread(self._lookup, key, request.output_format)
            if entry_name:
                served = await self._serve(entry_name, cache_hit=True)
                logger.debug("[optimizer] cache hit %s for %s", entry_name, url[:80])
                return served

            decoded = await self.fetcher.fetch(url)
            output_format = request.output_format or decoded.source_format
            entry_name = cache_entry_name(key, output_format)

            data = await asyncio.to_thread(
                _transcode, decoded, output_format, request.quality, request.resolution
            )
            await asyncio.to_thread(self.store.write, entry_name, data)
            served = await self._serve(entry_name, cache_hit=False)
        except ImageOptimizerError as exc:
            logger.warning("[optimizer] %s failed for %s: %s", exc.__class__.__name__, url[:80], exc.detail)
            raise

        logger.info(
            "[optimizer] served %s (%s, %d bytes) for %s",
            entry_name, output_format.value, len(served.content), url[:80],
        )
        return served
