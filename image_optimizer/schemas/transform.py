"""
Request/response schemas for image transforms.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OutputFormat(str, Enum):
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"


CONTENT_TYPES = {
    OutputFormat.JPEG: "image/jpeg",
    OutputFormat.PNG: "image/png",
    OutputFormat.WEBP: "image/webp",
}


class TransformRequest(BaseModel):
    """One inbound transform request; immutable once built."""
    model_config = ConfigDict(frozen=True)

    source_url: str
    output_format: Optional[OutputFormat] = None
    quality: int = 0
    resolution: str = ""
    version: str = Field("", description="Opaque cache-buster, only part of the cache key")


@dataclass
class ServedImage:
    """Encoded bytes ready to be sent back to the caller."""
    content: bytes
    output_format: OutputFormat
    entry_name: str
    cache_hit: bool

    @property
    def media_type(self) -> str:
        return CONTENT_TYPES[self.output_format]
