"""
Image optimize endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import Response

from ..core.errors import UnsupportedFormat
from ..schemas.transform import OutputFormat, TransformRequest

router = APIRouter(tags=["optimize"])


def _parse_quality(value: Optional[str]) -> int:
    try:
        return int(value) if value else 0
    except ValueError:
        return 0


def _parse_output(value: Optional[str]) -> Optional[OutputFormat]:
    if not value:
        return None
    try:
        return OutputFormat(value)
    except ValueError:
        raise UnsupportedFormat(f"unsupported output format {value!r}")


@router.get("/optimize")
@router.get("/optimize/{filename}")  # filename is cosmetic
async def optimize_image(
    request: Request,
    url: str = Query(..., description="Source image URL"),
    output: Optional[str] = Query(None, description="jpeg, png or webp; defaults to the source format"),
    quality: Optional[str] = Query(None, description="JPEG quality 0-100"),
    resolution: str = Query("", description="<W>x<H>, either side may be 'auto'"),
    v: str = Query("", description="Cache-busting version token"),
):
    transform = TransformRequest(
        source_url=url,
        output_format=_parse_output(output),
        quality=_parse_quality(quality),
        resolution=resolution,
        version=v,
    )
    served = await request.app.state.optimizer.optimize(transform)
    return Response(
        content=served.content,
        media_type=served.media_type,
        headers={"X-Cache": "HIT" if served.cache_hit else "MISS"},
    )
