"""Cache key derivation for transform requests."""

import hashlib

from ..schemas.transform import OutputFormat, TransformRequest


def derive_cache_key(request: TransformRequest) -> str:
    """
    MD5 hex digest over the request fields in a fixed order.

    An unset output format hashes as the empty string, so it gets its own
    namespace separate from the format it later resolves to.
    """
    fmt = request.output_format.value if request.output_format else ""
    params = "-".join([
        request.source_url,
        fmt,
        str(request.quality),
        request.resolution,
        request.version,
    ])
    return hashlib.md5(params.encode("utf-8")).hexdigest()


def cache_entry_name(key: str, output_format: OutputFormat) -> str:
    return f"{key}.{output_format.value}"
