"""
Error types raised by the transform-and-cache pipeline.

Each error carries the HTTP status it maps to and the prefix used for the
human-readable line returned to the caller.
"""


class ImageOptimizerError(Exception):
    """Base error for every terminal failure of a request."""

    status_code = 500
    prefix = "Error processing image"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> str:
        if not self.message:
            return self.prefix
        return f"{self.prefix}: {self.message}"


class DomainNotAllowed(ImageOptimizerError):
    status_code = 403
    prefix = "URL domain not allowed"

    @property
    def detail(self) -> str:
        return self.prefix


class FetchError(ImageOptimizerError):
    prefix = "Error downloading image"


class UnsupportedFormat(ImageOptimizerError):
    prefix = "Unsupported image format"


class DecodeError(ImageOptimizerError):
    prefix = "Error downloading image"


class InvalidResolution(ImageOptimizerError):
    status_code = 400
    prefix = "Invalid resolution"


class EncodeError(ImageOptimizerError):
    prefix = "Error compressing image"


class StoreError(ImageOptimizerError):
    prefix = "Error storing compressed image"


class CacheEntryNotFound(StoreError):
    prefix = "Error opening compressed image file"
