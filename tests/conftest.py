"""
Shared fixtures: in-memory source images served through httpx.MockTransport.
"""

from io import BytesIO

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from image_optimizer.core.config import Settings
from image_optimizer.core.image_fetch import SourceFetcher
from image_optimizer.core.image_store import ImageStore
from image_optimizer.main import create_app
from image_optimizer.services.optimizer import ImageOptimizer


def make_image_bytes(fmt: str = "PNG", size=(80, 40), mode: str = "RGB", **save_kwargs) -> bytes:
    color = (200, 30, 30, 255)[: len(mode)] if mode != "L" else 128
    im = Image.new(mode, size, color)
    buffer = BytesIO()
    im.save(buffer, format=fmt, **save_kwargs)
    return buffer.getvalue()


class FakeOrigin:
    """Maps URLs to (content_type, body, status) and counts requests."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, url: str, body: bytes, content_type: str, status_code: int = 200):
        self.routes[url] = (content_type, body, status_code)

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        if url not in self.routes:
            return httpx.Response(404, headers={"content-type": "text/plain"}, content=b"not found")
        content_type, body, status_code = self.routes[url]
        return httpx.Response(status_code, headers={"content-type": content_type}, content=body)


@pytest.fixture
def origin():
    return FakeOrigin()


@pytest.fixture
def fetcher(origin):
    client = httpx.AsyncClient(transport=httpx.MockTransport(origin.handler))
    return SourceFetcher(timeout=5.0, client=client)


@pytest.fixture
def settings(tmp_path):
    return Settings(OUTPUT_DIRECTORY=tmp_path / "out", ALLOWED_DOMAINS="*")


@pytest.fixture
def store(settings):
    return ImageStore(settings.OUTPUT_DIRECTORY)


@pytest.fixture
def optimizer(settings, store, fetcher):
    return ImageOptimizer(settings, store=store, fetcher=fetcher)


@pytest.fixture
def client(settings, optimizer):
    return TestClient(create_app(settings, optimizer=optimizer))
