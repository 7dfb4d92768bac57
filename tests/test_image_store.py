"""
Tests for the filesystem image store.
"""

import pytest

from image_optimizer.core.errors import CacheEntryNotFound, StoreError
from image_optimizer.core.image_store import ImageStore


def test_creates_output_directory(tmp_path):
    target = tmp_path / "nested" / "out"
    ImageStore(target)
    assert target.is_dir()


def test_write_then_read(store):
    store.write("abc.png", b"\x89PNG data")
    assert store.exists("abc.png")
    assert store.read("abc.png") == b"\x89PNG data"


def test_missing_entry(store):
    assert not store.exists("nope.jpeg")
    with pytest.raises(CacheEntryNotFound):
        store.read("nope.jpeg")


def test_overwrite_replaces_content(store):
    store.write("abc.webp", b"first")
    store.write("abc.webp", b"second")
    assert store.read("abc.webp") == b"second"


def test_write_leaves_no_temp_files(store):
    store.write("abc.jpeg", b"x" * 1024)
    names = [p.name for p in store.output_directory.iterdir()]
    assert names == ["abc.jpeg"]


def test_directory_is_not_an_entry(store):
    (store.output_directory / "dir.png").mkdir()
    assert not store.exists("dir.png")


def test_find_probes_known_formats(store):
    assert store.find("k") is None
    store.write("k.webp", b"data")
    assert store.find("k") == "k.webp"


@pytest.mark.parametrize("name", ["", "../escape.png", "a/b.png", ".."])
def test_rejects_path_like_names(store, name):
    with pytest.raises(StoreError):
        store.write(name, b"data")


def test_write_failure_raises_store_error(store, monkeypatch):
    import os

    def boom(src, dst):
        raise PermissionError("read-only filesystem")

    monkeypatch.setattr(os, "replace", boom)
    with pytest.raises(StoreError):
        store.write("abc.png", b"data")
    # temp file cleaned up, nothing half-written
    assert list(store.output_directory.iterdir()) == []
