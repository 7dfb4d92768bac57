"""
Filesystem cache of encoded images.

Entries live flat in the output directory as {key}.{format}; there is no
metadata file. Entries are never evicted.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from ..schemas.transform import OutputFormat
from .errors import CacheEntryNotFound, StoreError

logger = logging.getLogger(__name__)


class ImageStore:
    def __init__(self, output_directory: Path):
        self.output_directory = Path(output_directory)
        self.output_directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, entry_name: str) -> Path:
        if not entry_name or "/" in entry_name or "\\" in entry_name or entry_name in (".", ".."):
            raise StoreError(f"invalid entry name {entry_name!r}")
        return self.output_directory / entry_name

    def exists(self, entry_name: str) -> bool:
        path = self.path_for(entry_name)
        return path.is_file() and os.access(path, os.R_OK)

    def find(self, key: str) -> Optional[str]:
        """Return the entry stored for `key` under any known format suffix."""
        for fmt in OutputFormat:
            entry_name = f"{key}.{fmt.value}"
            if self.exists(entry_name):
                return entry_name
        return None

    def read(self, entry_name: str) -> bytes:
        path = self.path_for(entry_name)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise CacheEntryNotFound(f"{entry_name} not found")
        except OSError as exc:
            raise StoreError(str(exc)) from exc

    def write(self, entry_name: str, data: bytes) -> None:
        """
        Write an entry atomically.

        Bytes land in a temp file inside the output directory which is then
        renamed over the final name, so readers never see a partial file.
        Concurrent writers of the same entry race harmlessly: last rename wins.
        """
        path = self.path_for(entry_name)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.output_directory, prefix=".tmp-", suffix=f"-{entry_name}"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            logger.error("[store] failed to write %s: %s", entry_name, exc)
            raise StoreError(str(exc)) from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
        logger.debug("[store] wrote %s (%d bytes)", entry_name, len(data))
