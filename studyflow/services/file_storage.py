"""
studyflow/services/file_storage.py

Local-disk backend for uploaded files. The root directory comes from
configuration; files are stored flat under generated names and the user's
original name only lives in the metadata row.
"""
from __future__ import annotations

import logging
import os
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Dict, Optional

from fastapi import Depends

from studyflow.core.config import Settings, get_settings
from studyflow.core.errors import UploadRejectedError

log = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = frozenset({
    "application/pdf",
    "image/jpeg",
    "image/png",
    "image/gif",
    "text/plain",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
})

CHUNK_SIZE = 1024 * 1024
_EXT_RE = re.compile(r"^\.[A-Za-z0-9]{1,16}$")


def check_mime_type(mime_type: Optional[str]) -> str:
    mime = (mime_type or "").split(";")[0].strip().lower()
    if mime not in ALLOWED_MIME_TYPES:
        raise UploadRejectedError("File type not allowed")
    return mime


@dataclass
class StoredFile:
    filename: str
    size: int


class LocalFileStorage:
    def __init__(self, root: str | os.PathLike):
        self.root = Path(root)

    def generate_name(self, original_name: str) -> str:
        ext = os.path.splitext(original_name or "")[1]
        if not _EXT_RE.match(ext):
            ext = ""
        return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext.lower()}"

    def path_for(self, filename: str) -> Path:
        # stored names are generated, never user supplied; refuse anything else
        if not filename or Path(filename).name != filename:
            raise ValueError(f"invalid stored filename: {filename!r}")
        return self.root / filename

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).is_file()

    def save(self, stream: BinaryIO, original_name: str, max_bytes: int) -> StoredFile:
        """Copy the stream to a new file, aborting once it grows past max_bytes."""
        self.root.mkdir(parents=True, exist_ok=True)
        filename = self.generate_name(original_name)
        path = self.path_for(filename)
        size = 0
        with open(path, "xb") as out:
            while True:
                chunk = stream.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_bytes:
                    break
                out.write(chunk)
        if size > max_bytes:
            path.unlink(missing_ok=True)
            raise UploadRejectedError("File too large")
        return StoredFile(filename=filename, size=size)

    def delete(self, filename: str) -> bool:
        path = self.path_for(filename)
        if not path.exists():
            log.warning("stored file %s already missing", filename)
            return False
        path.unlink(missing_ok=True)
        return True


# one backend per configured root
_storages: Dict[str, LocalFileStorage] = {}


def get_file_storage(settings: Settings = Depends(get_settings)) -> LocalFileStorage:
    root = settings.UPLOAD_DIR
    if root not in _storages:
        _storages[root] = LocalFileStorage(root)
    return _storages[root]
