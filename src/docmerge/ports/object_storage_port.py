from __future__ import annotations

from typing import Protocol


class ObjectStoragePort(Protocol):
    def upload(self, bucket: str, key: str, content: bytes, content_type: str) -> None:
        """Persist bytes under bucket/key; raises StorageError on rejection."""
