from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DownloadSinkPort(Protocol):
    def stage(self, content: bytes, filename: str, content_type: str) -> object:
        """Create a temporary resource holding the artifact and return its handle."""

    def trigger(self, handle: object) -> None:
        """Hand the staged artifact to the user under its filename."""

    def release(self, handle: object) -> None:
        """Free the temporary resource; safe to call after a failed trigger."""
