from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any
from uuid import uuid4

from docmerge.ports.download_port import DownloadSinkPort

STAGED_DOWNLOADS_KEY = "staged_downloads"
READY_DOWNLOAD_KEY = "ready_download"


class SessionStateDownloadSink(DownloadSinkPort):
    """Download sink backed by Streamlit session state.

    Streamlit cannot start a browser download from Python, so ``trigger``
    publishes the artifact under ``ready_download`` and the page renders it
    with ``st.download_button``. Staged copies are dropped on ``release``.
    """

    def __init__(self, state: MutableMapping[str, Any]) -> None:
        self._state = state

    def stage(self, content: bytes, filename: str, content_type: str) -> str:
        token = str(uuid4())
        self._staged()[token] = {
            "data": content,
            "file_name": filename,
            "mime": content_type,
        }
        return token

    def trigger(self, handle: object) -> None:
        staged = self._staged().get(str(handle))
        if staged is None:
            raise KeyError(f"Unknown download handle: {handle}")
        self._state[READY_DOWNLOAD_KEY] = dict(staged)

    def release(self, handle: object) -> None:
        self._staged().pop(str(handle), None)

    def _staged(self) -> dict[str, dict[str, Any]]:
        if STAGED_DOWNLOADS_KEY not in self._state:
            self._state[STAGED_DOWNLOADS_KEY] = {}
        return self._state[STAGED_DOWNLOADS_KEY]
