from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from docmerge.ports.download_port import DownloadSinkPort


@dataclass
class _StagedFile:
    temp_path: Path
    filename: str


class LocalFolderDownloadSink(DownloadSinkPort):
    """Save artifacts into a folder, the way a browser fills its Downloads dir.

    Staging writes a hidden part-file; trigger renames it into place and
    release removes whatever part-file is left.
    """

    def __init__(self, target_dir: str | Path) -> None:
        self._target_dir = Path(target_dir)
        self.saved_paths: list[Path] = []

    def stage(self, content: bytes, filename: str, content_type: str) -> _StagedFile:
        self._target_dir.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(prefix=".docmerge-", suffix=".part", dir=self._target_dir)
        with os.fdopen(fd, "wb") as handle:
            handle.write(content)
        return _StagedFile(temp_path=Path(temp_name), filename=filename)

    def trigger(self, handle: object) -> None:
        staged = self._as_staged(handle)
        destination = self._available_path(staged.filename)
        os.replace(staged.temp_path, destination)
        self.saved_paths.append(destination)

    def release(self, handle: object) -> None:
        staged = self._as_staged(handle)
        staged.temp_path.unlink(missing_ok=True)

    def _available_path(self, filename: str) -> Path:
        candidate = self._target_dir / filename
        stem, suffix = Path(filename).stem, Path(filename).suffix
        counter = 1
        while candidate.exists():
            candidate = self._target_dir / f"{stem} ({counter}){suffix}"
            counter += 1
        return candidate

    @staticmethod
    def _as_staged(handle: object) -> _StagedFile:
        if not isinstance(handle, _StagedFile):
            raise TypeError("Unknown download handle.")
        return handle
