from __future__ import annotations

from typing import Iterable, Iterator

from .models import AcceptedFile


class SelectionStore:
    """Ordered, in-memory list of the files chosen for conversion.

    Insertion order is kept and duplicate names are allowed. Each file also
    carries a generated ``file_id`` so callers can remove by identity instead
    of by a position that may have shifted.
    """

    def __init__(self, files: Iterable[AcceptedFile] | None = None) -> None:
        self._files: list[AcceptedFile] = list(files or [])

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[AcceptedFile]:
        return iter(tuple(self._files))

    @property
    def files(self) -> tuple[AcceptedFile, ...]:
        return tuple(self._files)

    def is_empty(self) -> bool:
        return not self._files

    def append(self, files: Iterable[AcceptedFile]) -> None:
        self._files.extend(files)

    def remove_at(self, index: int) -> bool:
        # Negative indexes are rejected rather than counted from the end.
        if index < 0 or index >= len(self._files):
            return False
        del self._files[index]
        return True

    def remove(self, file_id: str) -> bool:
        for index, accepted in enumerate(self._files):
            if accepted.file_id == file_id:
                del self._files[index]
                return True
        return False

    def clear(self) -> None:
        self._files.clear()
