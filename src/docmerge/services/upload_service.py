from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from docmerge.domain.models import AcceptedFile, SessionUser, UploadRecord
from docmerge.errors import StorageError, UploadError
from docmerge.ports.object_storage_port import ObjectStoragePort
from docmerge.services.time_utils import now_epoch_ms

logger = logging.getLogger(__name__)


def build_upload_key(user_id: str, epoch_millis: int, filename: str) -> str:
    """
    Object key for one upload, namespaced by user.

    Example:
        >>> build_upload_key("u-1", 1700000000000, "a.docx")
        'u-1/1700000000000-a.docx'
    """
    return f"{user_id}/{epoch_millis}-{filename}"


class UploadService:
    def __init__(
        self,
        storage: ObjectStoragePort,
        bucket: str,
        clock_ms: Callable[[], int] = now_epoch_ms,
    ) -> None:
        self._storage = storage
        self._bucket = bucket
        self._clock_ms = clock_ms

    def upload_batch(self, user: SessionUser, files: Sequence[AcceptedFile]) -> list[UploadRecord]:
        """Upload files one after another, stopping at the first failure.

        Files uploaded before the failure stay in storage; their keys are
        attached to the raised ``UploadError``.
        """
        records: list[UploadRecord] = []
        for accepted in files:
            key = build_upload_key(user.id, self._clock_ms(), accepted.name)
            try:
                self._storage.upload(self._bucket, key, accepted.content, accepted.mime_type)
            except StorageError as exc:
                raise UploadError(
                    str(exc),
                    filename=accepted.name,
                    uploaded_keys=[record.key for record in records],
                ) from exc
            logger.info("Uploaded %s to %s/%s", accepted.name, self._bucket, key)
            records.append(UploadRecord(bucket=self._bucket, key=key, name=accepted.name))
        return records
