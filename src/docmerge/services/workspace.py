"""Session-scoped controller that sequences intake, upload and conversion."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from docmerge.domain.models import (
    AcceptedFile,
    CandidateFile,
    ConversionResult,
    IntakeResult,
    OperationState,
    OutputFormat,
    SessionStatus,
    SessionUser,
)
from docmerge.domain.selection import SelectionStore
from docmerge.errors import CONVERSION_ERROR_PREFIX, UPLOAD_ERROR_PREFIX, SessionRequiredError
from docmerge.services.conversion_service import ConversionService
from docmerge.services.intake_service import IntakeService
from docmerge.services.session_watcher import SessionWatcher
from docmerge.services.upload_service import UploadService

logger = logging.getLogger(__name__)


class Workspace:
    """Owns the selection, the busy flags and the single error slot.

    Upload and conversion each move IDLE -> BUSY -> IDLE|ERROR. While either
    one is BUSY every other upload, conversion or removal request is refused,
    so rapid or re-entrant calls can never overlap. Failures never escape
    ``add_files`` or ``convert_and_download``; they land in ``error``.
    """

    def __init__(
        self,
        session: SessionWatcher,
        selection: SelectionStore,
        intake: IntakeService,
        uploads: UploadService,
        conversions: ConversionService,
    ) -> None:
        self._session = session
        self._selection = selection
        self._intake = intake
        self._uploads = uploads
        self._conversions = conversions
        self._upload_state = OperationState.IDLE
        self._convert_state = OperationState.IDLE
        self._error: str | None = None
        self._unsubscribe = session.subscribe(self._on_session_change)

    @property
    def files(self) -> tuple[AcceptedFile, ...]:
        return self._selection.files

    @property
    def upload_state(self) -> OperationState:
        return self._upload_state

    @property
    def convert_state(self) -> OperationState:
        return self._convert_state

    @property
    def is_uploading(self) -> bool:
        return self._upload_state is OperationState.BUSY

    @property
    def is_converting(self) -> bool:
        return self._convert_state is OperationState.BUSY

    @property
    def is_busy(self) -> bool:
        return self.is_uploading or self.is_converting

    @property
    def can_convert(self) -> bool:
        return not self._selection.is_empty() and not self.is_busy

    @property
    def error(self) -> str | None:
        return self._error

    def clear_error(self) -> None:
        self._error = None

    def add_files(self, candidates: Iterable[CandidateFile]) -> IntakeResult | None:
        """Validate candidates, add the accepted ones and upload them.

        Returns None when refused because another operation is in flight.
        """
        user = self._require_user()
        if self.is_busy:
            logger.warning("Ignoring new files while %s is in progress", self._busy_operation())
            return None
        result = self._intake.accept(candidates)
        if result.accepted:
            self._upload(user, result.accepted)
        return result

    def remove_file(self, file_id: str) -> bool:
        self._require_user()
        if self.is_busy:
            return False
        return self._selection.remove(file_id)

    def remove_at(self, index: int) -> bool:
        self._require_user()
        if self.is_busy:
            return False
        return self._selection.remove_at(index)

    def convert_and_download(self, output_format: OutputFormat | str) -> ConversionResult | None:
        """Convert the current selection and hand the result to the download sink.

        No-op (returns None, flags untouched) when the selection is empty or an
        operation is already running.
        """
        if self._selection.is_empty():
            return None
        if self.is_busy:
            logger.warning("Ignoring conversion request while %s is in progress", self._busy_operation())
            return None
        self._error = None
        self._convert_state = OperationState.BUSY
        try:
            request = self._conversions.build_request(self._selection.files, output_format)
            result = self._conversions.convert_and_deliver(request)
        except Exception as exc:
            logger.exception("Conversion failed")
            self._error = f"{CONVERSION_ERROR_PREFIX}{exc}"
            self._convert_state = OperationState.ERROR
            return None
        finally:
            if self._convert_state is OperationState.BUSY:
                self._convert_state = OperationState.IDLE
        return result

    def close(self) -> None:
        self._unsubscribe()

    def _upload(self, user: SessionUser, files: list[AcceptedFile]) -> None:
        self._error = None
        self._upload_state = OperationState.BUSY
        try:
            self._uploads.upload_batch(user, files)
        except Exception as exc:
            logger.exception("Upload failed")
            self._error = f"{UPLOAD_ERROR_PREFIX}{exc}"
            self._upload_state = OperationState.ERROR
        finally:
            if self._upload_state is OperationState.BUSY:
                self._upload_state = OperationState.IDLE

    def _busy_operation(self) -> str:
        return "an upload" if self.is_uploading else "a conversion"

    def _require_user(self) -> SessionUser:
        user = self._session.user
        if user is None:
            raise SessionRequiredError("Sign in to change the file selection.")
        return user

    def _on_session_change(self, status: SessionStatus, user: SessionUser | None) -> None:
        if status is SessionStatus.ANONYMOUS:
            self._selection.clear()
            self._error = None
