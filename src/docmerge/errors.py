"""Exception types and user-facing message prefixes."""

from __future__ import annotations

UPLOAD_ERROR_PREFIX = "Error uploading files: "
CONVERSION_ERROR_PREFIX = "Error converting files: "
GENERIC_CONVERSION_MESSAGE = "Error converting files"


class DocMergeError(RuntimeError):
    """Base class for errors raised by docmerge services and adapters."""


class AuthError(DocMergeError):
    pass


class SessionRequiredError(DocMergeError):
    pass


class StorageError(DocMergeError):
    pass


class UploadError(DocMergeError):
    def __init__(self, message: str, filename: str, uploaded_keys: list[str] | None = None) -> None:
        super().__init__(message)
        self.filename = filename
        self.uploaded_keys = list(uploaded_keys or [])


class ConversionError(DocMergeError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
