from .content_disposition import filename_from_content_disposition, resolve_download_filename
from .models import (
    AcceptedFile,
    CandidateFile,
    ConversionRequest,
    ConversionResult,
    IntakeResult,
    OutputFormat,
    SessionUser,
    UploadRecord,
)
from .selection import SelectionStore
from .validation import is_accepted_document, partition_candidates

__all__ = [
    "AcceptedFile",
    "CandidateFile",
    "ConversionRequest",
    "ConversionResult",
    "IntakeResult",
    "OutputFormat",
    "SelectionStore",
    "SessionUser",
    "UploadRecord",
    "filename_from_content_disposition",
    "is_accepted_document",
    "partition_candidates",
    "resolve_download_filename",
]
