from __future__ import annotations

from typing import Iterable

from .models import CandidateFile

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MIME_TYPE = "application/msword"
ACCEPTED_MIME_TYPES = frozenset({DOCX_MIME_TYPE, DOC_MIME_TYPE})
ACCEPTED_EXTENSIONS = (".docx", ".doc")


def is_accepted_document(name: str, mime_type: str | None) -> bool:
    """
    Return True for Word documents, judged by MIME type or by file extension.

    Examples:
        >>> is_accepted_document("notes.DOCX", "")
        True
        >>> is_accepted_document("blob", "application/msword")
        True
        >>> is_accepted_document("slides.pdf", "application/pdf")
        False
    """
    if (mime_type or "") in ACCEPTED_MIME_TYPES:
        return True
    return (name or "").lower().endswith(ACCEPTED_EXTENSIONS)


def partition_candidates(
    candidates: Iterable[CandidateFile],
) -> tuple[list[CandidateFile], list[CandidateFile]]:
    """Split candidates into (accepted, rejected), preserving input order."""
    accepted: list[CandidateFile] = []
    rejected: list[CandidateFile] = []
    for candidate in candidates:
        if is_accepted_document(candidate.name, candidate.mime_type):
            accepted.append(candidate)
        else:
            rejected.append(candidate)
    return accepted, rejected
