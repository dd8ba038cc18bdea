from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4


class OutputFormat(str, Enum):
    MARKDOWN = "markdown"
    TEXT = "text"

    @property
    def default_filename(self) -> str:
        return "merged.md" if self is OutputFormat.MARKDOWN else "merged.txt"

    @property
    def media_type(self) -> str:
        return "text/markdown" if self is OutputFormat.MARKDOWN else "text/plain"


class SessionStatus(str, Enum):
    LOADING = "LOADING"
    AUTHENTICATED = "AUTHENTICATED"
    ANONYMOUS = "ANONYMOUS"


class OperationState(str, Enum):
    IDLE = "IDLE"
    BUSY = "BUSY"
    ERROR = "ERROR"


class AuthEvent(str, Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


@dataclass(frozen=True)
class SessionUser:
    id: str
    email: str
    access_token: str = field(default="", repr=False, compare=False)


@dataclass(frozen=True)
class CandidateFile:
    name: str
    mime_type: str
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class AcceptedFile:
    file_id: str
    name: str
    size: int
    mime_type: str
    content: bytes = field(repr=False)
    added_at: datetime | None = None

    @classmethod
    def from_candidate(cls, candidate: CandidateFile) -> AcceptedFile:
        return cls(
            file_id=str(uuid4()),
            name=candidate.name,
            size=candidate.size,
            mime_type=candidate.mime_type,
            content=candidate.content,
            added_at=datetime.now().astimezone(),
        )


@dataclass
class IntakeResult:
    accepted: list[AcceptedFile]
    rejected: list[CandidateFile]


@dataclass(frozen=True)
class UploadRecord:
    bucket: str
    key: str
    name: str


@dataclass(frozen=True)
class ConversionRequest:
    files: tuple[AcceptedFile, ...]
    format: OutputFormat


@dataclass(frozen=True)
class BackendReply:
    status_code: int
    headers: dict[str, str]
    content: bytes = field(repr=False)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def header(self, name: str) -> str | None:
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


@dataclass(frozen=True)
class ConversionResult:
    content: bytes = field(repr=False)
    filename: str
    content_type: str
