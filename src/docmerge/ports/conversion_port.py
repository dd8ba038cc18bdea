from __future__ import annotations

from typing import Protocol, Sequence

from docmerge.domain.models import AcceptedFile, BackendReply, OutputFormat


class ConversionBackendPort(Protocol):
    def merge_and_convert(
        self, files: Sequence[AcceptedFile], output_format: OutputFormat
    ) -> BackendReply:
        """Submit files for merging and return the raw backend reply."""
