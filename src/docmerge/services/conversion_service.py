from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from docmerge.domain.content_disposition import resolve_download_filename
from docmerge.domain.models import (
    AcceptedFile,
    BackendReply,
    ConversionRequest,
    ConversionResult,
    OutputFormat,
)
from docmerge.errors import GENERIC_CONVERSION_MESSAGE, ConversionError
from docmerge.ports.conversion_port import ConversionBackendPort
from docmerge.ports.download_port import DownloadSinkPort

logger = logging.getLogger(__name__)


def error_message_from_reply(reply: BackendReply) -> str:
    try:
        payload = json.loads(reply.content.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return f"Unexpected response from conversion backend (HTTP {reply.status_code})"
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return GENERIC_CONVERSION_MESSAGE


def interpret_reply(reply: BackendReply, output_format: OutputFormat) -> ConversionResult:
    """Turn a backend reply into a downloadable result, or raise ConversionError."""
    if not reply.ok:
        raise ConversionError(error_message_from_reply(reply), status_code=reply.status_code)
    filename = resolve_download_filename(reply.header("Content-Disposition"), output_format)
    content_type = reply.header("Content-Type") or output_format.media_type
    return ConversionResult(content=reply.content, filename=filename, content_type=content_type)


class ConversionService:
    def __init__(self, backend: ConversionBackendPort, downloads: DownloadSinkPort) -> None:
        self._backend = backend
        self._downloads = downloads

    @staticmethod
    def build_request(
        files: Sequence[AcceptedFile], output_format: OutputFormat | str
    ) -> ConversionRequest:
        return ConversionRequest(files=tuple(files), format=OutputFormat(output_format))

    def convert(self, request: ConversionRequest) -> ConversionResult:
        if not request.files:
            raise ConversionError("No files selected for conversion.")
        logger.info("Converting %d file(s) to %s", len(request.files), request.format.value)
        reply = self._backend.merge_and_convert(request.files, request.format)
        return interpret_reply(reply, request.format)

    def deliver(self, result: ConversionResult) -> None:
        handle = self._downloads.stage(result.content, result.filename, result.content_type)
        try:
            self._downloads.trigger(handle)
        finally:
            self._downloads.release(handle)

    def convert_and_deliver(self, request: ConversionRequest) -> ConversionResult:
        result = self.convert(request)
        self.deliver(result)
        logger.info("Delivered %s (%d bytes)", result.filename, len(result.content))
        return result
