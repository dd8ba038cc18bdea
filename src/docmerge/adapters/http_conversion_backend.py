from __future__ import annotations

from typing import Sequence

import requests

from docmerge.domain.models import AcceptedFile, BackendReply, OutputFormat
from docmerge.errors import ConversionError
from docmerge.ports.conversion_port import ConversionBackendPort

MERGE_AND_CONVERT_PATH = "/api/merge-and-convert"


class HttpConversionBackend(ConversionBackendPort):
    def __init__(self, base_url: str, *, timeout: float | None = None) -> None:
        self._endpoint = f"{base_url.rstrip('/')}{MERGE_AND_CONVERT_PATH}"
        self._timeout = timeout

    def merge_and_convert(
        self, files: Sequence[AcceptedFile], output_format: OutputFormat
    ) -> BackendReply:
        multipart = [
            (
                "files[]",
                (accepted.name, accepted.content, accepted.mime_type or "application/octet-stream"),
            )
            for accepted in files
        ]
        try:
            response = requests.post(
                self._endpoint,
                files=multipart,
                data={"format": output_format.value},
                timeout=self._timeout,
            )
            content = response.content
        except requests.RequestException as exc:
            raise ConversionError(f"Failed to reach conversion backend: {exc}") from exc
        return BackendReply(
            status_code=response.status_code,
            headers={str(key): str(value) for key, value in response.headers.items()},
            content=content,
        )
