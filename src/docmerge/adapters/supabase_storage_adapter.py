from __future__ import annotations

from typing import Callable
from urllib.parse import quote

import requests

from docmerge.errors import StorageError
from docmerge.ports.object_storage_port import ObjectStoragePort


class SupabaseStorageAdapter(ObjectStoragePort):
    def __init__(
        self,
        base_url: str,
        anon_key: str,
        access_token_provider: Callable[[], str],
        *,
        timeout: float | None = None,
    ) -> None:
        self._object_url = f"{base_url.rstrip('/')}/storage/v1/object"
        self._anon_key = anon_key
        self._access_token_provider = access_token_provider
        self._timeout = timeout

    def upload(self, bucket: str, key: str, content: bytes, content_type: str) -> None:
        url = f"{self._object_url}/{quote(bucket, safe='')}/{quote(key, safe='/')}"
        try:
            response = requests.post(
                url,
                data=content,
                headers={
                    "apikey": self._anon_key,
                    "Authorization": f"Bearer {self._access_token_provider()}",
                    "Content-Type": content_type or "application/octet-stream",
                    "x-upsert": "false",
                },
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise StorageError(f"Storage request failed: {exc}") from exc
        self._raise_for_status(response, key)

    @staticmethod
    def _raise_for_status(response: requests.Response, key: str) -> None:
        if response.status_code < 400:
            return
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and (payload.get("message") or payload.get("error")):
            raise StorageError(str(payload.get("message") or payload.get("error")))
        if response.status_code in (401, 403):
            raise StorageError(f"Auth failed while attempting to upload {key}.")
        raise StorageError(f"Storage API error {response.status_code} while attempting to upload {key}.")
