from __future__ import annotations

from typing import Any, Callable

from docmerge.adapters.http_conversion_backend import HttpConversionBackend
from docmerge.adapters.supabase_auth_adapter import SupabaseAuthAdapter
from docmerge.adapters.supabase_storage_adapter import SupabaseStorageAdapter
from docmerge.domain.selection import SelectionStore
from docmerge.errors import AuthError, StorageError
from docmerge.ports.download_port import DownloadSinkPort
from docmerge.ports.identity_port import IdentityPort
from docmerge.settings import (
    AUTH_TIMEOUT,
    BACKEND_URL,
    CONVERT_TIMEOUT,
    STORAGE_BUCKET,
    SUPABASE_ANON_KEY,
    SUPABASE_URL,
)
from docmerge.services.conversion_service import ConversionService
from docmerge.services.intake_service import IntakeService
from docmerge.services.session_watcher import SessionWatcher
from docmerge.services.upload_service import UploadService
from docmerge.services.workspace import Workspace


def session_token_provider(identity: IdentityPort) -> Callable[[], str]:
    """Access token getter that goes through the identity provider on every call.

    Expired sessions are refreshed there before the token is handed out.
    """

    def _access_token() -> str:
        try:
            user = identity.get_session()
        except AuthError as exc:
            raise StorageError(f"Session could not be refreshed: {exc}") from exc
        if user is None:
            raise StorageError("No active session.")
        return user.access_token

    return _access_token


def build_services(
    downloads: DownloadSinkPort,
    *,
    identity: IdentityPort | None = None,
    backend_url: str = BACKEND_URL,
    use_keyring: bool = True,
) -> dict[str, Any]:
    if not SUPABASE_URL and identity is None:
        raise RuntimeError("SUPABASE_URL is not configured.")
    auth = identity or SupabaseAuthAdapter(
        SUPABASE_URL,
        SUPABASE_ANON_KEY,
        timeout=AUTH_TIMEOUT,
        use_keyring=use_keyring,
    )
    session = SessionWatcher(auth)
    storage = SupabaseStorageAdapter(SUPABASE_URL, SUPABASE_ANON_KEY, session_token_provider(auth))
    backend = HttpConversionBackend(backend_url, timeout=CONVERT_TIMEOUT)
    selection = SelectionStore()
    intake_service = IntakeService(selection)
    upload_service = UploadService(storage, STORAGE_BUCKET)
    conversion_service = ConversionService(backend, downloads)
    workspace = Workspace(session, selection, intake_service, upload_service, conversion_service)
    return {
        "workspace": workspace,
        "session": session,
        "selection": selection,
        "intake_service": intake_service,
        "upload_service": upload_service,
        "conversion_service": conversion_service,
        "identity": auth,
        "storage": storage,
        "backend": backend,
        "downloads": downloads,
    }
