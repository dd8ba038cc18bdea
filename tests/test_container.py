import pytest

from docmerge.adapters import supabase_auth_adapter
from docmerge.adapters.supabase_auth_adapter import SupabaseAuthAdapter
from docmerge.adapters.supabase_storage_adapter import SupabaseStorageAdapter
from docmerge.container import session_token_provider
from docmerge.domain.models import AcceptedFile, CandidateFile, SessionStatus
from docmerge.errors import StorageError
from docmerge.services.session_watcher import SessionWatcher
from docmerge.services.upload_service import UploadService

_BASE = "https://project.supabase.co"


class _FakeResponse:
    def __init__(self, status_code: int, payload: object = None) -> None:
        self.status_code = status_code
        self._payload = payload

    def json(self) -> object:
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class _Clock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _session_payload(access_token: str, refresh_token: str) -> dict:
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "expires_in": 3600,
        "user": {"id": "user-1", "email": "a@example.com"},
    }


def _install_post(monkeypatch, auth_replies: list[_FakeResponse]) -> tuple[list[dict], list[dict]]:
    auth_calls: list[dict] = []
    storage_calls: list[dict] = []

    def _fake_post(url, **kwargs):  # noqa: ANN001
        if "/auth/v1/" in url:
            auth_calls.append({"url": url, **kwargs})
            return auth_replies.pop(0)
        storage_calls.append({"url": url, **kwargs})
        return _FakeResponse(200, {"Key": "ok"})

    # Auth and storage adapters share the same requests module.
    monkeypatch.setattr(supabase_auth_adapter.requests, "post", _fake_post)
    return auth_calls, storage_calls


def _accepted(name: str) -> AcceptedFile:
    return AcceptedFile.from_candidate(
        CandidateFile(name=name, mime_type="application/msword", content=b"doc")
    )


def test_upload_after_expiry_uses_refreshed_token(monkeypatch) -> None:
    auth_calls, storage_calls = _install_post(
        monkeypatch,
        [
            _FakeResponse(200, _session_payload("token-A", "refresh-A")),
            _FakeResponse(200, _session_payload("token-B", "refresh-B")),
        ],
    )
    clock = _Clock()
    identity = SupabaseAuthAdapter(_BASE, "anon-key", clock=clock, use_keyring=False)
    session = SessionWatcher(identity)
    session.start()
    user = session.sign_in("a@example.com", "secret")
    storage = SupabaseStorageAdapter(_BASE, "anon-key", session_token_provider(identity))
    uploads = UploadService(storage, "docx-files", clock_ms=lambda: 1700000000000)

    clock.now += 7200
    uploads.upload_batch(user, [_accepted("a.docx")])

    assert [call["params"] for call in auth_calls] == [
        {"grant_type": "password"},
        {"grant_type": "refresh_token"},
    ]
    assert auth_calls[1]["json"] == {"refresh_token": "refresh-A"}
    assert storage_calls[0]["headers"]["Authorization"] == "Bearer token-B"
    assert session.status is SessionStatus.AUTHENTICATED


def test_token_provider_reuses_valid_session(monkeypatch) -> None:
    auth_calls, _ = _install_post(
        monkeypatch, [_FakeResponse(200, _session_payload("token-A", "refresh-A"))]
    )
    identity = SupabaseAuthAdapter(_BASE, "anon-key", clock=_Clock(), use_keyring=False)
    identity.sign_in_with_password("a@example.com", "secret")

    assert session_token_provider(identity)() == "token-A"
    assert len(auth_calls) == 1


def test_token_provider_without_session_raises_storage_error(monkeypatch) -> None:
    _install_post(monkeypatch, [])
    identity = SupabaseAuthAdapter(_BASE, "anon-key", clock=_Clock(), use_keyring=False)

    with pytest.raises(StorageError, match="No active session"):
        session_token_provider(identity)()


def test_token_provider_wraps_failed_refresh(monkeypatch) -> None:
    _install_post(
        monkeypatch,
        [
            _FakeResponse(200, _session_payload("token-A", "refresh-A")),
            _FakeResponse(400, {"error_description": "Invalid Refresh Token"}),
        ],
    )
    clock = _Clock()
    identity = SupabaseAuthAdapter(_BASE, "anon-key", clock=clock, use_keyring=False)
    identity.sign_in_with_password("a@example.com", "secret")

    clock.now += 7200
    with pytest.raises(StorageError, match="Invalid Refresh Token"):
        session_token_provider(identity)()
