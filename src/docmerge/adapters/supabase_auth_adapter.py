from __future__ import annotations

import logging
import time
from typing import Callable

import keyring
import requests

from docmerge.domain.models import AuthEvent, SessionUser
from docmerge.errors import AuthError
from docmerge.ports.identity_port import AuthStateCallback, IdentityPort

logger = logging.getLogger(__name__)

_KEYRING_SERVICE = "docmerge-supabase"
_KEYRING_REFRESH_TOKEN = "refresh_token"
# Sessions are treated as expired a minute early.
_EXPIRY_MARGIN_SECONDS = 60


class _CallbackSubscription:
    def __init__(self, listeners: list[AuthStateCallback], callback: AuthStateCallback) -> None:
        self._listeners = listeners
        self._callback = callback

    def unsubscribe(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


class SupabaseAuthAdapter(IdentityPort):
    """Password sign-in against the Supabase GoTrue REST API.

    The refresh token is kept in the OS keychain so a later process can restore
    the session without asking for the password again. Keychain failures only
    cost that convenience.
    """

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        *,
        timeout: float = 20,
        clock: Callable[[], float] = time.time,
        use_keyring: bool = True,
    ) -> None:
        self._auth_url = f"{base_url.rstrip('/')}/auth/v1"
        self._anon_key = anon_key
        self._timeout = timeout
        self._clock = clock
        self._use_keyring = use_keyring
        self._user: SessionUser | None = None
        self._refresh_token: str | None = None
        self._expires_at = 0.0
        self._listeners: list[AuthStateCallback] = []

    def get_session(self) -> SessionUser | None:
        if self._user is not None and self._clock() < self._expires_at:
            return self._user
        refresh_token = self._refresh_token or self._get_keyring_value(_KEYRING_REFRESH_TOKEN)
        if not refresh_token:
            return None
        had_session = self._user is not None
        try:
            payload = self._post(
                "/token",
                params={"grant_type": "refresh_token"},
                json={"refresh_token": refresh_token},
                context="refresh session",
            )
            user = self._store_session(payload)
        except AuthError:
            self._user = None
            self._refresh_token = None
            self._expires_at = 0.0
            raise
        self._emit(AuthEvent.TOKEN_REFRESHED if had_session else AuthEvent.INITIAL_SESSION, user)
        return user

    def on_auth_state_change(self, callback: AuthStateCallback) -> _CallbackSubscription:
        self._listeners.append(callback)
        return _CallbackSubscription(self._listeners, callback)

    def sign_in_with_password(self, email: str, password: str) -> SessionUser:
        payload = self._post(
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            context="sign in",
        )
        user = self._store_session(payload)
        self._emit(AuthEvent.SIGNED_IN, user)
        return user

    def sign_up(self, email: str, password: str) -> SessionUser | None:
        payload = self._post(
            "/signup",
            json={"email": email, "password": password},
            context="sign up",
        )
        # Projects with email confirmation enabled return the user without a session.
        if not payload.get("access_token"):
            return None
        user = self._store_session(payload)
        self._emit(AuthEvent.SIGNED_IN, user)
        return user

    def sign_out(self) -> None:
        user = self._user
        try:
            if user is not None:
                response = requests.post(
                    f"{self._auth_url}/logout",
                    headers={**self._headers(), "Authorization": f"Bearer {user.access_token}"},
                    timeout=self._timeout,
                )
                self._raise_for_status(response, context="sign out")
        except requests.RequestException as exc:
            raise AuthError(f"Sign out request failed: {exc}") from exc
        finally:
            self._user = None
            self._refresh_token = None
            self._expires_at = 0.0
            self._delete_keyring_value(_KEYRING_REFRESH_TOKEN)
            self._emit(AuthEvent.SIGNED_OUT, None)

    def _store_session(self, payload: dict) -> SessionUser:
        try:
            access_token = payload.get("access_token") or ""
            user_payload = payload.get("user") or {}
            user_id = user_payload.get("id") or ""
            email = user_payload.get("email") or ""
            expires_in = int(payload.get("expires_in", 3600))
        except (AttributeError, TypeError, ValueError) as exc:
            raise AuthError(f"Auth response had an unexpected shape: {exc}") from exc
        if not isinstance(access_token, str) or not access_token or not user_id:
            raise AuthError("Auth response did not include a session.")
        user = SessionUser(id=str(user_id), email=str(email), access_token=access_token)
        self._user = user
        self._expires_at = self._clock() + expires_in - _EXPIRY_MARGIN_SECONDS
        refresh_token = payload.get("refresh_token")
        if refresh_token:
            self._refresh_token = refresh_token
            if not self._set_keyring_value(_KEYRING_REFRESH_TOKEN, refresh_token):
                logger.warning("OS keychain unavailable; session will not survive a restart")
        return user

    def _emit(self, event: AuthEvent, user: SessionUser | None) -> None:
        for callback in list(self._listeners):
            callback(event, user)

    def _post(self, path: str, *, json: dict, context: str, params: dict | None = None) -> dict:
        try:
            response = requests.post(
                f"{self._auth_url}{path}",
                params=params,
                json=json,
                headers=self._headers(),
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise AuthError(f"Auth request failed while attempting to {context}: {exc}") from exc
        self._raise_for_status(response, context=context)
        try:
            payload = response.json()
        except ValueError as exc:
            raise AuthError(f"Auth API returned invalid JSON while attempting to {context}.") from exc
        if not isinstance(payload, dict):
            raise AuthError(f"Auth API returned an unexpected payload while attempting to {context}.")
        return payload

    def _headers(self) -> dict[str, str]:
        return {"apikey": self._anon_key, "Content-Type": "application/json"}

    @staticmethod
    def _raise_for_status(response: requests.Response, context: str) -> None:
        if response.status_code < 400:
            return
        detail = ""
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            detail = str(
                payload.get("error_description")
                or payload.get("msg")
                or payload.get("message")
                or payload.get("error")
                or ""
            )
        message = f"Auth API error {response.status_code} while attempting to {context}."
        if detail:
            message = f"{message} {detail}"
        raise AuthError(message)

    def _get_keyring_value(self, key: str) -> str | None:
        if not self._use_keyring:
            return None
        try:
            return keyring.get_password(_KEYRING_SERVICE, key)
        except Exception:
            return None

    def _set_keyring_value(self, key: str, value: str) -> bool:
        if not self._use_keyring:
            return True
        try:
            keyring.set_password(_KEYRING_SERVICE, key, value)
            return True
        except Exception:
            return False

    def _delete_keyring_value(self, key: str) -> None:
        if not self._use_keyring:
            return
        try:
            keyring.delete_password(_KEYRING_SERVICE, key)
        except Exception:
            return
