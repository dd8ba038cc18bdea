from __future__ import annotations

from typing import Callable, Protocol

from docmerge.domain.models import AuthEvent, SessionUser

AuthStateCallback = Callable[[AuthEvent, SessionUser | None], None]


class Subscription(Protocol):
    def unsubscribe(self) -> None:
        """Stop delivering auth-state events to the subscriber."""


class IdentityPort(Protocol):
    def get_session(self) -> SessionUser | None:
        """Return the signed-in user, or None when there is no session."""

    def on_auth_state_change(self, callback: AuthStateCallback) -> Subscription:
        """Register a callback for sign-in, sign-out and refresh events."""

    def sign_in_with_password(self, email: str, password: str) -> SessionUser:
        """Start a session with email and password."""

    def sign_up(self, email: str, password: str) -> SessionUser | None:
        """Create an account; returns None when email confirmation is pending."""

    def sign_out(self) -> None:
        """End the current session."""
