from __future__ import annotations

import logging
from collections.abc import Callable

from docmerge.domain.models import AuthEvent, SessionStatus, SessionUser
from docmerge.errors import AuthError
from docmerge.ports.identity_port import IdentityPort, Subscription

logger = logging.getLogger(__name__)

SessionListener = Callable[[SessionStatus, SessionUser | None], None]


class SessionWatcher:
    """Observable view of the identity provider's session.

    Lifecycle: ``start()`` looks up the current session and subscribes to
    auth-state events, ``stop()`` unsubscribes. Until ``start()`` finishes the
    status is LOADING. Lookup and sign-out failures are logged and leave the
    watcher ANONYMOUS.
    """

    def __init__(self, identity: IdentityPort) -> None:
        self._identity = identity
        self._status = SessionStatus.LOADING
        self._user: SessionUser | None = None
        self._listeners: list[SessionListener] = []
        self._subscription: Subscription | None = None

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def user(self) -> SessionUser | None:
        return self._user

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> None:
        if self._subscription is not None:
            return
        self._subscription = self._identity.on_auth_state_change(self._handle_auth_event)
        user: SessionUser | None = None
        try:
            user = self._identity.get_session()
        except AuthError as exc:
            logger.warning("Error checking auth: %s", exc)
        self._apply(user, force=True)

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def sign_in(self, email: str, password: str) -> SessionUser:
        user = self._identity.sign_in_with_password(email, password)
        self._apply(user)
        return user

    def sign_up(self, email: str, password: str) -> SessionUser | None:
        user = self._identity.sign_up(email, password)
        if user is not None:
            self._apply(user)
        return user

    def sign_out(self) -> None:
        try:
            self._identity.sign_out()
        except AuthError as exc:
            logger.warning("Error signing out: %s", exc)
        self._apply(None)

    def _handle_auth_event(self, event: AuthEvent, user: SessionUser | None) -> None:
        logger.debug("Auth event %s", event.value)
        self._apply(user)

    def _apply(self, user: SessionUser | None, force: bool = False) -> None:
        status = SessionStatus.AUTHENTICATED if user is not None else SessionStatus.ANONYMOUS
        changed = status != self._status or user != self._user
        self._user = user
        self._status = status
        if changed or force:
            for listener in list(self._listeners):
                listener(status, user)
