from __future__ import annotations

import logging
from typing import Callable, List, Optional

from magsday.data.auth_client import AuthError, Identity

logger = logging.getLogger(__name__)

SIGNED_OUT = "signed_out"
PENDING = "pending"
SIGNED_IN = "signed_in"

IdentityListener = Callable[[Optional[Identity]], None]


class SessionManager:
    """Tracks the authenticated identity and tells listeners about every transition."""

    def __init__(self, auth_client):
        self._auth = auth_client
        self._listeners: List[IdentityListener] = []
        self.identity: Optional[Identity] = None
        self.ready = False
        self.status = SIGNED_OUT

    def on_change(self, listener: IdentityListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _cancel():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _cancel

    def _transition(self, identity: Optional[Identity]) -> None:
        previous = self.identity
        self.identity = identity
        self.status = SIGNED_IN if identity else SIGNED_OUT
        logger.info(
            "Identity transition %s -> %s",
            previous.uid if previous else None,
            identity.uid if identity else None,
        )
        for listener in list(self._listeners):
            listener(identity)

    def initialize(self, identity: Optional[Identity] = None) -> None:
        """Record the backend's initial auth state; readiness gates all data access."""
        self.ready = True
        self._transition(identity)

    def _authenticate(self, action, email, password) -> Identity:
        previous_status = self.status
        self.status = PENDING
        try:
            identity = action(str(email or "").strip(), password or "")
        except AuthError as exc:
            self.status = previous_status
            logger.info("Authentication failed (%s): %s", exc.code, exc)
            raise
        except Exception:
            self.status = previous_status
            raise
        try:
            self._transition(identity)
        except Exception as exc:
            logger.exception("Could not open the session for %s, signing out", identity.uid)
            self._transition(None)
            raise AuthError("SESSION_UNAVAILABLE") from exc
        return identity

    def sign_up(self, email: str, password: str) -> Identity:
        return self._authenticate(self._auth.sign_up, email, password)

    def sign_in(self, email: str, password: str) -> Identity:
        return self._authenticate(self._auth.sign_in, email, password)

    def sign_out(self) -> None:
        identity = self.identity
        if identity is None:
            return
        try:
            self._auth.sign_out(identity)
        finally:
            self._transition(None)

    @property
    def signed_in(self) -> bool:
        return self.ready and self.identity is not None
