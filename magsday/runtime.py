from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass, field
from typing import Any, Optional

from magsday.data.auth_client import FirebaseAuthClient, LocalAuthClient
from magsday.data.memory_store import InMemoryStore
from magsday.lock_gate import LockGate
from magsday.services.assistant import GenerativeTextClient
from magsday.session import SessionManager
from magsday.settings import Settings
from magsday.state.app_state import AppState
from magsday.sync import LiveSync

logger = logging.getLogger(__name__)


@dataclass
class Backend:
    store: Any
    auth_client: Any


@dataclass
class Runtime:
    settings: Settings
    store: Any
    session: SessionManager
    sync: LiveSync
    lock_gate: LockGate
    state: AppState = field(default_factory=AppState)
    assistant: Optional[GenerativeTextClient] = None

    @property
    def scope(self):
        return self.sync.scope

    @property
    def mirrors(self):
        return self.sync.mirrors

    def write(self, action, *args) -> bool:
        """Issue one write for the signed-in identity. The mirror changes only when its snapshot arrives."""
        scope = self.sync.scope
        if scope is None:
            logger.warning("Write %s skipped, nobody is signed in.", getattr(action, "__name__", action))
            return False
        try:
            action(self.store, scope, *args)
        except Exception:
            logger.exception("Write %s failed", getattr(action, "__name__", action))
            return False
        return True

    def close(self) -> None:
        self.sync.close()


class RuntimeHandle:
    """Owns one browser session's runtime.

    Only the session state references the handle, so when Streamlit discards
    the session the handle is collected and the runtime's subscriptions close.
    """

    def __init__(self, runtime: Runtime):
        self.runtime = runtime
        self._finalizer = weakref.finalize(self, runtime.close)

    def close(self) -> None:
        self._finalizer()


def build_backend(settings: Settings) -> Backend:
    if settings.backend == "memory":
        return Backend(store=InMemoryStore(), auth_client=LocalAuthClient())

    from magsday.data.firestore_store import FirestoreStore, build_firestore_client

    firebase_config = settings.firebase_config
    auth_client = FirebaseAuthClient(str(firebase_config.get("apiKey") or ""))
    store = FirestoreStore(build_firestore_client(firebase_config))
    return Backend(store=store, auth_client=auth_client)


def build_runtime(settings: Settings, backend: Backend) -> Runtime:
    lock_gate = LockGate()
    sync = LiveSync(backend.store, settings.app_id, lock_gate=lock_gate)
    session = SessionManager(backend.auth_client)
    session.on_change(sync.handle_identity)
    assistant = None
    if settings.assistant_enabled:
        assistant = GenerativeTextClient(settings.gemini_api_key, settings.gemini_model)
    runtime = Runtime(
        settings=settings,
        store=backend.store,
        session=session,
        sync=sync,
        lock_gate=lock_gate,
        assistant=assistant,
    )
    session.on_change(lambda identity: runtime.state.reset())
    session.initialize()
    return runtime
