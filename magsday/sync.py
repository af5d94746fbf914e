"""Keeps local mirrors of the signed-in identity's remote collections.

Subscription callbacks may run on any thread. They only enqueue events; the
mirrors are written exclusively by ``LiveSync.pump`` on the UI thread. Every
event carries the generation of the subscription set that produced it, and
``stop`` advances the generation, so events from closed subscriptions are
dropped instead of reaching a newer identity's mirrors.
"""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from magsday.constants import CURRENCY_SYMBOLS, DEFAULT_CURRENCY, DEFAULT_THEME, ENTRY_COLLECTIONS, THEMES
from magsday.data.repositories import UserScope
from magsday.lock_gate import EMPTY_NOTE, LockGate, NoteState

logger = logging.getLogger(__name__)

NOTE = "note"
SETTINGS = "settings"


@dataclass(frozen=True)
class UserSettings:
    theme: str = DEFAULT_THEME
    currency: str = DEFAULT_CURRENCY
    note_pin: Optional[str] = None

    @property
    def currency_symbol(self) -> str:
        return CURRENCY_SYMBOLS.get(self.currency, self.currency)


DEFAULT_SETTINGS = UserSettings()


@dataclass
class Mirrors:
    schedules: List[Dict[str, Any]] = field(default_factory=list)
    payments: List[Dict[str, Any]] = field(default_factory=list)
    accomplishments: List[Dict[str, Any]] = field(default_factory=list)
    note: NoteState = EMPTY_NOTE
    settings: UserSettings = DEFAULT_SETTINGS


def note_from_document(document) -> NoteState:
    if document is None:
        return EMPTY_NOTE
    fields = document.fields
    return NoteState(
        content=str(fields.get("content") or ""),
        is_locked=bool(fields.get("isLocked") or False),
    )


def settings_from_document(document) -> UserSettings:
    if document is None:
        return DEFAULT_SETTINGS
    fields = document.fields
    theme = fields.get("theme") or DEFAULT_THEME
    if theme not in THEMES:
        theme = DEFAULT_THEME
    currency = fields.get("currency") or DEFAULT_CURRENCY
    if currency not in CURRENCY_SYMBOLS:
        currency = DEFAULT_CURRENCY
    pin = fields.get("notePin")
    pin = str(pin) if pin not in (None, "") else None
    return UserSettings(theme=theme, currency=currency, note_pin=pin)


class LiveSync:
    def __init__(self, store, app_id: str, lock_gate: LockGate | None = None, today: date | None = None):
        self._store = store
        self._app_id = app_id
        self.lock_gate = lock_gate or LockGate()
        # Computed once; a session left open past midnight keeps showing the earlier day's note.
        self.today = (today or date.today()).isoformat()
        self.mirrors = Mirrors()
        self.scope: Optional[UserScope] = None
        self._subscriptions = []
        self._generation = 0
        self._inbox: "queue.Queue[tuple]" = queue.Queue()

    @property
    def active_subscriptions(self) -> int:
        return sum(1 for sub in self._subscriptions if not sub.closed)

    @property
    def generation(self) -> int:
        return self._generation

    def handle_identity(self, identity) -> None:
        self.stop()
        if identity is not None:
            self.start(identity)

    def _poster(self, generation: int, kind: str):
        def _post(payload):
            self._inbox.put((generation, kind, payload))

        return _post

    def start(self, identity) -> None:
        if self._subscriptions:
            self.stop()
        self._generation += 1
        generation = self._generation
        self.scope = UserScope(self._app_id, identity.uid)
        try:
            for kind in ENTRY_COLLECTIONS:
                self._subscriptions.append(
                    self._store.subscribe_collection(self.scope.collection(kind), self._poster(generation, kind))
                )
            self._subscriptions.append(
                self._store.subscribe_document(self.scope.note(self.today), self._poster(generation, NOTE))
            )
            self._subscriptions.append(
                self._store.subscribe_document(self.scope.settings, self._poster(generation, SETTINGS))
            )
        except Exception:
            logger.exception("Failed to open subscriptions for %s", identity.uid)
            self.stop()
            raise
        logger.info("Opened %s subscriptions for %s", len(self._subscriptions), identity.uid)

    def stop(self) -> None:
        closed = 0
        for subscription in self._subscriptions:
            try:
                subscription.unsubscribe()
                closed += 1
            except Exception:
                logger.exception("Failed to close subscription %s", subscription.path)
        if closed:
            logger.info("Closed %s subscriptions", closed)
        self._subscriptions = []
        self._generation += 1
        self.scope = None
        self._drain()
        self.mirrors = Mirrors()
        self.lock_gate.reset()

    close = stop

    def _drain(self) -> None:
        while True:
            try:
                self._inbox.get_nowait()
            except queue.Empty:
                return

    def pending(self) -> int:
        return self._inbox.qsize()

    def pump(self) -> int:
        applied = 0
        while True:
            try:
                generation, kind, payload = self._inbox.get_nowait()
            except queue.Empty:
                break
            if generation != self._generation:
                logger.debug("Dropped stale %s snapshot from generation %s", kind, generation)
                continue
            self._apply(kind, payload)
            applied += 1
        return applied

    def _apply(self, kind: str, payload) -> None:
        if kind == NOTE:
            note = note_from_document(payload)
            self.mirrors.note = note
            self.lock_gate.observe_note(note)
            return
        if kind == SETTINGS:
            settings = settings_from_document(payload)
            self.mirrors.settings = settings
            self.lock_gate.observe_pin(settings.note_pin)
            return
        rows = [document.as_row() for document in payload]
        setattr(self.mirrors, kind, rows)

    @property
    def note_visible(self) -> bool:
        return self.lock_gate.content_visible(self.mirrors.note, self.mirrors.settings.note_pin)
