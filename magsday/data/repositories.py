from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from magsday.constants import (
    ENTRY_COLLECTIONS,
    NOTES_COLLECTION,
    SETTINGS_COLLECTION,
    SETTINGS_DOC_ID,
)
from magsday.schemas import UserSettingsPatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserScope:
    app_id: str
    uid: str

    @property
    def root(self) -> str:
        return f"artifacts/{self.app_id}/users/{self.uid}"

    def collection(self, kind: str) -> str:
        if kind not in ENTRY_COLLECTIONS:
            raise ValueError(f"Unknown collection {kind!r}")
        return f"{self.root}/{kind}"

    def entry(self, kind: str, entry_id: str) -> str:
        if not entry_id or "/" in str(entry_id):
            raise ValueError(f"Invalid entry id {entry_id!r}")
        return f"{self.collection(kind)}/{entry_id}"

    def note(self, day_iso: str) -> str:
        return f"{self.root}/{NOTES_COLLECTION}/{day_iso}"

    @property
    def settings(self) -> str:
        return f"{self.root}/{SETTINGS_COLLECTION}/{SETTINGS_DOC_ID}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def add_entry(store, scope: UserScope, kind: str, fields: dict) -> str:
    payload = dict(fields)
    payload["createdAt"] = _now_iso()
    entry_id = store.add_document(scope.collection(kind), payload)
    logger.debug("Added %s entry %s", kind, entry_id)
    return entry_id


def update_entry(store, scope: UserScope, kind: str, entry_id: str, fields: dict) -> None:
    store.set_document(scope.entry(kind, entry_id), dict(fields), merge=True)


def delete_entry(store, scope: UserScope, kind: str, entry_id: str) -> None:
    store.delete_document(scope.entry(kind, entry_id))


def save_daily_note(store, scope: UserScope, day_iso: str, content: str, is_locked: bool) -> None:
    store.set_document(
        scope.note(day_iso),
        {
            "content": str(content or ""),
            "isLocked": bool(is_locked),
            "updatedAt": _now_iso(),
        },
    )


def save_user_settings(store, scope: UserScope, patch: UserSettingsPatch) -> None:
    payload = patch.to_document()
    if not payload:
        return
    store.set_document(scope.settings, payload, merge=True)
