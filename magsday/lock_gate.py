from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

_UNSEEN = object()


@dataclass(frozen=True)
class NoteState:
    content: str = ""
    is_locked: bool = False


EMPTY_NOTE = NoteState()


class LockGate:
    """Session-local PIN gate over the daily note's content.

    A PIN unlock holds while the note stays locked and the PIN stays the same.
    The note flipping to locked, or the PIN changing, locks it again.
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.unlocked = False
        self.pin_input = ""
        self._last_locked: Optional[bool] = None
        self._last_pin = _UNSEEN

    def observe_note(self, note: Optional[NoteState]) -> None:
        note = note or EMPTY_NOTE
        if not note.is_locked:
            self.unlocked = True
        elif self._last_locked is not True:
            self.unlocked = False
        self._last_locked = note.is_locked

    def observe_pin(self, pin: Optional[str]) -> None:
        pin = _normalize_pin(pin)
        if self._last_pin is not _UNSEEN and pin != self._last_pin:
            logger.info("Note PIN changed, locking note again.")
            self.unlocked = False
        self._last_pin = pin

    def content_visible(self, note: Optional[NoteState], pin: Optional[str]) -> bool:
        note = note or EMPTY_NOTE
        if not _normalize_pin(pin):
            return True
        if not note.is_locked:
            return True
        return self.unlocked

    def submit(self, pin_input: Optional[str], pin: Optional[str]) -> bool:
        expected = _normalize_pin(pin)
        candidate = "" if pin_input is None else str(pin_input)
        self.pin_input = ""
        if expected is None or candidate != expected:
            return False
        self.unlocked = True
        return True


def lock_flag_for_save(requested: bool, stored: bool, pin: Optional[str]) -> bool:
    """Without a PIN the lock toggle is inert, so the stored flag is written back unchanged."""
    if _normalize_pin(pin) is None:
        return bool(stored)
    return bool(requested)


def _normalize_pin(pin) -> Optional[str]:
    if pin is None:
        return None
    clean = str(pin)
    return clean or None
