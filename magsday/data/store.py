"""Document store interface shared by the Firestore adapter and the local backend.

Collections deliver a full snapshot (every document, no defined order) on each
change; single documents deliver the document or ``None`` when absent. Both
kinds deliver an initial snapshot as soon as the subscription is opened.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


@dataclass(frozen=True)
class Document:
    id: str
    fields: Dict[str, Any] = field(default_factory=dict)

    def as_row(self) -> Dict[str, Any]:
        return {"id": self.id, **self.fields}


CollectionCallback = Callable[[List[Document]], None]
DocumentCallback = Callable[[Optional[Document]], None]


class Subscription:
    """Cancellation handle for one push subscription. ``unsubscribe`` is idempotent."""

    def __init__(self, path: str, cancel: Callable[[], None]):
        self.path = path
        self._cancel = cancel
        self._lock = threading.Lock()
        self.closed = False

    def unsubscribe(self) -> None:
        with self._lock:
            if self.closed:
                return
            self.closed = True
        self._cancel()


class DocumentStore:
    def subscribe_collection(self, path: str, callback: CollectionCallback) -> Subscription:
        raise NotImplementedError

    def subscribe_document(self, path: str, callback: DocumentCallback) -> Subscription:
        raise NotImplementedError

    def add_document(self, collection_path: str, fields: Dict[str, Any]) -> str:
        raise NotImplementedError

    def set_document(self, path: str, fields: Dict[str, Any], merge: bool = False) -> None:
        raise NotImplementedError

    def delete_document(self, path: str) -> None:
        raise NotImplementedError


def split_document_path(path: str) -> tuple[str, str]:
    parts = [part for part in str(path).split("/") if part]
    if len(parts) < 2 or len(parts) % 2 != 0:
        raise ValueError(f"Not a document path: {path!r}")
    return "/".join(parts[:-1]), parts[-1]


def check_collection_path(path: str) -> str:
    parts = [part for part in str(path).split("/") if part]
    if not parts or len(parts) % 2 != 1:
        raise ValueError(f"Not a collection path: {path!r}")
    return "/".join(parts)
