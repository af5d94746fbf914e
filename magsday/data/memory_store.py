from __future__ import annotations

import logging
import threading
from itertools import count
from typing import Any, Dict, List, Tuple
from uuid import uuid4

from magsday.data.store import (
    Document,
    DocumentStore,
    Subscription,
    check_collection_path,
    split_document_path,
)

logger = logging.getLogger(__name__)


class InMemoryStore(DocumentStore):
    """Process-local document store with push notifications.

    Listeners are called synchronously on the writing thread, after the write
    has been applied, with the complete state of what they watch.
    """

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._collection_listeners: Dict[int, Tuple[str, Any]] = {}
        self._document_listeners: Dict[int, Tuple[str, Any]] = {}
        self._ids = count(1)
        self._lock = threading.RLock()

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._collection_listeners) + len(self._document_listeners)

    def _collection_snapshot(self, collection_path: str) -> List[Document]:
        docs = self._collections.get(collection_path, {})
        return [Document(doc_id, dict(fields)) for doc_id, fields in docs.items()]

    def _document_snapshot(self, path: str):
        collection_path, doc_id = split_document_path(path)
        fields = self._collections.get(collection_path, {}).get(doc_id)
        if fields is None:
            return None
        return Document(doc_id, dict(fields))

    def subscribe_collection(self, path, callback):
        collection_path = check_collection_path(path)
        with self._lock:
            token = next(self._ids)
            self._collection_listeners[token] = (collection_path, callback)
            callback(self._collection_snapshot(collection_path))
        return Subscription(collection_path, lambda: self._remove(self._collection_listeners, token))

    def subscribe_document(self, path, callback):
        collection_path, doc_id = split_document_path(path)
        doc_path = f"{collection_path}/{doc_id}"
        with self._lock:
            token = next(self._ids)
            self._document_listeners[token] = (doc_path, callback)
            callback(self._document_snapshot(doc_path))
        return Subscription(doc_path, lambda: self._remove(self._document_listeners, token))

    def _remove(self, listeners, token):
        with self._lock:
            listeners.pop(token, None)

    def _notify(self, collection_path: str, doc_id: str) -> None:
        doc_path = f"{collection_path}/{doc_id}"
        for watched, callback in list(self._collection_listeners.values()):
            if watched == collection_path:
                callback(self._collection_snapshot(collection_path))
        for watched, callback in list(self._document_listeners.values()):
            if watched == doc_path:
                callback(self._document_snapshot(doc_path))

    def add_document(self, collection_path, fields):
        collection_path = check_collection_path(collection_path)
        doc_id = uuid4().hex[:20]
        with self._lock:
            self._collections.setdefault(collection_path, {})[doc_id] = dict(fields)
            self._notify(collection_path, doc_id)
        return doc_id

    def set_document(self, path, fields, merge=False):
        collection_path, doc_id = split_document_path(path)
        with self._lock:
            docs = self._collections.setdefault(collection_path, {})
            if merge and doc_id in docs:
                docs[doc_id] = {**docs[doc_id], **fields}
            else:
                docs[doc_id] = dict(fields)
            self._notify(collection_path, doc_id)

    def delete_document(self, path):
        collection_path, doc_id = split_document_path(path)
        with self._lock:
            docs = self._collections.get(collection_path, {})
            if doc_id not in docs:
                logger.debug("Delete of missing document %s ignored.", path)
                return
            del docs[doc_id]
            self._notify(collection_path, doc_id)
