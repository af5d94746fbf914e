from __future__ import annotations

import logging

from google.cloud import firestore
from google.oauth2 import service_account

from magsday.data.store import (
    Document,
    DocumentStore,
    Subscription,
    check_collection_path,
    split_document_path,
)

logger = logging.getLogger(__name__)


def build_firestore_client(firebase_config: dict):
    project_id = str(firebase_config.get("projectId") or "").strip()
    service_account_info = firebase_config.get("serviceAccount")
    if service_account_info:
        creds = service_account.Credentials.from_service_account_info(dict(service_account_info))
        return firestore.Client(project=project_id or service_account_info.get("project_id"), credentials=creds)
    if not project_id:
        raise ValueError("Firebase config is missing projectId")
    # Falls back to application default credentials.
    return firestore.Client(project=project_id)


def _to_document(snapshot):
    if snapshot is None or not getattr(snapshot, "exists", False):
        return None
    return Document(snapshot.id, snapshot.to_dict() or {})


class FirestoreStore(DocumentStore):
    """Adapter over ``google.cloud.firestore``.

    Watch callbacks run on the client's background threads.
    """

    def __init__(self, client):
        self._client = client

    def subscribe_collection(self, path, callback):
        collection_path = check_collection_path(path)

        def _on_snapshot(col_snapshot, changes, read_time):
            docs = [Document(doc.id, doc.to_dict() or {}) for doc in col_snapshot]
            callback(docs)

        watch = self._client.collection(collection_path).on_snapshot(_on_snapshot)
        return Subscription(collection_path, watch.unsubscribe)

    def subscribe_document(self, path, callback):
        collection_path, doc_id = split_document_path(path)
        doc_path = f"{collection_path}/{doc_id}"

        def _on_snapshot(doc_snapshots, changes, read_time):
            snapshot = doc_snapshots[0] if doc_snapshots else None
            callback(_to_document(snapshot))

        watch = self._client.document(doc_path).on_snapshot(_on_snapshot)
        return Subscription(doc_path, watch.unsubscribe)

    def add_document(self, collection_path, fields):
        _, doc_ref = self._client.collection(check_collection_path(collection_path)).add(dict(fields))
        return doc_ref.id

    def set_document(self, path, fields, merge=False):
        collection_path, doc_id = split_document_path(path)
        self._client.document(f"{collection_path}/{doc_id}").set(dict(fields), merge=merge)

    def delete_document(self, path):
        collection_path, doc_id = split_document_path(path)
        self._client.document(f"{collection_path}/{doc_id}").delete()
