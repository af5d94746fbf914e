from datetime import date

import pytest

from magsday.data.auth_client import Identity, LocalAuthClient
from magsday.data.memory_store import InMemoryStore
from magsday.data.repositories import UserScope
from magsday.data.store import DocumentStore, Subscription
from magsday.session import SessionManager
from magsday.sync import LiveSync


class ManualStore(DocumentStore):
    """Store whose notifications are emitted by hand, including on closed subscriptions."""

    def __init__(self):
        self.callbacks = []
        self.writes = []

    def _register(self, path, callback):
        record = {"path": path, "callback": callback}
        self.callbacks.append(record)
        return Subscription(path, lambda: record.update(closed=True))

    def subscribe_collection(self, path, callback):
        return self._register(path, callback)

    def subscribe_document(self, path, callback):
        return self._register(path, callback)

    def emit(self, path, payload):
        delivered = 0
        for record in self.callbacks:
            if record["path"] == path:
                record["callback"](payload)
                delivered += 1
        return delivered

    def open_paths(self):
        return [record["path"] for record in self.callbacks if not record.get("closed")]

    def add_document(self, collection_path, fields):
        self.writes.append(("add", collection_path, fields))
        return "new-id"

    def set_document(self, path, fields, merge=False):
        self.writes.append(("set", path, fields))

    def delete_document(self, path):
        self.writes.append(("delete", path, None))


class CountingStore(InMemoryStore):
    def __init__(self):
        super().__init__()
        self.calls = []

    def subscribe_collection(self, path, callback):
        self.calls.append(("subscribe_collection", path))
        return super().subscribe_collection(path, callback)

    def subscribe_document(self, path, callback):
        self.calls.append(("subscribe_document", path))
        return super().subscribe_document(path, callback)

    def add_document(self, collection_path, fields):
        self.calls.append(("add", collection_path))
        return super().add_document(collection_path, fields)

    def set_document(self, path, fields, merge=False):
        self.calls.append(("set", path))
        return super().set_document(path, fields, merge=merge)

    def delete_document(self, path):
        self.calls.append(("delete", path))
        return super().delete_document(path)


@pytest.fixture
def app_id():
    return "test-app"


@pytest.fixture
def today():
    return date(2026, 10, 19)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def manual_store():
    return ManualStore()


@pytest.fixture
def auth():
    return LocalAuthClient()


@pytest.fixture
def alice():
    return Identity(uid="alice-uid", email="alice@example.com")


@pytest.fixture
def bob():
    return Identity(uid="bob-uid", email="bob@example.com")


@pytest.fixture
def scope_for(app_id):
    def _scope(identity):
        return UserScope(app_id, identity.uid)

    return _scope


@pytest.fixture
def sync(store, app_id, today):
    return LiveSync(store, app_id, today=today)


@pytest.fixture
def session(auth, sync):
    manager = SessionManager(auth)
    manager.on_change(sync.handle_identity)
    manager.initialize()
    return manager
