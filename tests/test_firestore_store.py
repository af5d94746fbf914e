import pytest

from magsday.data.firestore_store import FirestoreStore
from magsday.data.store import Document


class FakeSnapshot:
    def __init__(self, doc_id, data, exists=True):
        self.id = doc_id
        self._data = data
        self.exists = exists

    def to_dict(self):
        return self._data


class FakeWatch:
    def __init__(self):
        self.unsubscribed = 0

    def unsubscribe(self):
        self.unsubscribed += 1


class FakeRef:
    def __init__(self, client, path):
        self.client = client
        self.path = path
        self.id = path.rsplit("/", 1)[-1]

    def on_snapshot(self, callback):
        watch = FakeWatch()
        self.client.watches.append((self.path, callback, watch))
        return watch

    def add(self, data):
        self.client.calls.append(("add", self.path, data))
        return None, FakeRef(self.client, f"{self.path}/generated-id")

    def set(self, data, merge=False):
        self.client.calls.append(("set", self.path, data, merge))

    def delete(self):
        self.client.calls.append(("delete", self.path))


class FakeClient:
    def __init__(self):
        self.watches = []
        self.calls = []

    def collection(self, path):
        return FakeRef(self, path)

    def document(self, path):
        return FakeRef(self, path)


@pytest.fixture
def client():
    return FakeClient()


def test_collection_watch_delivers_full_snapshot(client):
    received = []
    subscription = FirestoreStore(client).subscribe_collection("artifacts/app/users/u1/schedules", received.append)

    path, callback, watch = client.watches[0]
    assert path == "artifacts/app/users/u1/schedules"
    callback([FakeSnapshot("a", {"title": "Gym"}), FakeSnapshot("b", None)], [], None)
    assert received == [[Document("a", {"title": "Gym"}), Document("b", {})]]

    subscription.unsubscribe()
    subscription.unsubscribe()
    assert watch.unsubscribed == 1


def test_document_watch_maps_missing_document_to_none(client):
    received = []
    FirestoreStore(client).subscribe_document("artifacts/app/users/u1/notes/2026-10-19", received.append)

    _, callback, _ = client.watches[0]
    callback([FakeSnapshot("2026-10-19", None, exists=False)], [], None)
    callback([], [], None)
    callback([FakeSnapshot("2026-10-19", {"content": "hi", "isLocked": False})], [], None)

    assert received == [None, None, Document("2026-10-19", {"content": "hi", "isLocked": False})]


def test_writes_are_forwarded(client):
    store = FirestoreStore(client)

    new_id = store.add_document("artifacts/app/users/u1/payments", {"title": "Rent"})
    store.set_document("artifacts/app/users/u1/settings/userSettings", {"theme": "light"}, merge=True)
    store.delete_document("artifacts/app/users/u1/payments/p1")

    assert new_id == "generated-id"
    assert client.calls == [
        ("add", "artifacts/app/users/u1/payments", {"title": "Rent"}),
        ("set", "artifacts/app/users/u1/settings/userSettings", {"theme": "light"}, True),
        ("delete", "artifacts/app/users/u1/payments/p1"),
    ]


@pytest.mark.parametrize("path", ["artifacts", "artifacts/app/users/u1/payments"])
def test_document_operations_reject_collection_paths(client, path):
    with pytest.raises(ValueError):
        FirestoreStore(client).delete_document(path)
    assert client.calls == []


def test_collection_subscription_rejects_document_path(client):
    with pytest.raises(ValueError):
        FirestoreStore(client).subscribe_collection("artifacts/app/users/u1", lambda docs: None)
