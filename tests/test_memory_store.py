import pytest

from magsday.data.store import Document, split_document_path


def test_subscribe_delivers_initial_snapshot(store):
    store.set_document("a/b/items/one", {"n": 1})
    collections, documents = [], []

    store.subscribe_collection("a/b/items", collections.append)
    store.subscribe_document("a/b/items/two", documents.append)

    assert collections == [[Document("one", {"n": 1})]]
    assert documents == [None]


def test_listeners_only_hear_their_own_paths(store):
    heard = []
    store.subscribe_collection("a/b/items", heard.append)
    store.add_document("a/c/items", {"n": 1})
    assert len(heard) == 1


def test_merge_keeps_existing_fields(store):
    store.set_document("a/b/items/one", {"n": 1, "label": "x"})
    store.set_document("a/b/items/one", {"n": 2}, merge=True)
    received = []
    store.subscribe_document("a/b/items/one", received.append)
    assert received[0].fields == {"n": 2, "label": "x"}

    store.set_document("a/b/items/one", {"n": 3})
    assert received[-1].fields == {"n": 3}


def test_unsubscribe_stops_notifications(store):
    heard = []
    subscription = store.subscribe_collection("a/b/items", heard.append)
    subscription.unsubscribe()
    subscription.unsubscribe()
    store.add_document("a/b/items", {"n": 1})
    assert heard == [[]]
    assert store.listener_count == 0


def test_deleting_missing_document_is_silent(store):
    heard = []
    store.subscribe_collection("a/b/items", heard.append)
    store.delete_document("a/b/items/ghost")
    assert heard == [[]]


@pytest.mark.parametrize("path", ["", "a", "a/b/c"])
def test_split_document_path_rejects_collection_paths(path):
    with pytest.raises(ValueError):
        split_document_path(path)
