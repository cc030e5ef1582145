# tests/conftest.py
import pytest

from backend import firebase


class FakeSnapshot:
    def __init__(self, data):
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return None if self._data is None else dict(self._data)


class FakeDocument:
    def __init__(self, store, doc_id):
        self._store = store
        self._doc_id = doc_id

    def get(self):
        return FakeSnapshot(self._store.get(self._doc_id))


class FakeCollection:
    def __init__(self, store):
        self._store = store

    def document(self, doc_id):
        return FakeDocument(self._store, doc_id)


class FakeFirestore:
    """Just enough of firestore.Client for collection(...).document(...).get()."""

    def __init__(self):
        self.collections = {}
        self.reads = []

    def add(self, collection, doc_id, data):
        self.collections.setdefault(collection, {})[doc_id] = data

    def collection(self, name):
        self.reads.append(name)
        return FakeCollection(self.collections.setdefault(name, {}))


@pytest.fixture
def fake_db(monkeypatch):
    """
    Replace the Firestore client with an in-memory fake so the
    dispatchers never talk to a real project.
    """
    db = FakeFirestore()
    monkeypatch.setattr(firebase, "get_db", lambda: db)
    return db


@pytest.fixture
def sent(monkeypatch):
    """Capture every messaging.send call instead of hitting FCM."""
    messages = []

    def fake_send(message, dry_run=False, app=None):
        messages.append(message)
        return f"projects/test/messages/{len(messages)}"

    monkeypatch.setattr(firebase, "init_app", lambda: None)
    monkeypatch.setattr("backend.utils.push.messaging.send", fake_send)
    return messages


@pytest.fixture
def failing_send(monkeypatch):
    def boom(message, dry_run=False, app=None):
        raise RuntimeError("FCM unavailable")

    monkeypatch.setattr(firebase, "init_app", lambda: None)
    monkeypatch.setattr("backend.utils.push.messaging.send", boom)
