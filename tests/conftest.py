import copy
import itertools

import firebase_admin.db
import pytest
from fastapi.testclient import TestClient

from core.security import get_current_user
from main import app

TEST_USER = {"uid": "user-1", "email": "traveller@example.com", "name": "Traveller"}


class FakeDatabase:
    """In-memory stand-in for the parts of the Realtime Database API the services use."""

    def __init__(self):
        self.data = {}
        self._ids = itertools.count(1)

    def reference(self, path="/"):
        return FakeReference(self, path)

    def new_key(self):
        return f"-key{next(self._ids):05d}"


class FakeReference:
    def __init__(self, database, path):
        self._db = database
        self._segments = [s for s in path.strip("/").split("/") if s]
        self.key = self._segments[-1] if self._segments else None

    def _node(self):
        node = self._db.data
        for segment in self._segments:
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
        return node

    def _parent(self, create=True):
        node = self._db.data
        for segment in self._segments[:-1]:
            if segment not in node:
                if not create:
                    return None
                node[segment] = {}
            node = node[segment]
        return node

    def child(self, path):
        return FakeReference(self._db, "/".join(self._segments + [path]))

    def get(self, shallow=False):
        node = self._node()
        if shallow and isinstance(node, dict):
            return {key: True for key in node}
        return copy.deepcopy(node)

    def set(self, value):
        if not self._segments:
            self._db.data = copy.deepcopy(value)
            return
        self._parent()[self.key] = copy.deepcopy(value)

    def update(self, value):
        node = self._node()
        if node is None:
            self.set(value)
            return
        node.update(copy.deepcopy(value))

    def delete(self):
        parent = self._parent(create=False)
        if parent is not None:
            parent.pop(self.key, None)

    def push(self, value=None):
        ref = self.child(self._db.new_key())
        if value is not None:
            ref.set(value)
        return ref

    def order_by_child(self, name):
        return FakeQuery(self, lambda item: item[1].get(name))

    def order_by_key(self):
        return FakeQuery(self, lambda item: item[0])


class FakeQuery:
    def __init__(self, ref, sort_key):
        self._ref = ref
        self._sort_key = sort_key
        self._equal = None
        self._has_equal = False
        self._first = None

    def equal_to(self, value):
        self._equal = value
        self._has_equal = True
        return self

    def limit_to_first(self, count):
        self._first = count
        return self

    def get(self):
        children = self._ref.get() or {}
        items = list(children.items())
        if self._has_equal:
            items = [item for item in items if self._sort_key(item) == self._equal]
        items.sort(key=lambda item: (self._sort_key(item) is None, str(self._sort_key(item))))
        if self._first is not None:
            items = items[:self._first]
        return dict(items)


@pytest.fixture
def fake_db(monkeypatch):
    database = FakeDatabase()
    monkeypatch.setattr(firebase_admin.db, "reference", database.reference)
    return database


@pytest.fixture
def client(fake_db):
    app.dependency_overrides[get_current_user] = lambda: dict(TEST_USER)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def trip_payload():
    return {
        "title": "Italy Explorer",
        "primary_destination": "Rome & Florence",
        "trip_type": "Cultural",
        "start_date": "2025-06-01",
        "end_date": "2025-06-03",
    }
