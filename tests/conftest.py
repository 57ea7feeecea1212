from __future__ import annotations

import copy
import re
from datetime import datetime, timezone

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from food_lovers.api.deps import get_db
from food_lovers.core.config import settings
from food_lovers.main import app


# ── In-memory stand-in for the collections the routes use ───────────────


def _matches(doc: dict, flt: dict) -> bool:
    for field, cond in flt.items():
        value = doc.get(field)
        if isinstance(cond, dict) and "$regex" in cond:
            flags = re.IGNORECASE if "i" in cond.get("$options", "") else 0
            if not isinstance(value, str) or not re.search(cond["$regex"], value, flags):
                return False
        elif value != cond:
            return False
    return True


class FakeCursor:
    def __init__(self, docs: list[dict]):
        self._docs = docs
        self._limit = 0

    def sort(self, key_or_list, direction=None):
        if isinstance(key_or_list, str):
            keys = [(key_or_list, direction or ASCENDING)]
        else:
            keys = list(key_or_list)
        # Stable sorts applied from the least significant key
        for field, dirn in reversed(keys):
            self._docs.sort(
                key=lambda d: (d.get(field) is not None, d.get(field) or 0),
                reverse=dirn == DESCENDING,
            )
        return self

    def limit(self, n: int):
        self._limit = n
        return self

    async def to_list(self, length=None):
        docs = self._docs[: self._limit] if self._limit else self._docs
        return [copy.deepcopy(d) for d in docs]


class FakeCollection:
    def __init__(self, unique: tuple[str, ...] | None = None):
        self.docs: list[dict] = []
        self.unique = unique
        self.indexes: list[dict] = []

    def find(self, flt: dict | None = None):
        return FakeCursor([d for d in self.docs if _matches(d, flt or {})])

    async def find_one(self, flt: dict):
        for d in self.docs:
            if _matches(d, flt):
                return copy.deepcopy(d)
        return None

    async def insert_one(self, document: dict):
        if self.unique and any(
            all(d.get(k) == document.get(k) for k in self.unique) for d in self.docs
        ):
            raise DuplicateKeyError("E11000 duplicate key error")
        document.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(document))
        return InsertOneResult(document["_id"], True)

    async def update_one(self, flt: dict, update: dict):
        for d in self.docs:
            if _matches(d, flt):
                changes = update["$set"]
                modified = any(d.get(k) != v for k, v in changes.items())
                d.update(copy.deepcopy(changes))
                return UpdateResult({"n": 1, "nModified": int(modified)}, True)
        return UpdateResult({"n": 0, "nModified": 0}, True)

    async def delete_one(self, flt: dict):
        for i, d in enumerate(self.docs):
            if _matches(d, flt):
                del self.docs[i]
                return DeleteResult({"n": 1}, True)
        return DeleteResult({"n": 0}, True)

    async def create_index(self, keys, **kwargs):
        self.indexes.append({"keys": keys, **kwargs})
        return kwargs.get("name")


class FakeDatabase:
    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


class BrokenCollection:
    """Every operation fails as if the server were unreachable."""

    def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("No servers available")

    find = _fail

    async def find_one(self, *args, **kwargs):
        self._fail()

    async def insert_one(self, *args, **kwargs):
        self._fail()

    async def update_one(self, *args, **kwargs):
        self._fail()

    async def delete_one(self, *args, **kwargs):
        self._fail()


class BrokenDatabase:
    def __getitem__(self, name: str) -> BrokenCollection:
        return BrokenCollection()


# ── Fixtures ────────────────────────────────────────────────────────────


def _serve(database) -> TestClient:
    async def override():
        return database

    app.dependency_overrides[get_db] = override
    return TestClient(app)


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def client(db):
    yield _serve(db)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client():
    yield _serve(BrokenDatabase())
    app.dependency_overrides.clear()


@pytest.fixture
def strict_ids(monkeypatch):
    monkeypatch.setattr(settings, "STRICT_OBJECT_IDS", True)


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
