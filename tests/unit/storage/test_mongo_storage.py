"""Tests for the MongoDB backend.

Tests needing a server run only when AINOTES_TEST_MONGO_URL points at one,
e.g. mongodb://localhost:27017. Each test uses a throwaway database.
"""

import os
from uuid import uuid4

import pytest
import pytest_asyncio
from pymongo import AsyncMongoClient
from pymongo.errors import DuplicateKeyError

from ainotes.core.core import Core
from ainotes.core.modules.note.models import Note, NoteFormData, NoteUpdate
from ainotes.core.storage import MongoCollection, MongoStorage

MONGO_URL = os.environ.get("AINOTES_TEST_MONGO_URL")

requires_mongo = pytest.mark.skipif(not MONGO_URL, reason="AINOTES_TEST_MONGO_URL is not set")


def make_note(owner_id: str = "u1", title: str = "Title") -> Note:
    return Note(owner_id=owner_id, title=title, content="Some content")


class TestMongoQuery:
    def test_id_condition_maps_to_underscore_id(self):
        note_id = uuid4()
        assert MongoCollection._query({"id": note_id, "owner_id": "u1"}) == {"_id": note_id, "owner_id": "u1"}


@pytest_asyncio.fixture
async def mongo_storage():
    database_name = f"ainotes_test_{uuid4().hex[:12]}"
    storage = MongoStorage(f"{MONGO_URL.rstrip('/')}/{database_name}")
    yield storage
    await storage.close()
    async with AsyncMongoClient(MONGO_URL) as client:
        await client.drop_database(database_name)


@requires_mongo
class TestMongoCollection:
    async def test_insert_and_get_round_trip(self, mongo_storage):
        collection = mongo_storage.get_collection("notes", Note)
        note = make_note()
        note.tags = ["a", "b"]

        await collection.insert(note)

        assert await collection.get(note.id) == note
        assert await collection.get(uuid4()) is None

    async def test_replace_and_unknown_id(self, mongo_storage):
        collection = mongo_storage.get_collection("notes", Note)
        note = make_note()
        await collection.insert(note)

        await collection.replace(note.model_copy(update={"title": "Renamed"}))
        assert (await collection.get(note.id)).title == "Renamed"

        with pytest.raises(KeyError):
            await collection.replace(make_note())

    async def test_find_delete_and_delete_many(self, mongo_storage):
        collection = mongo_storage.get_collection("notes", Note)
        first, other, second = make_note("u1", "first"), make_note("u2", "other"), make_note("u1", "second")
        for note in (first, other, second):
            await collection.insert(note)

        assert [n.title for n in await collection.find(owner_id="u1")] == ["first", "second"]
        assert (await collection.find_one(id=other.id)) == other

        assert await collection.delete(other.id) is True
        assert await collection.delete(other.id) is False
        assert await collection.delete_many(owner_id="u1") == 2
        assert await collection.find() == []

    async def test_unique_index_enforced(self, mongo_storage):
        collection = mongo_storage.get_collection("notes", Note)
        await collection.ensure_index("title", unique=True)
        await collection.insert(make_note(title="same"))
        with pytest.raises(DuplicateKeyError):
            await collection.insert(make_note(title="same"))


@requires_mongo
class TestMongoNoteTimestamps:
    async def test_rapid_mutations_keep_increasing_after_reload(self, config, mongo_storage):
        async with (core := Core(config, storage=mongo_storage)).lifespan():
            note = await core.services.note.create_note("u1", NoteFormData(title="T", content="C"))
            stamps = [note.updated_at]
            for i in range(5):
                note = await core.services.note.update_note(note.id, NoteUpdate(title=f"T{i}"))
                reloaded = await core.services.note.get_note(note.id)
                assert reloaded == note
                stamps.append(reloaded.updated_at)

        assert all(a < b for a, b in zip(stamps, stamps[1:], strict=False))
