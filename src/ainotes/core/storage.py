"""Pluggable record storage.

Services never talk to a concrete medium. They ask the configured `Storage`
for a named `Collection` and use its small CRUD surface:

- `MemoryStorage` keeps records in process memory only.
- `FileStorage` is the default: one JSON array per collection, read in full
  on start and rewritten in full (atomically) by every mutation before the
  mutation returns.
- `MongoStorage` keeps one document per record in MongoDB.
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any
from urllib.parse import urlparse
from uuid import UUID

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from ainotes.config import Config
from ainotes.core.db import Record

logger = structlog.get_logger(__name__)


class Collection[R: Record](ABC):
    """A named set of records of one model type, keyed by id."""

    def __init__(self, name: str, model: type[R]) -> None:
        self.name = name
        self.model = model

    async def load(self) -> None:
        """Read persisted state on startup."""

    async def ensure_index(self, *fields: str, unique: bool = False) -> None:
        """Create an index where the backend supports them."""

    @abstractmethod
    async def insert(self, record: R) -> R: ...

    @abstractmethod
    async def get(self, record_id: UUID) -> R | None: ...

    @abstractmethod
    async def replace(self, record: R) -> R:
        """Store a new version of an existing record. Raises KeyError if the id is unknown."""

    @abstractmethod
    async def delete(self, record_id: UUID) -> bool:
        """Remove a record, returning whether it existed."""

    @abstractmethod
    async def find(self, **conditions: Any) -> list[R]:
        """Records whose fields equal all given values, in insertion order."""

    async def find_one(self, **conditions: Any) -> R | None:
        records = await self.find(**conditions)
        return records[0] if records else None

    async def delete_many(self, **conditions: Any) -> int:
        records = await self.find(**conditions)
        for record in records:
            await self.delete(record.id)
        return len(records)


class MemoryCollection[R: Record](Collection[R]):
    def __init__(self, name: str, model: type[R]) -> None:
        super().__init__(name, model)
        self._records: dict[UUID, R] = {}

    def _commit(self, records: dict[UUID, R]) -> None:
        self._records = records

    async def insert(self, record: R) -> R:
        if record.id in self._records:
            raise ValueError(f"Duplicate id in '{self.name}': {record.id}")
        records = dict(self._records)
        records[record.id] = record.model_copy(deep=True)
        self._commit(records)
        return record

    async def get(self, record_id: UUID) -> R | None:
        record = self._records.get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    async def replace(self, record: R) -> R:
        if record.id not in self._records:
            raise KeyError(record.id)
        records = dict(self._records)
        records[record.id] = record.model_copy(deep=True)
        self._commit(records)
        return record

    async def delete(self, record_id: UUID) -> bool:
        if record_id not in self._records:
            return False
        records = dict(self._records)
        del records[record_id]
        self._commit(records)
        return True

    async def find(self, **conditions: Any) -> list[R]:
        return [
            record.model_copy(deep=True)
            for record in self._records.values()
            if all(getattr(record, field) == value for field, value in conditions.items())
        ]


class FileCollection[R: Record](MemoryCollection[R]):
    """Memory collection mirrored to a single JSON file.

    `_commit` writes the whole collection before swapping it in, so a failed
    write leaves both the file and memory untouched. It contains no await
    point: two mutations never interleave and a started write always finishes.
    """

    def __init__(self, name: str, model: type[R], path: Path) -> None:
        super().__init__(name, model)
        self.path = path

    async def load(self) -> None:
        if not self.path.exists():
            self._records = {}
            return
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        records = [self.model.model_validate(item) for item in raw]
        self._records = {record.id: record for record in records}
        logger.debug("collection_loaded", collection=self.name, path=str(self.path), count=len(records))

    def _commit(self, records: dict[UUID, R]) -> None:
        write_json_atomic(self.path, [record.to_json() for record in records.values()])
        self._records = records


class MongoCollection[R: Record](Collection[R]):
    def __init__(self, name: str, model: type[R], collection: AsyncCollection[dict[str, Any]]) -> None:
        super().__init__(name, model)
        self._collection = collection

    @staticmethod
    def _query(conditions: dict[str, Any]) -> dict[str, Any]:
        return {("_id" if field == "id" else field): value for field, value in conditions.items()}

    async def ensure_index(self, *fields: str, unique: bool = False) -> None:
        await self._collection.create_index([(field, 1) for field in fields], unique=unique)

    async def insert(self, record: R) -> R:
        await self._collection.insert_one(record.to_mongo())
        return record

    async def get(self, record_id: UUID) -> R | None:
        doc = await self._collection.find_one({"_id": record_id})
        return self.model.model_validate(doc) if doc else None

    async def replace(self, record: R) -> R:
        result = await self._collection.replace_one({"_id": record.id}, record.to_mongo())
        if result.matched_count == 0:
            raise KeyError(record.id)
        return record

    async def delete(self, record_id: UUID) -> bool:
        result = await self._collection.delete_one({"_id": record_id})
        return result.deleted_count > 0

    async def find(self, **conditions: Any) -> list[R]:
        cursor = self._collection.find(self._query(conditions))
        return [self.model.model_validate(doc) async for doc in cursor]

    async def delete_many(self, **conditions: Any) -> int:
        result = await self._collection.delete_many(self._query(conditions))
        return result.deleted_count


class Storage(ABC):
    """Storage backend handing out named collections."""

    def __init__(self) -> None:
        self._collections: dict[str, Collection[Any]] = {}

    def get_collection[R: Record](self, name: str, model: type[R]) -> Collection[R]:
        if name not in self._collections:
            self._collections[name] = self._create_collection(name, model)
        return self._collections[name]

    @abstractmethod
    def _create_collection[R: Record](self, name: str, model: type[R]) -> Collection[R]: ...

    async def open(self) -> None:
        for collection in self._collections.values():
            await collection.load()

    async def close(self) -> None:
        """Release backend resources on shutdown."""


class MemoryStorage(Storage):
    def _create_collection[R: Record](self, name: str, model: type[R]) -> Collection[R]:
        return MemoryCollection(name, model)


class FileStorage(Storage):
    def __init__(self, data_dir: str | Path) -> None:
        super().__init__()
        self.data_dir = Path(data_dir)

    def _create_collection[R: Record](self, name: str, model: type[R]) -> Collection[R]:
        return FileCollection(name, model, self.data_dir / f"{name}.json")


class MongoStorage(Storage):
    def __init__(self, database_url: str) -> None:
        super().__init__()
        self.mongo_client: AsyncMongoClient[dict[str, Any]] = AsyncMongoClient(
            database_url, uuidRepresentation="standard", tz_aware=True
        )
        self.database = self.mongo_client.get_database(urlparse(database_url).path[1:])

    def _create_collection[R: Record](self, name: str, model: type[R]) -> Collection[R]:
        return MongoCollection(name, model, self.database.get_collection(name))

    async def close(self) -> None:
        await self.mongo_client.aclose()


def write_json_atomic(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


def create_storage(config: Config) -> Storage:
    """Build the storage backend selected in config."""
    if config.storage_backend == "memory":
        return MemoryStorage()
    if config.storage_backend == "mongo":
        if not config.database_url:
            raise ValueError("database_url is required for the mongo storage backend")
        return MongoStorage(config.database_url)
    return FileStorage(config.data_dir)
