"""
Generic MongoDB collection wrapper that owns the internal document fields.

Every document written through a ``DocCollection`` carries three fields the
caller can never set: ``_id``, ``created_at`` and ``updated_at``. They are
stripped from every write payload and stamped by the wrapper (``_id`` is left
for the driver to assign). Reads, counts and deletes go straight through to
the motor collection.

Version: 1.0
"""

# External imports
from bson import ObjectId
from bson.errors import BSONError
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import BulkWriteError, PyMongoError
from pymongo.errors import DuplicateKeyError as PyMongoDuplicateKeyError
from pymongo.results import DeleteResult, UpdateResult
from datetime import datetime, timezone
from typing import Any, Callable, Dict, FrozenSet, Generic, List, Mapping, Optional, Set, TypeVar, TypedDict
import functools
import logging

# Internal imports
from concept_server.core.exceptions import (
    BackingStoreError,
    BulkInsertError,
    ConfigurationError,
    DuplicateKeyError,
)
from concept_server.core.logging import log_error

# Configure module logger
logger = logging.getLogger(__name__)

INTERNAL_FIELDS = ("_id", "created_at", "updated_at")

Filter = Mapping[str, Any]
Clock = Callable[[], datetime]


class BaseDoc(TypedDict):
    _id: ObjectId
    created_at: datetime
    updated_at: datetime


SchemaT = TypeVar("SchemaT", bound=Mapping[str, Any])


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def without_internal(item: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``item`` with the internal fields removed."""
    return {key: value for key, value in item.items() if key not in INTERNAL_FIELDS}


def store_operation(func):
    """Translate driver errors raised by a collection call into store errors."""

    @functools.wraps(func)
    async def wrapper(self: "DocCollection", *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except PyMongoDuplicateKeyError as e:
            log_error(logger, e, "Duplicate key", {"collection": self.name, "operation": func.__name__})
            raise DuplicateKeyError(
                f"Duplicate key in collection '{self.name}'",
                details=e.details or {}
            ) from e
        except (PyMongoError, BSONError) as e:
            log_error(logger, e, "Backing store call failed", {"collection": self.name, "operation": func.__name__})
            raise BackingStoreError(
                f"{func.__name__} on collection '{self.name}' failed: {str(e)}"
            ) from e

    return wrapper


class CollectionRegistry:
    """
    Owns the database handle and the set of collection names in use.

    An application builds one registry at startup; each ``DocCollection``
    registers its name here, and a second registration of the same name fails.
    """

    def __init__(self, database: AsyncIOMotorDatabase, clock: Optional[Clock] = None):
        self.database = database
        self.clock = clock or utcnow
        self._names: Set[str] = set()

    def register(self, name: str) -> None:
        if name in self._names:
            raise ConfigurationError(f"Collection '{name}' already exists!")
        self._names.add(name)
        logger.debug(f"Registered collection '{name}'")

    def collection(self, name: str, clock: Optional[Clock] = None) -> "DocCollection":
        return DocCollection(self, name, clock=clock)

    @property
    def names(self) -> FrozenSet[str]:
        return frozenset(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names


class DocCollection(Generic[SchemaT]):
    """CRUD access to one named collection with managed internal fields."""

    def __init__(self, registry: CollectionRegistry, name: str, clock: Optional[Clock] = None):
        registry.register(name)
        self.name = name
        self.collection: AsyncIOMotorCollection = registry.database[name]
        self._clock = clock or registry.clock

    def _stamped(self, item: Mapping[str, Any]) -> Dict[str, Any]:
        safe = without_internal(item)
        now = self._clock()
        safe["created_at"] = now
        safe["updated_at"] = now
        return safe

    @store_operation
    async def create_one(self, item: Mapping[str, Any]) -> ObjectId:
        """
        Add ``item`` to the collection. Returns the ``_id`` of the inserted document.
        """
        result = await self.collection.insert_one(self._stamped(item))
        return result.inserted_id

    @store_operation
    async def create_many(self, items: List[Mapping[str, Any]], **options) -> Dict[int, ObjectId]:
        """
        Add ``items`` to the collection. Returns ``{index: _id}`` for inserted documents.

        When the store rejects some of the documents, ``BulkInsertError``
        carries the same mapping for the ones it accepted.
        """
        if not items:
            return {}
        safe = [self._stamped(item) for item in items]
        try:
            result = await self.collection.insert_many(safe, **options)
        except BulkWriteError as e:
            failed = sorted(error["index"] for error in e.details.get("writeErrors", []))
            if options.get("ordered", True) and failed:
                # An ordered insert stops at the first error
                accepted = range(failed[0])
            else:
                failed_set = set(failed)
                accepted = [i for i in range(len(safe)) if i not in failed_set]
            inserted_ids = {i: safe[i].get("_id") for i in accepted}
            log_error(logger, e, "Bulk insert partially failed", {
                "collection": self.name,
                "inserted": len(inserted_ids),
                "failed": failed,
            })
            raise BulkInsertError(
                f"Inserted {len(inserted_ids)} of {len(safe)} documents into '{self.name}'",
                inserted_ids=inserted_ids,
                details={"failed_indices": failed}
            ) from e
        return dict(enumerate(result.inserted_ids))

    @store_operation
    async def read_one(self, filter: Filter, **options) -> Optional[SchemaT]:
        """
        Read the document that matches ``filter``. Returns ``None`` if no document matches.
        """
        return await self.collection.find_one(filter, **options)

    @store_operation
    async def read_many(self, filter: Filter, **options) -> List[SchemaT]:
        """
        Read all documents that match ``filter``.
        """
        return await self.collection.find(filter, **options).to_list(length=None)

    @store_operation
    async def replace_one(self, filter: Filter, item: Mapping[str, Any], **options) -> UpdateResult:
        """
        Replace the document that matches ``filter`` with ``item``.

        Only the internal fields are stripped; the timestamps are not
        stamped, so the replacement body carries neither of them.
        """
        return await self.collection.replace_one(filter, without_internal(item), **options)

    @store_operation
    async def partial_update_one(self, filter: Filter, update: Mapping[str, Any], **options) -> UpdateResult:
        """
        Update the document that matches ``filter`` based on existing fields in ``update``.
        Only the given fields in ``update`` get updated.
        """
        safe = without_internal(update)
        safe["updated_at"] = self._clock()
        return await self.collection.update_one(filter, {"$set": safe}, **options)

    @store_operation
    async def delete_one(self, filter: Filter, **options) -> DeleteResult:
        """
        Delete the document that matches ``filter``.
        """
        return await self.collection.delete_one(filter, **options)

    @store_operation
    async def delete_many(self, filter: Filter, **options) -> DeleteResult:
        """
        Delete all documents that match ``filter``.
        """
        return await self.collection.delete_many(filter, **options)

    @store_operation
    async def count(self, filter: Filter, **options) -> int:
        """
        Count all documents that match ``filter``.
        """
        return await self.collection.count_documents(filter, **options)

    async def pop_one(self, filter: Filter) -> Optional[SchemaT]:
        """
        Pop one document that matches ``filter``.

        Equivalent to ``read_one`` followed by ``delete_one`` on the found
        ``_id``. Two concurrent callers can both read the same document; the
        second delete then removes nothing.
        """
        one = await self.read_one(filter)
        if one is None:
            return None
        await self.delete_one({"_id": one["_id"]})
        return one

    @store_operation
    async def pop_one_atomic(self, filter: Filter, **options) -> Optional[SchemaT]:
        """Pop one document that matches ``filter`` in a single ``find_one_and_delete``."""
        return await self.collection.find_one_and_delete(filter, **options)


__all__ = [
    'INTERNAL_FIELDS',
    'BaseDoc',
    'CollectionRegistry',
    'DocCollection',
    'utcnow',
    'without_internal',
]
