"""In-memory document store for testing and local sessions."""

import asyncio
import copy
import secrets
import string
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from google.api_core.exceptions import InvalidArgument, NotFound

from wordbook_manager.io.document_store import (
    MAX_BATCH_WRITES,
    SUPPORTED_QUERY_OPS,
    DocumentSnapshot,
    DocumentStore,
    Path,
    WriteBatch,
    check_collection_path,
    check_document_path,
)

_ID_ALPHABET = string.ascii_letters + string.digits
_ID_LENGTH = 20

Collections = Dict[Path, Dict[str, Dict[str, Any]]]


def _split(path: Path) -> Tuple[Path, str]:
    path = check_document_path(path)
    return path[:-1], path[-1]


def _missing(path: Path) -> NotFound:
    return NotFound(f"No document to update: {'/'.join(path)}")


class InMemoryWriteBatch(WriteBatch):
    """Collects writes and applies them to a staged copy before swapping it in."""

    def __init__(self, store: "InMemoryDocumentStore"):
        self._store = store
        self._writes: List[Tuple[str, Path, Optional[Dict[str, Any]]]] = []
        self._committed = False

    def set(self, path: Path, data: Dict[str, Any]) -> None:
        self._queue("set", check_document_path(path), data)

    def update(self, path: Path, data: Dict[str, Any]) -> None:
        self._queue("update", check_document_path(path), data)

    def delete(self, path: Path) -> None:
        self._queue("delete", check_document_path(path), None)

    def _queue(self, kind: str, path: Path, data: Optional[Dict[str, Any]]) -> None:
        if self._committed:
            raise ValueError("Cannot add writes to a committed batch")
        self._writes.append((kind, path, copy.deepcopy(data)))

    async def commit(self) -> None:
        if self._committed:
            raise ValueError("Batch already committed")
        if len(self._writes) > MAX_BATCH_WRITES:
            raise InvalidArgument(
                f"maximum {MAX_BATCH_WRITES} writes allowed per request"
            )
        await asyncio.sleep(0)
        staged = copy.deepcopy(self._store._collections)
        for kind, path, data in self._writes:
            collection_path, doc_id = _split(path)
            documents = staged.setdefault(collection_path, {})
            if kind == "set":
                documents[doc_id] = data
            elif kind == "update":
                if doc_id not in documents:
                    raise _missing(path)
                documents[doc_id].update(data)
            else:
                documents.pop(doc_id, None)
        self._store._collections = staged
        self._committed = True


class InMemoryDocumentStore(DocumentStore):
    """
    Document store held in process memory.

    Mirrors the store semantics the data-access layer relies on: documents
    are copied on the way in and out, deleting a document leaves its
    subcollections alone, updates of missing documents raise NotFound and
    batches are all-or-nothing. Every call yields to the event loop once so
    concurrent operations interleave as they would over the network.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        # Structure: {collection_path: {doc_id: data}}
        self._collections: Collections = {}
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def get_document(self, path: Path) -> Optional[DocumentSnapshot]:
        await asyncio.sleep(0)
        collection_path, doc_id = _split(path)
        data = self._collections.get(collection_path, {}).get(doc_id)
        if data is None:
            return None
        return DocumentSnapshot(id=doc_id, path=tuple(path), data=copy.deepcopy(data))

    async def get_collection(self, path: Path) -> List[DocumentSnapshot]:
        await asyncio.sleep(0)
        path = check_collection_path(path)
        return [
            DocumentSnapshot(id=doc_id, path=path + (doc_id,), data=copy.deepcopy(data))
            for doc_id, data in self._collections.get(path, {}).items()
        ]

    async def query(
        self, path: Path, field_name: str, op: str, value: Any
    ) -> List[DocumentSnapshot]:
        if op not in SUPPORTED_QUERY_OPS:
            raise ValueError(f"Unsupported query operator: {op}")
        snapshots = await self.get_collection(path)
        if op == "==":
            return [s for s in snapshots if s.data.get(field_name) == value]
        return [
            s
            for s in snapshots
            if isinstance(s.data.get(field_name), list) and value in s.data[field_name]
        ]

    async def add_document(self, path: Path, data: Dict[str, Any]) -> str:
        doc_id = self.new_document_id(path)
        await self.set_document(tuple(path) + (doc_id,), data)
        return doc_id

    async def set_document(self, path: Path, data: Dict[str, Any]) -> None:
        await asyncio.sleep(0)
        collection_path, doc_id = _split(path)
        self._collections.setdefault(collection_path, {})[doc_id] = copy.deepcopy(data)

    async def update_document(self, path: Path, data: Dict[str, Any]) -> None:
        await asyncio.sleep(0)
        collection_path, doc_id = _split(path)
        documents = self._collections.get(collection_path, {})
        if doc_id not in documents:
            raise _missing(path)
        documents[doc_id].update(copy.deepcopy(data))

    async def delete_document(self, path: Path) -> None:
        await asyncio.sleep(0)
        collection_path, doc_id = _split(path)
        self._collections.get(collection_path, {}).pop(doc_id, None)

    def new_document_id(self, path: Path) -> str:
        check_collection_path(path)
        return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))

    def batch(self) -> WriteBatch:
        return InMemoryWriteBatch(self)

    def now(self) -> datetime:
        return self._clock()
