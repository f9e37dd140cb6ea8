"""Firestore-backed document store using the async client."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from wordbook_manager.io.document_store import (
    SUPPORTED_QUERY_OPS,
    DocumentSnapshot,
    DocumentStore,
    Path,
    WriteBatch,
    check_collection_path,
    check_document_path,
)


def _to_snapshot(snap: firestore.DocumentSnapshot) -> DocumentSnapshot:
    return DocumentSnapshot(
        id=snap.id,
        path=tuple(snap.reference.path.split("/")),
        data=snap.to_dict() or {},
    )


class FirestoreWriteBatch(WriteBatch):
    def __init__(self, client: firestore.AsyncClient):
        self._client = client
        self._batch = client.batch()

    def set(self, path: Path, data: Dict[str, Any]) -> None:
        self._batch.set(self._client.document(*check_document_path(path)), data)

    def update(self, path: Path, data: Dict[str, Any]) -> None:
        self._batch.update(self._client.document(*check_document_path(path)), data)

    def delete(self, path: Path) -> None:
        self._batch.delete(self._client.document(*check_document_path(path)))

    async def commit(self) -> None:
        await self._batch.commit()


class FirestoreDocumentStore(DocumentStore):
    """Adapter over ``google.cloud.firestore.AsyncClient``.

    Errors from the client (``google.api_core.exceptions``) pass through
    unchanged.
    """

    def __init__(self, client: firestore.AsyncClient):
        if client is None:
            raise ValueError("Firestore client must not be None")
        self._client = client

    async def get_document(self, path: Path) -> Optional[DocumentSnapshot]:
        snap = await self._client.document(*check_document_path(path)).get()
        if not snap.exists:
            return None
        return _to_snapshot(snap)

    async def get_collection(self, path: Path) -> List[DocumentSnapshot]:
        collection = self._client.collection(*check_collection_path(path))
        return [_to_snapshot(snap) async for snap in collection.stream()]

    async def query(
        self, path: Path, field_name: str, op: str, value: Any
    ) -> List[DocumentSnapshot]:
        if op not in SUPPORTED_QUERY_OPS:
            raise ValueError(f"Unsupported query operator: {op}")
        collection = self._client.collection(*check_collection_path(path))
        query = collection.where(filter=FieldFilter(field_name, op, value))
        return [_to_snapshot(snap) async for snap in query.stream()]

    async def add_document(self, path: Path, data: Dict[str, Any]) -> str:
        collection = self._client.collection(*check_collection_path(path))
        _, doc_ref = await collection.add(data)
        return doc_ref.id

    async def set_document(self, path: Path, data: Dict[str, Any]) -> None:
        await self._client.document(*check_document_path(path)).set(data)

    async def update_document(self, path: Path, data: Dict[str, Any]) -> None:
        await self._client.document(*check_document_path(path)).update(data)

    async def delete_document(self, path: Path) -> None:
        await self._client.document(*check_document_path(path)).delete()

    def new_document_id(self, path: Path) -> str:
        return self._client.collection(*check_collection_path(path)).document().id

    def batch(self) -> WriteBatch:
        return FirestoreWriteBatch(self._client)

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
