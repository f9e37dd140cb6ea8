"""Document store abstraction - path-addressed collections and documents.

Paths are tuples of segments. A collection path has an odd number of
segments (``("users", uid, "wordbooks")``) and a document path an even
number (``("users", uid, "wordbooks", wordbook_id)``).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

Path = Tuple[str, ...]

# Firestore rejects batches with more writes than this.
MAX_BATCH_WRITES = 500

SUPPORTED_QUERY_OPS = ("==", "array-contains")


@dataclass
class DocumentSnapshot:
    """A document read from the store."""

    id: str
    path: Path
    data: Dict[str, Any] = field(default_factory=dict)


def check_collection_path(path: Path) -> Path:
    path = tuple(path)
    if not path or len(path) % 2 == 0:
        raise ValueError(f"Not a collection path: {'/'.join(path)}")
    return path


def check_document_path(path: Path) -> Path:
    path = tuple(path)
    if not path or len(path) % 2 != 0:
        raise ValueError(f"Not a document path: {'/'.join(path)}")
    return path


class WriteBatch(ABC):
    """A set of writes committed as one atomic unit."""

    @abstractmethod
    def set(self, path: Path, data: Dict[str, Any]) -> None:
        """Queue a full overwrite (or create) of the document at ``path``."""

    @abstractmethod
    def update(self, path: Path, data: Dict[str, Any]) -> None:
        """Queue a partial merge; the whole batch fails if the document is missing."""

    @abstractmethod
    def delete(self, path: Path) -> None:
        """Queue a delete."""

    @abstractmethod
    async def commit(self) -> None:
        """Apply every queued write, or none of them."""


class DocumentStore(ABC):
    """
    Abstract interface for the hosted document database.

    Implementations (FirestoreDocumentStore, InMemoryDocumentStore) handle
    transport details. Services depend on this interface only.

    Failures are raised as ``google.api_core.exceptions`` errors and are
    never wrapped, so callers see the store's own error types.
    """

    @abstractmethod
    async def get_document(self, path: Path) -> Optional[DocumentSnapshot]:
        """Return the document at ``path`` or None if it does not exist."""

    @abstractmethod
    async def get_collection(self, path: Path) -> List[DocumentSnapshot]:
        """Return every document of a collection in native store order."""

    @abstractmethod
    async def query(
        self, path: Path, field_name: str, op: str, value: Any
    ) -> List[DocumentSnapshot]:
        """
        Return documents of a collection matching one filter.

        Args:
            path: Collection path.
            field_name: Stored field to compare.
            op: ``"=="`` or ``"array-contains"``.
            value: Value to compare against.
        """

    @abstractmethod
    async def add_document(self, path: Path, data: Dict[str, Any]) -> str:
        """Insert into a collection with a store-assigned id and return the id."""

    @abstractmethod
    async def set_document(self, path: Path, data: Dict[str, Any]) -> None:
        """Create or overwrite the document at ``path``."""

    @abstractmethod
    async def update_document(self, path: Path, data: Dict[str, Any]) -> None:
        """Merge ``data`` into an existing document.

        Raises:
            google.api_core.exceptions.NotFound: If the document does not exist.
        """

    @abstractmethod
    async def delete_document(self, path: Path) -> None:
        """Delete a document. Subcollections are left untouched."""

    @abstractmethod
    def new_document_id(self, path: Path) -> str:
        """Generate an id for a new document in the collection at ``path``."""

    @abstractmethod
    def batch(self) -> WriteBatch:
        """Start a new atomic write batch."""

    @abstractmethod
    def now(self) -> datetime:
        """Current timestamp as the store records it."""
