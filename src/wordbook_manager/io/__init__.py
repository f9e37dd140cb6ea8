"""I/O layer - document store access and file import."""

from .document_store import DocumentSnapshot, DocumentStore, WriteBatch
from .in_memory_document_store import InMemoryDocumentStore
from .word_importer import WordImporter

__all__ = [
    "DocumentSnapshot",
    "DocumentStore",
    "WriteBatch",
    "InMemoryDocumentStore",
    "WordImporter",
]
