"""
Wordbook Manager - vocabulary wordbooks backed by a hosted document store.

This package provides:
- Wordbooks with trash and cascade delete
- Words with part-of-speech tags and study progress, including bulk
  import, progress reset and bulk delete
- A read cache with pluggable invalidation
- A desktop word table editor
"""

__version__ = "0.1.0"

# Make key components available at package level
from wordbook_manager.core import PartOfSpeechTag, Word, WordDraft, Wordbook
from wordbook_manager.io import DocumentStore, InMemoryDocumentStore

__all__ = [
    "Wordbook",
    "Word",
    "WordDraft",
    "PartOfSpeechTag",
    "DocumentStore",
    "InMemoryDocumentStore",
]
