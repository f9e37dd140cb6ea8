"""Word Service - CRUD and bulk operations for the words of a wordbook."""

import logging
from typing import Any, Dict, Hashable, List, Mapping, Sequence

from wordbook_manager.core import (
    RESET_PROGRESS_CHANGES,
    RelatedWords,
    Word,
    WordDraft,
    word_changes_to_document,
)
from wordbook_manager.io.document_store import DocumentStore
from wordbook_manager.io.store_paths import word_path, words_path
from wordbook_manager.services.caching import ListCache

logger = logging.getLogger(__name__)


def word_cache_key(user_id: str, wordbook_id: str) -> Hashable:
    return (user_id, wordbook_id)


def _cache_changes(changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Bring partial changes into the shape the cached Word dataclass holds."""
    normalized = dict(changes)
    if isinstance(normalized.get("related_words"), dict):
        normalized["related_words"] = RelatedWords.from_document(normalized["related_words"])
    if "part_of_speech" in normalized:
        normalized["part_of_speech"] = list(normalized["part_of_speech"])
    return normalized


class WordService:
    """Data access for words stored under ``users/{uid}/wordbooks/{id}/words``.

    Reads go through the word cache; every write updates the store first
    and then the cached list for the same (user, wordbook), if one is held.
    Store errors propagate unchanged.
    """

    def __init__(self, store: DocumentStore, word_cache: ListCache[Word]) -> None:
        if store is None:
            raise ValueError("DocumentStore must not be None")
        if word_cache is None:
            raise ValueError("Word cache must not be None")
        self._store = store
        self._cache = word_cache

    async def list_words(self, user_id: str, wordbook_id: str) -> List[Word]:
        """Return the words of a wordbook in store order.

        A cached list is returned as-is, even if another process has
        changed the wordbook since it was read.
        """
        key = word_cache_key(user_id, wordbook_id)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Word cache hit for %s/%s", user_id, wordbook_id)
            return cached

        logger.debug("Word cache miss for %s/%s", user_id, wordbook_id)
        snapshots = await self._store.get_collection(words_path(user_id, wordbook_id))
        words = [Word.from_document(snap.id, snap.data) for snap in snapshots]
        self._cache.put(key, words)
        return list(words)

    async def create_word(self, user_id: str, wordbook_id: str, draft: WordDraft) -> Word:
        """Insert a word with a fresh creation timestamp and zeroed progress."""
        created_at = self._store.now()
        document = draft.to_document()
        document.update(
            wordbookId=wordbook_id,
            createdAt=created_at,
            reviewDate=None,
            studyCount=0,
        )
        word_id = await self._store.add_document(words_path(user_id, wordbook_id), document)

        word = Word.from_draft(word_id, wordbook_id, draft, created_at)
        self._cache.extend(word_cache_key(user_id, wordbook_id), [word])
        return word

    async def update_word(
        self, user_id: str, wordbook_id: str, word_id: str, changes: Mapping[str, Any]
    ) -> None:
        """Merge attribute-named changes into a stored word.

        Raises:
            ValueError: If ``changes`` is empty, names an unknown field, or
                tries to change ``id`` or ``wordbook_id``.
        """
        if not changes:
            raise ValueError("No word changes given")
        document = word_changes_to_document(dict(changes))
        await self._store.update_document(word_path(user_id, wordbook_id, word_id), document)
        self._cache.patch(word_cache_key(user_id, wordbook_id), [word_id], _cache_changes(changes))

    async def delete_word(self, user_id: str, wordbook_id: str, word_id: str) -> None:
        await self._store.delete_document(word_path(user_id, wordbook_id, word_id))
        self._cache.remove(word_cache_key(user_id, wordbook_id), [word_id])

    async def bulk_import(
        self, user_id: str, wordbook_id: str, drafts: Sequence[WordDraft]
    ) -> List[Word]:
        """
        Insert many words in one atomic batch.

        Ids are generated up front and every word shares one creation
        timestamp. The cached list is extended, or started with just the
        imported words when nothing was cached.

        Returns:
            The created words in input order.
        """
        if not drafts:
            return []

        collection = words_path(user_id, wordbook_id)
        created_at = self._store.now()
        batch = self._store.batch()
        words = []
        for draft in drafts:
            word = Word.from_draft(
                self._store.new_document_id(collection), wordbook_id, draft, created_at
            )
            batch.set(collection + (word.id,), word.to_document())
            words.append(word)
        await batch.commit()

        logger.info("Imported %d words into %s/%s", len(words), user_id, wordbook_id)
        self._cache.extend(word_cache_key(user_id, wordbook_id), words, create=True)
        return words

    async def reset_progress(
        self, user_id: str, wordbook_id: str, word_ids: Sequence[str]
    ) -> None:
        """Clear mastery, study count and review date of the given words atomically."""
        if not word_ids:
            return
        document = word_changes_to_document(RESET_PROGRESS_CHANGES)
        batch = self._store.batch()
        for word_id in word_ids:
            batch.update(word_path(user_id, wordbook_id, word_id), document)
        await batch.commit()
        self._cache.patch(word_cache_key(user_id, wordbook_id), word_ids, RESET_PROGRESS_CHANGES)

    async def bulk_delete(
        self, user_id: str, wordbook_id: str, word_ids: Sequence[str]
    ) -> None:
        """Delete the given words atomically."""
        if not word_ids:
            return
        batch = self._store.batch()
        for word_id in word_ids:
            batch.delete(word_path(user_id, wordbook_id, word_id))
        await batch.commit()
        self._cache.remove(word_cache_key(user_id, wordbook_id), word_ids)
