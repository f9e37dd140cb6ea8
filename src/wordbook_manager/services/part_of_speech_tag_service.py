"""Part-of-Speech Tag Service - user tags and cleanup of word references."""

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional

from wordbook_manager.core import TAG_UPDATABLE_FIELDS, PartOfSpeechTag, Word
from wordbook_manager.io.document_store import DocumentSnapshot, DocumentStore
from wordbook_manager.io.store_paths import (
    pos_tag_path,
    pos_tags_path,
    wordbooks_path,
    words_path,
)
from wordbook_manager.services.caching import ListCache
from wordbook_manager.services.deletion_journal import (
    DeletionJournal,
    DeletionKind,
    DeletionProgress,
)
from wordbook_manager.services.word_service import word_cache_key

logger = logging.getLogger(__name__)


class PartOfSpeechTagService:
    """Data access for tags stored under ``users/{uid}/posTags``.

    The store has no foreign keys, so deleting a tag first removes its id
    from every word of every wordbook of the user (trashed ones included).
    """

    def __init__(
        self,
        store: DocumentStore,
        tag_cache: ListCache[PartOfSpeechTag],
        word_cache: ListCache[Word],
        journal: Optional[DeletionJournal] = None,
    ) -> None:
        if store is None:
            raise ValueError("DocumentStore must not be None")
        if tag_cache is None:
            raise ValueError("Tag cache must not be None")
        if word_cache is None:
            raise ValueError("Word cache must not be None")
        self._store = store
        self._tag_cache = tag_cache
        self._word_cache = word_cache
        self._journal = journal or DeletionJournal()

    @property
    def journal(self) -> DeletionJournal:
        return self._journal

    async def list_tags(self, user_id: str) -> List[PartOfSpeechTag]:
        cached = self._tag_cache.get(user_id)
        if cached is not None:
            logger.debug("Tag cache hit for %s", user_id)
            return cached

        snapshots = await self._store.get_collection(pos_tags_path(user_id))
        tags = [PartOfSpeechTag.from_document(snap.id, snap.data) for snap in snapshots]
        self._tag_cache.put(user_id, tags)
        return list(tags)

    async def create_tag(self, user_id: str, name: str, color: str) -> PartOfSpeechTag:
        tag = PartOfSpeechTag(id="", name=name, color=color, user_id=user_id)
        tag_id = await self._store.add_document(pos_tags_path(user_id), tag.to_document())
        tag = PartOfSpeechTag(id=tag_id, name=name, color=color, user_id=user_id)
        self._tag_cache.extend(user_id, [tag])
        return tag

    async def update_tag(self, user_id: str, tag_id: str, changes: Mapping[str, Any]) -> None:
        """Change the name and/or color of a tag.

        Raises:
            ValueError: If ``changes`` is empty or names another field.
        """
        if not changes:
            raise ValueError("No tag changes given")
        document: Dict[str, Any] = {}
        for name, value in changes.items():
            if name not in TAG_UPDATABLE_FIELDS:
                raise ValueError(f"Tag field cannot be changed: {name}")
            document[TAG_UPDATABLE_FIELDS[name]] = value

        await self._store.update_document(pos_tag_path(user_id, tag_id), document)
        self._tag_cache.patch(user_id, [tag_id], dict(changes))

    async def delete_tag(self, user_id: str, tag_id: str) -> None:
        """
        Remove a tag from every word that references it, then delete the tag.

        Wordbooks are scrubbed concurrently, one query per wordbook and one
        update per matching word. Not atomic: progress is journaled and the
        store error propagates on failure.
        """
        progress = self._journal.begin(DeletionKind.POS_TAG, user_id, tag_id)
        try:
            if not progress.children_finished:
                wordbooks = await self._store.get_collection(wordbooks_path(user_id))
                await asyncio.gather(
                    *(self._scrub_wordbook(progress, user_id, wb.id, tag_id) for wb in wordbooks)
                )
                self._journal.mark_children_done(progress)
            await self._store.delete_document(pos_tag_path(user_id, tag_id))
        except Exception as e:
            self._journal.mark_failed(progress, e)
            raise
        self._tag_cache.remove(user_id, [tag_id])
        self._journal.mark_completed(progress)

    async def _scrub_wordbook(
        self, progress: DeletionProgress, user_id: str, wordbook_id: str, tag_id: str
    ) -> None:
        matches = await self._store.query(
            words_path(user_id, wordbook_id), "partOfSpeech", "array-contains", tag_id
        )
        await asyncio.gather(
            *(self._scrub_word(progress, user_id, wordbook_id, snap, tag_id) for snap in matches)
        )

    async def _scrub_word(
        self,
        progress: DeletionProgress,
        user_id: str,
        wordbook_id: str,
        snap: DocumentSnapshot,
        tag_id: str,
    ) -> None:
        remaining = [t for t in snap.data.get("partOfSpeech") or [] if t != tag_id]
        await self._store.update_document(snap.path, {"partOfSpeech": remaining})
        self._word_cache.patch(
            word_cache_key(user_id, wordbook_id), [snap.id], {"part_of_speech": remaining}
        )
        self._journal.mark_processed(progress, f"{wordbook_id}/{snap.id}")

    async def resume_deletions(self, user_id: str) -> List[str]:
        """Re-run every tag delete that previously failed.

        A delete that fails again stays FAILED in the journal with its new
        error and does not stop the others.

        Returns:
            Ids of the tags whose deletion completed.
        """
        completed = []
        for progress in self._journal.failed_deletions(user_id, DeletionKind.POS_TAG):
            logger.info("Resuming delete of tag %s", progress.target_id)
            try:
                await self.delete_tag(user_id, progress.target_id)
            except Exception as e:
                logger.warning("Resumed delete of tag %s failed: %s", progress.target_id, e)
                continue
            completed.append(progress.target_id)
        return completed
