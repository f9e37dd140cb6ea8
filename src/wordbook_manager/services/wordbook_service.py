"""Wordbook Service - wordbook lifecycle including trash and cascade delete."""

import asyncio
import dataclasses
import logging
from typing import List, Optional

from wordbook_manager.core import Word, Wordbook
from wordbook_manager.io.document_store import DocumentStore
from wordbook_manager.io.store_paths import (
    word_path,
    wordbook_path,
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


class WordbookService:
    """Data access for wordbooks stored under ``users/{uid}/wordbooks``.

    Wordbooks are not cached. The word cache is only touched to forget the
    words of a wordbook that has been hard-deleted.
    """

    def __init__(
        self,
        store: DocumentStore,
        word_cache: ListCache[Word],
        journal: Optional[DeletionJournal] = None,
    ) -> None:
        if store is None:
            raise ValueError("DocumentStore must not be None")
        if word_cache is None:
            raise ValueError("Word cache must not be None")
        self._store = store
        self._word_cache = word_cache
        self._journal = journal or DeletionJournal()

    @property
    def journal(self) -> DeletionJournal:
        return self._journal

    async def _list(self, user_id: str) -> List[Wordbook]:
        snapshots = await self._store.get_collection(wordbooks_path(user_id))
        return [Wordbook.from_document(snap.id, snap.data) for snap in snapshots]

    async def list_wordbooks(self, user_id: str) -> List[Wordbook]:
        """Wordbooks that are not in the trash, in store order."""
        return [wb for wb in await self._list(user_id) if not wb.trashed]

    async def list_trashed_wordbooks(self, user_id: str) -> List[Wordbook]:
        return [wb for wb in await self._list(user_id) if wb.trashed]

    async def get_wordbook(self, user_id: str, wordbook_id: str) -> Optional[Wordbook]:
        """Return the wordbook, or None if it does not exist."""
        snap = await self._store.get_document(wordbook_path(user_id, wordbook_id))
        if snap is None:
            return None
        return Wordbook.from_document(snap.id, snap.data)

    async def create_wordbook(self, user_id: str, name: str) -> Wordbook:
        """Insert a wordbook; the returned record carries the timestamp that was written."""
        wordbook = Wordbook(
            id="",
            name=name,
            user_id=user_id,
            created_at=self._store.now(),
            trashed=False,
            trashed_at=None,
        )
        wordbook_id = await self._store.add_document(
            wordbooks_path(user_id), wordbook.to_document()
        )
        return dataclasses.replace(wordbook, id=wordbook_id)

    async def rename_wordbook(self, user_id: str, wordbook_id: str, new_name: str) -> None:
        await self._store.update_document(wordbook_path(user_id, wordbook_id), {"name": new_name})

    async def trash_wordbook(self, user_id: str, wordbook_id: str) -> None:
        """Mark a wordbook as trashed. Its words are kept."""
        await self._store.update_document(
            wordbook_path(user_id, wordbook_id),
            {"trashed": True, "trashedAt": self._store.now()},
        )

    async def empty_trash(self, user_id: str) -> None:
        """Hard-delete every trashed wordbook together with its words."""
        trashed = await self.list_trashed_wordbooks(user_id)
        await asyncio.gather(*(self.delete_wordbook(user_id, wb.id) for wb in trashed))

    async def delete_wordbook(self, user_id: str, wordbook_id: str) -> None:
        """
        Hard-delete a wordbook: every word one by one, then the wordbook document.

        Not atomic. On failure the journal keeps the progress as FAILED and
        the store error propagates; ``resume_deletions`` finishes the job.
        """
        progress = self._journal.begin(DeletionKind.WORDBOOK, user_id, wordbook_id)
        try:
            if not progress.children_finished:
                snapshots = await self._store.get_collection(words_path(user_id, wordbook_id))
                await asyncio.gather(
                    *(
                        self._delete_word(progress, user_id, wordbook_id, snap.id)
                        for snap in snapshots
                        if snap.id not in progress.processed_ids
                    )
                )
                self._journal.mark_children_done(progress)
            await self._store.delete_document(wordbook_path(user_id, wordbook_id))
        except Exception as e:
            self._journal.mark_failed(progress, e)
            raise
        finally:
            self._word_cache.invalidate(word_cache_key(user_id, wordbook_id))
        self._journal.mark_completed(progress)

    async def _delete_word(
        self, progress: DeletionProgress, user_id: str, wordbook_id: str, word_id: str
    ) -> None:
        await self._store.delete_document(word_path(user_id, wordbook_id, word_id))
        self._journal.mark_processed(progress, word_id)

    async def resume_deletions(self, user_id: str) -> List[str]:
        """Re-run every wordbook delete that previously failed.

        A delete that fails again stays FAILED in the journal with its new
        error and does not stop the others.

        Returns:
            Ids of the wordbooks whose deletion completed.
        """
        completed = []
        for progress in self._journal.failed_deletions(user_id, DeletionKind.WORDBOOK):
            logger.info("Resuming delete of wordbook %s", progress.target_id)
            try:
                await self.delete_wordbook(user_id, progress.target_id)
            except Exception as e:
                logger.warning("Resumed delete of wordbook %s failed: %s", progress.target_id, e)
                continue
            completed.append(progress.target_id)
        return completed
