"""Word List Coordinator - Connects the word table to the word and tag services."""

import dataclasses
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from PySide6.QtCore import QObject, Slot

from wordbook_manager.core import PartOfSpeechTag, Word, WordDraft
from wordbook_manager.io import WordImporter
from wordbook_manager.services import PartOfSpeechTagService, TaskRunner, WordService
from wordbook_manager.ui import MainWindow, WordListPanel

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def sort_newest_first(words: List[Word]) -> List[Word]:
    """Display order: newest creation time first, undated words last."""

    def created(word: Word) -> datetime:
        value = word.created_at
        if value is None:
            return _OLDEST
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    return sorted(words, key=created, reverse=True)


class WordListCoordinator(QObject):
    """
    Manages the word table of the selected wordbook.

    The word service is the only source of truth: after every change the
    list is read back from it (served from its cache) instead of being
    patched here.

    Responsibilities:
    - Load words and tags when the wordbook changes
    - Validate form input before create/update
    - Create, edit, delete, bulk delete and reset progress of words
    - Import words from CSV
    - Surface errors and release the busy state
    """

    def __init__(
        self,
        word_panel: WordListPanel,
        word_service: WordService,
        tag_service: PartOfSpeechTagService,
        word_importer: WordImporter,
        main_window: MainWindow,
        task_runner: TaskRunner,
        user_id: str,
    ):
        super().__init__()

        if word_panel is None:
            raise ValueError("WordListPanel must not be None")
        if word_service is None:
            raise ValueError("WordService must not be None")
        if tag_service is None:
            raise ValueError("PartOfSpeechTagService must not be None")
        if word_importer is None:
            raise ValueError("WordImporter must not be None")
        if main_window is None:
            raise ValueError("MainWindow must not be None")
        if task_runner is None:
            raise ValueError("TaskRunner must not be None")
        if not user_id:
            raise ValueError("User id must not be empty")

        self.word_panel = word_panel
        self.word_service = word_service
        self.tag_service = tag_service
        self.word_importer = word_importer
        self.main_window = main_window
        self.task_runner = task_runner
        self.user_id = user_id

        self.wordbook_id: Optional[str] = None
        self._tags: List[PartOfSpeechTag] = []

        # Wire panel signals
        self.word_panel.word_create_requested.connect(self.handle_create_requested)
        self.word_panel.word_update_requested.connect(self.handle_update_requested)
        self.word_panel.word_delete_requested.connect(self.handle_delete_requested)
        self.word_panel.progress_reset_requested.connect(self.handle_reset_requested)
        self.word_panel.words_delete_requested.connect(self.handle_bulk_delete_requested)
        self.main_window.import_requested.connect(self.handle_import_requested)

    # -------- Loading --------

    @Slot(str)
    def set_wordbook(self, wordbook_id: str):
        """Switch to another wordbook ("" clears the table)."""
        self.wordbook_id = wordbook_id or None
        if self.wordbook_id is None:
            self.word_panel.display_words([])
            return
        self.word_panel.show_loading()
        self.task_runner.submit(
            self._load(self.wordbook_id),
            self._on_loaded,
            self._on_load_error,
        )

    async def _load(self, wordbook_id: str) -> Tuple[str, List[Word], List[PartOfSpeechTag]]:
        words = await self.word_service.list_words(self.user_id, wordbook_id)
        tags = await self.tag_service.list_tags(self.user_id)
        return wordbook_id, words, tags

    def _on_loaded(self, result: Tuple[str, List[Word], List[PartOfSpeechTag]]):
        wordbook_id, words, tags = result
        if wordbook_id != self.wordbook_id:
            # A newer selection superseded this load.
            return
        self._tags = list(tags)
        self.word_panel.set_busy(False)
        self.word_panel.display_words(sort_newest_first(words), self._tag_labels())

    def _on_load_error(self, error: Exception):
        self.word_panel.set_busy(False)
        self.word_panel.show_error(str(error) or "Failed to load words")

    def _refresh(self, _result: Any = None):
        """Re-read the list from the word service after a change."""
        if self.wordbook_id is None:
            self.word_panel.set_busy(False)
            return
        self.task_runner.submit(
            self._load(self.wordbook_id),
            self._on_loaded,
            lambda error: self._on_error("Word Load Error", error),
        )

    # -------- Tag mapping --------

    def _tag_labels(self) -> Dict[str, str]:
        return {tag.id: tag.name for tag in self._tags}

    def _tag_ids(self, labels: List[str]) -> List[str]:
        """Map tag names typed in the form back to tag ids; other labels stay as typed."""
        by_name = {tag.name: tag.id for tag in self._tags}
        return [by_name.get(label, label) for label in labels]

    # -------- Mutations --------

    def _validated(self, values: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        word = (values.get("word") or "").strip()
        if not word:
            self.main_window.show_error("Invalid Word", "Word text cannot be empty.")
            return None
        changes = dict(values)
        changes["word"] = word
        changes["part_of_speech"] = self._tag_ids(list(values.get("part_of_speech", [])))
        changes["mastery"] = int(values.get("mastery") or 0)
        return changes

    def _run(self, coro, title: str):
        self.word_panel.set_busy(True)
        self.task_runner.submit(coro, self._refresh, lambda error: self._on_error(title, error))

    @Slot(dict)
    def handle_create_requested(self, values: Dict[str, Any]):
        changes = self._validated(values)
        if changes is None or self.wordbook_id is None:
            return
        draft = WordDraft(**changes)
        self._run(
            self.word_service.create_word(self.user_id, self.wordbook_id, draft),
            "Create Word Error",
        )

    @Slot(str, dict)
    def handle_update_requested(self, word_id: str, values: Dict[str, Any]):
        changes = self._validated(values)
        if changes is None or self.wordbook_id is None:
            return
        self._run(
            self.word_service.update_word(self.user_id, self.wordbook_id, word_id, changes),
            "Update Word Error",
        )

    @Slot(str)
    def handle_delete_requested(self, word_id: str):
        if self.wordbook_id is None:
            return
        self._run(
            self.word_service.delete_word(self.user_id, self.wordbook_id, word_id),
            "Delete Word Error",
        )

    @Slot(list)
    def handle_reset_requested(self, word_ids: List[str]):
        if self.wordbook_id is None or not word_ids:
            return
        self._run(
            self.word_service.reset_progress(self.user_id, self.wordbook_id, word_ids),
            "Reset Progress Error",
        )

    @Slot(list)
    def handle_bulk_delete_requested(self, word_ids: List[str]):
        if self.wordbook_id is None or not word_ids:
            return
        self._run(
            self.word_service.bulk_delete(self.user_id, self.wordbook_id, word_ids),
            "Delete Words Error",
        )

    @Slot(Path)
    def handle_import_requested(self, csv_path: Path):
        if self.wordbook_id is None:
            return
        try:
            drafts = self.word_importer.read_csv(csv_path)
        except (OSError, ValueError) as e:
            self.main_window.show_error("Import Error", str(e))
            return
        if not drafts:
            self.main_window.show_info("Import", f"No words found in {csv_path.name}.")
            return
        drafts = [
            dataclasses.replace(draft, part_of_speech=self._tag_ids(draft.part_of_speech))
            for draft in drafts
        ]
        self._run(
            self.word_service.bulk_import(self.user_id, self.wordbook_id, drafts),
            "Import Error",
        )

    def _on_error(self, title: str, error: Exception):
        self.word_panel.set_busy(False)
        logger.error("%s: %s", title, error)
        self.main_window.show_error(title, str(error) or type(error).__name__)
