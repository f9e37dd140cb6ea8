"""Wordbook Coordinator - Orchestrates wordbook selection and lifecycle actions."""

import logging
from typing import List, Optional

from PySide6.QtCore import QObject, Signal, Slot

from wordbook_manager.core import Wordbook
from wordbook_manager.services import TaskRunner, WordbookService
from wordbook_manager.ui import MainWindow

logger = logging.getLogger(__name__)


class WordbookCoordinator(QObject):
    """Manages the wordbook selector and the wordbook menu actions.

    Responsibilities:
    - Load the user's wordbooks into the selector
    - Create, rename and trash wordbooks
    - Empty the trash
    - Announce the selected wordbook to the word list
    """

    wordbook_changed = Signal(str)  # wordbook_id, "" when none is selected

    def __init__(
        self,
        main_window: MainWindow,
        wordbook_service: WordbookService,
        task_runner: TaskRunner,
        user_id: str,
    ):
        super().__init__()

        if main_window is None:
            raise ValueError("MainWindow must not be None")
        if wordbook_service is None:
            raise ValueError("WordbookService must not be None")
        if task_runner is None:
            raise ValueError("TaskRunner must not be None")
        if not user_id:
            raise ValueError("User id must not be empty")

        self.main_window = main_window
        self.wordbook_service = wordbook_service
        self.task_runner = task_runner
        self.user_id = user_id
        self.busy = False

        self.main_window.wordbook_selected.connect(self.wordbook_changed.emit)
        self.main_window.wordbook_create_requested.connect(self.handle_create_requested)
        self.main_window.wordbook_rename_requested.connect(self.handle_rename_requested)
        self.main_window.wordbook_trash_requested.connect(self.handle_trash_requested)
        self.main_window.empty_trash_requested.connect(self.handle_empty_trash_requested)

    def load_wordbooks(self, select_id: Optional[str] = None):
        """Fetch wordbooks and refresh the selector."""
        self.task_runner.submit(
            self.wordbook_service.list_wordbooks(self.user_id),
            lambda wordbooks: self._on_wordbooks_loaded(wordbooks, select_id),
            lambda error: self._on_error("Wordbook Load Error", error),
        )

    def _on_wordbooks_loaded(self, wordbooks: List[Wordbook], select_id: Optional[str] = None):
        self.busy = False
        self.main_window.set_wordbooks(wordbooks, select_id)

    def _run(self, coro, title: str, select_id: Optional[str] = None):
        """Run a mutation, then reload the selector."""
        self.busy = True
        self.task_runner.submit(
            coro,
            lambda result: self.load_wordbooks(
                select_id if select_id is not None else getattr(result, "id", None)
            ),
            lambda error: self._on_error(title, error),
        )

    @Slot(str)
    def handle_create_requested(self, name: str):
        name = name.strip()
        if not name:
            self.main_window.show_error("Invalid Name", "Wordbook name cannot be empty.")
            return
        self._run(self.wordbook_service.create_wordbook(self.user_id, name), "Create Error")

    @Slot(str, str)
    def handle_rename_requested(self, wordbook_id: str, new_name: str):
        new_name = new_name.strip()
        if not new_name:
            self.main_window.show_error("Invalid Name", "Wordbook name cannot be empty.")
            return
        self._run(
            self.wordbook_service.rename_wordbook(self.user_id, wordbook_id, new_name),
            "Rename Error",
            select_id=wordbook_id,
        )

    @Slot(str)
    def handle_trash_requested(self, wordbook_id: str):
        self._run(
            self.wordbook_service.trash_wordbook(self.user_id, wordbook_id),
            "Trash Error",
            select_id="",
        )

    @Slot()
    def handle_empty_trash_requested(self):
        self._run(self.wordbook_service.empty_trash(self.user_id), "Empty Trash Error")

    def _on_error(self, title: str, error: Exception):
        self.busy = False
        logger.error("%s: %s", title, error)
        self.main_window.show_error(title, str(error) or type(error).__name__)
