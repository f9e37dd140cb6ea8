"""Tests for WordbookCoordinator with a real MainWindow and WordbookService."""

import asyncio
from unittest.mock import MagicMock

import pytest
from PySide6.QtWidgets import QApplication

from wordbook_manager.coordinators import WordbookCoordinator
from wordbook_manager.core import WordDraft
from wordbook_manager.io import InMemoryDocumentStore
from wordbook_manager.services import InMemoryListCache, WordbookService, WordService
from wordbook_manager.ui import MainWindow

USER = "user-1"


def ensure_qt_app():
    if QApplication.instance() is None:
        QApplication([])


class ImmediateTaskRunner:
    """Runs each coroutine to completion before returning."""

    def submit(self, coro, on_result, on_error):
        try:
            result = asyncio.run(coro)
        except Exception as e:
            on_error(e)
            return
        on_result(result)


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def word_cache():
    return InMemoryListCache()


@pytest.fixture
def wordbook_service(store, word_cache):
    return WordbookService(store, word_cache)


@pytest.fixture
def main_window(monkeypatch):
    ensure_qt_app()
    window = MainWindow()
    monkeypatch.setattr(window, "show_error", MagicMock())
    return window


@pytest.fixture
def selections():
    return []


@pytest.fixture
def coordinator(main_window, wordbook_service, selections):
    coordinator = WordbookCoordinator(main_window, wordbook_service, ImmediateTaskRunner(), USER)
    coordinator.wordbook_changed.connect(selections.append)
    return coordinator


def combo_names(window):
    return [window.wordbook_combo.itemText(i) for i in range(window.wordbook_combo.count())]


class TestWordbookCoordinatorConstruction:
    """Coordinator should fail fast on missing collaborators."""

    def test_requires_main_window(self, wordbook_service):
        with pytest.raises(ValueError, match="MainWindow must not be None"):
            WordbookCoordinator(None, wordbook_service, ImmediateTaskRunner(), USER)

    def test_requires_service(self, main_window):
        with pytest.raises(ValueError, match="WordbookService must not be None"):
            WordbookCoordinator(main_window, None, ImmediateTaskRunner(), USER)

    def test_requires_task_runner(self, main_window, wordbook_service):
        with pytest.raises(ValueError, match="TaskRunner must not be None"):
            WordbookCoordinator(main_window, wordbook_service, None, USER)


def test_load_with_no_wordbooks_announces_empty_selection(coordinator, main_window, selections):
    coordinator.load_wordbooks()

    assert main_window.wordbook_combo.count() == 0
    assert selections == [""]


def test_create_selects_new_wordbook(coordinator, main_window, selections):
    coordinator.handle_create_requested("HSK 1")
    coordinator.handle_create_requested("  HSK 2 ")

    assert combo_names(main_window) == ["HSK 1", "HSK 2"]
    assert main_window.current_wordbook_name() == "HSK 2"
    assert selections[-1] == main_window.current_wordbook_id()
    assert not coordinator.busy


def test_blank_name_is_rejected(coordinator, main_window, wordbook_service):
    coordinator.handle_create_requested("   ")

    main_window.show_error.assert_called_once_with(
        "Invalid Name", "Wordbook name cannot be empty."
    )
    assert asyncio.run(wordbook_service.list_wordbooks(USER)) == []


def test_rename_keeps_selection(coordinator, main_window, wordbook_service):
    first = asyncio.run(wordbook_service.create_wordbook(USER, "First"))
    asyncio.run(wordbook_service.create_wordbook(USER, "Second"))
    coordinator.load_wordbooks(first.id)

    coordinator.handle_rename_requested(first.id, "Renamed")

    assert combo_names(main_window) == ["Renamed", "Second"]
    assert main_window.current_wordbook_id() == first.id


def test_rename_missing_wordbook_shows_error(coordinator, main_window):
    coordinator.handle_rename_requested("missing", "Name")

    assert main_window.show_error.call_args.args[0] == "Rename Error"
    assert not coordinator.busy


def test_trash_removes_from_selector(coordinator, main_window, wordbook_service, selections):
    first = asyncio.run(wordbook_service.create_wordbook(USER, "First"))
    second = asyncio.run(wordbook_service.create_wordbook(USER, "Second"))
    coordinator.load_wordbooks(second.id)

    coordinator.handle_trash_requested(second.id)

    assert combo_names(main_window) == ["First"]
    assert selections[-1] == first.id
    trashed = asyncio.run(wordbook_service.list_trashed_wordbooks(USER))
    assert [wb.id for wb in trashed] == [second.id]


def test_empty_trash_deletes_trashed_words(coordinator, wordbook_service, store, word_cache):
    words = WordService(store, word_cache)
    doomed = asyncio.run(wordbook_service.create_wordbook(USER, "Doomed"))
    asyncio.run(words.create_word(USER, doomed.id, WordDraft(word="猫")))
    coordinator.handle_trash_requested(doomed.id)

    coordinator.handle_empty_trash_requested()

    assert asyncio.run(wordbook_service.list_trashed_wordbooks(USER)) == []
    assert asyncio.run(wordbook_service.get_wordbook(USER, doomed.id)) is None
    assert asyncio.run(words.list_words(USER, doomed.id)) == []
