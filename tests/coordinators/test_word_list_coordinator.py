"""Tests for WordListCoordinator wired to real services and the in-memory store."""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from PySide6.QtWidgets import QApplication

from wordbook_manager.coordinators import WordListCoordinator, sort_newest_first
from wordbook_manager.core import Word, WordDraft
from wordbook_manager.io import InMemoryDocumentStore, WordImporter
from wordbook_manager.io.store_paths import words_path
from wordbook_manager.services import (
    InMemoryListCache,
    PartOfSpeechTagService,
    WordService,
)
from wordbook_manager.ui import WordListPanel
from wordbook_manager.ui.word_list_panel import COLUMNS, WORD_COLUMN

USER = "user-1"
BOOK = "wb-1"


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


class DeferredTaskRunner:
    """Holds coroutines until the test runs them."""

    def __init__(self):
        self.pending = []

    def submit(self, coro, on_result, on_error):
        self.pending.append((coro, on_result, on_error))

    def run(self, index):
        coro, on_result, _on_error = self.pending.pop(index)
        on_result(asyncio.run(coro))


class TickingClock:
    def __init__(self):
        self.current = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def store():
    return InMemoryDocumentStore(clock=TickingClock())


@pytest.fixture
def word_cache():
    return InMemoryListCache()


@pytest.fixture
def word_service(store, word_cache):
    return WordService(store, word_cache)


@pytest.fixture
def tag_service(store, word_cache):
    return PartOfSpeechTagService(store, InMemoryListCache(), word_cache)


@pytest.fixture
def panel():
    ensure_qt_app()
    return WordListPanel()


@pytest.fixture
def main_window():
    return MagicMock()


@pytest.fixture
def coordinator(panel, word_service, tag_service, main_window):
    return WordListCoordinator(
        word_panel=panel,
        word_service=word_service,
        tag_service=tag_service,
        word_importer=WordImporter(),
        main_window=main_window,
        task_runner=ImmediateTaskRunner(),
        user_id=USER,
    )


def displayed_words(panel):
    return [panel.table.item(row, WORD_COLUMN).text() for row in range(panel.table.rowCount())]


async def stored_words(store):
    return {s.data["word"]: s.data for s in await store.get_collection(words_path(USER, BOOK))}


class TestWordListCoordinatorConstruction:
    """Coordinator should fail fast on missing collaborators."""

    def test_requires_panel(self, word_service, tag_service, main_window):
        with pytest.raises(ValueError, match="WordListPanel must not be None"):
            WordListCoordinator(
                None, word_service, tag_service, WordImporter(), main_window, ImmediateTaskRunner(), USER
            )

    def test_requires_user(self, panel, word_service, tag_service, main_window):
        with pytest.raises(ValueError, match="User id must not be empty"):
            WordListCoordinator(
                panel, word_service, tag_service, WordImporter(), main_window, ImmediateTaskRunner(), ""
            )

    def test_wires_import_menu(self, coordinator, main_window):
        main_window.import_requested.connect.assert_called_once_with(
            coordinator.handle_import_requested
        )


def test_sort_newest_first_puts_undated_last():
    old = Word(id="a", word="旧", wordbook_id=BOOK, created_at=datetime(2024, 1, 1))
    new = Word(id="b", word="新", wordbook_id=BOOK, created_at=datetime(2024, 2, 1, tzinfo=timezone.utc))
    undated = Word(id="c", word="无", wordbook_id=BOOK, created_at=None)

    assert [w.id for w in sort_newest_first([undated, old, new])] == ["b", "a", "c"]


def test_set_wordbook_displays_words_newest_first(coordinator, panel, word_service):
    asyncio.run(word_service.create_word(USER, BOOK, WordDraft(word="一")))
    asyncio.run(word_service.create_word(USER, BOOK, WordDraft(word="二")))

    coordinator.set_wordbook(BOOK)

    assert displayed_words(panel) == ["二", "一"]


def test_set_wordbook_empty_clears_table(coordinator, panel, word_service):
    asyncio.run(word_service.create_word(USER, BOOK, WordDraft(word="一")))
    coordinator.set_wordbook(BOOK)

    coordinator.set_wordbook("")

    assert coordinator.wordbook_id is None
    assert panel.table.rowCount() == 0
    assert panel.status_label.text() == "No words yet"


def test_stale_load_is_ignored(panel, word_service, tag_service, main_window):
    runner = DeferredTaskRunner()
    coordinator = WordListCoordinator(
        panel, word_service, tag_service, WordImporter(), main_window, runner, USER
    )
    asyncio.run(word_service.create_word(USER, "first", WordDraft(word="一")))
    asyncio.run(word_service.create_word(USER, "second", WordDraft(word="二")))

    coordinator.set_wordbook("first")
    coordinator.set_wordbook("second")
    runner.run(0)

    assert panel.status_label.text() == "Loading..."

    runner.run(0)
    assert displayed_words(panel) == ["二"]


def test_create_word_maps_tag_names_to_ids(coordinator, panel, tag_service, store):
    noun = asyncio.run(tag_service.create_tag(USER, "noun", "#f00"))
    coordinator.set_wordbook(BOOK)

    coordinator.handle_create_requested(
        {"word": " 猫 ", "part_of_speech": ["noun", "pet"], "mastery": 10}
    )

    data = asyncio.run(stored_words(store))["猫"]
    assert data["partOfSpeech"] == [noun.id, "pet"]
    assert data["mastery"] == 10
    assert displayed_words(panel) == ["猫"]
    assert panel.table.item(0, COLUMNS.index("Part of speech")).text() == "noun, pet"
    assert not panel.busy


def test_blank_word_is_rejected(coordinator, main_window, store):
    coordinator.set_wordbook(BOOK)

    coordinator.handle_create_requested({"word": "   "})

    main_window.show_error.assert_called_once_with("Invalid Word", "Word text cannot be empty.")
    assert asyncio.run(stored_words(store)) == {}


def test_update_word_refreshes_table(coordinator, panel, word_service):
    word = asyncio.run(word_service.create_word(USER, BOOK, WordDraft(word="猫")))
    coordinator.set_wordbook(BOOK)

    coordinator.handle_update_requested(
        word.id, {"word": "猫", "translation": "cat", "part_of_speech": [], "mastery": 20}
    )

    assert panel.table.item(0, COLUMNS.index("Translation")).text() == "cat"
    assert panel.table.item(0, COLUMNS.index("Mastery")).text() == "20"


def test_failed_update_shows_error_and_releases_panel(coordinator, panel, main_window):
    coordinator.set_wordbook(BOOK)

    coordinator.handle_update_requested("missing", {"word": "猫"})

    title, _message = main_window.show_error.call_args.args
    assert title == "Update Word Error"
    assert not panel.busy


def test_delete_reset_and_bulk_delete(coordinator, panel, word_service, store):
    words = asyncio.run(
        word_service.bulk_import(USER, BOOK, [WordDraft(word=w, mastery=50) for w in "甲乙丙"])
    )
    coordinator.set_wordbook(BOOK)

    coordinator.handle_reset_requested([words[0].id])
    coordinator.handle_delete_requested(words[1].id)

    data = asyncio.run(stored_words(store))
    assert data["甲"]["mastery"] == 0
    assert data["丙"]["mastery"] == 50
    assert "乙" not in data
    assert panel.table.rowCount() == 2

    coordinator.handle_bulk_delete_requested([words[0].id, words[2].id])

    assert asyncio.run(stored_words(store)) == {}
    assert panel.status_label.text() == "No words yet"


def test_import_csv_adds_words(coordinator, panel, tag_service, store, tmp_path):
    noun = asyncio.run(tag_service.create_tag(USER, "noun", "#f00"))
    csv_path = tmp_path / "words.csv"
    csv_path.write_text("word,partOfSpeech\n猫,noun\n狗,noun;pet\n", encoding="utf-8")
    coordinator.set_wordbook(BOOK)

    coordinator.handle_import_requested(csv_path)

    data = asyncio.run(stored_words(store))
    assert data["猫"]["partOfSpeech"] == [noun.id]
    assert data["狗"]["partOfSpeech"] == [noun.id, "pet"]
    assert sorted(displayed_words(panel)) == sorted(["猫", "狗"])


def test_import_reports_unreadable_file(coordinator, main_window, tmp_path):
    coordinator.set_wordbook(BOOK)

    coordinator.handle_import_requested(tmp_path / "missing.csv")

    assert main_window.show_error.call_args.args[0] == "Import Error"


def test_import_of_empty_file_informs_user(coordinator, main_window, store, tmp_path):
    csv_path = tmp_path / "empty.csv"
    csv_path.write_text("word\n", encoding="utf-8")
    coordinator.set_wordbook(BOOK)

    coordinator.handle_import_requested(csv_path)

    main_window.show_info.assert_called_once()
    assert asyncio.run(stored_words(store)) == {}


def test_actions_without_wordbook_do_nothing(coordinator, main_window, store):
    coordinator.handle_create_requested({"word": "猫"})
    coordinator.handle_delete_requested("w1")

    main_window.show_error.assert_not_called()
    assert asyncio.run(stored_words(store)) == {}


def test_import_reports_unparseable_numbers(coordinator, main_window, store, tmp_path):
    csv_path = tmp_path / "overflow.csv"
    csv_path.write_text("word,mastery\n猫,inf\n", encoding="utf-8")
    coordinator.set_wordbook(BOOK)

    coordinator.handle_import_requested(csv_path)

    title, message = main_window.show_error.call_args.args
    assert title == "Import Error"
    assert "invalid mastery" in message
    assert asyncio.run(stored_words(store)) == {}
