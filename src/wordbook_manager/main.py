"""Main entry point for the wordbook manager application."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from wordbook_manager.coordinators import WordbookCoordinator, WordListCoordinator
from wordbook_manager.io import DocumentStore, InMemoryDocumentStore, WordImporter
from wordbook_manager.services import (
    DeletionJournal,
    InMemoryListCache,
    PartOfSpeechTagService,
    QtTaskRunner,
    SettingsManager,
    TimeToLive,
    WordbookService,
    WordService,
)
from wordbook_manager.ui import MainWindow, WordListPanel

logger = logging.getLogger(__name__)


def create_document_store(settings: SettingsManager) -> DocumentStore:
    """Build the configured document store."""
    if settings.get_store_backend() == "memory":
        logger.info("Using in-memory document store; nothing will be persisted")
        return InMemoryDocumentStore()

    from google.cloud import firestore

    from wordbook_manager.io.firestore_document_store import FirestoreDocumentStore

    client_kwargs = {"project": settings.get_project_id()}
    if settings.get_database():
        client_kwargs["database"] = settings.get_database()
    return FirestoreDocumentStore(firestore.AsyncClient(**client_kwargs))


def main():
    """
    Bootstrap the application following the Composition Root pattern.
    This is the only place that knows how to instantiate and wire all components.
    """
    # 1. Configuration and logging
    settings = SettingsManager()
    logging.basicConfig(
        level=settings.get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    user_id = settings.get_user_id()

    # 2. Initialize Application
    app = QApplication(sys.argv)
    app.setApplicationName("Wordbook Manager")
    app.setOrganizationName("WordbookManager")

    # 3. Initialize Infrastructure
    store = create_document_store(settings)
    ttl = settings.get_cache_ttl_seconds()
    policy = TimeToLive(ttl) if ttl else None
    word_cache = InMemoryListCache(policy)
    tag_cache = InMemoryListCache(policy)
    journal = DeletionJournal()
    task_runner = QtTaskRunner()

    wordbook_service = WordbookService(store, word_cache, journal)
    word_service = WordService(store, word_cache)
    tag_service = PartOfSpeechTagService(store, tag_cache, word_cache, journal)

    # 4. Construct UI
    main_window = MainWindow()
    word_panel = WordListPanel()
    main_window.set_word_panel(word_panel)

    # 5. Instantiate Coordinators (Dependency Injection)
    wordbook_coordinator = WordbookCoordinator(
        main_window=main_window,
        wordbook_service=wordbook_service,
        task_runner=task_runner,
        user_id=user_id,
    )
    word_list_coordinator = WordListCoordinator(
        word_panel=word_panel,
        word_service=word_service,
        tag_service=tag_service,
        word_importer=WordImporter(),
        main_window=main_window,
        task_runner=task_runner,
        user_id=user_id,
    )

    # 6. Signal Wiring
    wordbook_coordinator.wordbook_changed.connect(word_list_coordinator.set_wordbook)

    # 7. Show UI and start event loop
    main_window.show()
    wordbook_coordinator.load_wordbooks()

    exit_code = app.exec()
    task_runner.shutdown()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
