"""Services layer - data access over the document store, caching and app plumbing."""

from wordbook_manager.services.deletion_journal import (
    DeletionJournal,
    DeletionKind,
    DeletionProgress,
    DeletionStage,
)
from wordbook_manager.services.word_service import WordService, word_cache_key
from wordbook_manager.services.wordbook_service import WordbookService
from wordbook_manager.services.part_of_speech_tag_service import PartOfSpeechTagService
from wordbook_manager.services.settings_manager import SettingsManager

# Caching services
from wordbook_manager.services.caching import (
    InMemoryListCache,
    InvalidationPolicy,
    ListCache,
    NeverExpire,
    TimeToLive,
)

# Async plumbing for the UI
from wordbook_manager.services.task_runner import (
    EventLoopThread,
    QtTaskRunner,
    StoreTaskWorker,
    TaskRunner,
    WorkerSignals,
)

__all__ = [
    "WordService",
    "WordbookService",
    "PartOfSpeechTagService",
    "word_cache_key",
    "DeletionJournal",
    "DeletionKind",
    "DeletionProgress",
    "DeletionStage",
    "SettingsManager",
    "ListCache",
    "InvalidationPolicy",
    "NeverExpire",
    "TimeToLive",
    "InMemoryListCache",
    "TaskRunner",
    "QtTaskRunner",
    "EventLoopThread",
    "StoreTaskWorker",
    "WorkerSignals",
]
