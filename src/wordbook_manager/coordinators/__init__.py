"""Coordinators - Orchestration layer connecting UI with the data-access services."""

from .word_list_coordinator import WordListCoordinator, sort_newest_first
from .wordbook_coordinator import WordbookCoordinator

__all__ = [
    "WordbookCoordinator",
    "WordListCoordinator",
    "sort_newest_first",
]
