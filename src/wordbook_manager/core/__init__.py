"""Domain layer - entities for wordbooks, words and part-of-speech tags."""

from .part_of_speech_tag import TAG_UPDATABLE_FIELDS, PartOfSpeechTag
from .word import (
    RESET_PROGRESS_CHANGES,
    RelatedWords,
    Word,
    WordDraft,
    word_changes_to_document,
)
from .wordbook import Wordbook

__all__ = [
    "Wordbook",
    "Word",
    "WordDraft",
    "RelatedWords",
    "PartOfSpeechTag",
    "RESET_PROGRESS_CHANGES",
    "TAG_UPDATABLE_FIELDS",
    "word_changes_to_document",
]
