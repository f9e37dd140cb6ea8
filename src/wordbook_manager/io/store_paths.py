"""Collection and document paths used by the data-access layer."""

from wordbook_manager.io.document_store import Path


def wordbooks_path(user_id: str) -> Path:
    return ("users", user_id, "wordbooks")


def wordbook_path(user_id: str, wordbook_id: str) -> Path:
    return wordbooks_path(user_id) + (wordbook_id,)


def words_path(user_id: str, wordbook_id: str) -> Path:
    return wordbook_path(user_id, wordbook_id) + ("words",)


def word_path(user_id: str, wordbook_id: str, word_id: str) -> Path:
    return words_path(user_id, wordbook_id) + (word_id,)


def pos_tags_path(user_id: str) -> Path:
    return ("users", user_id, "posTags")


def pos_tag_path(user_id: str, tag_id: str) -> Path:
    return pos_tags_path(user_id) + (tag_id,)
