"""Unit tests for domain entities and their stored representation."""

from datetime import datetime, timezone

import pytest

from wordbook_manager.core import (
    PartOfSpeechTag,
    RelatedWords,
    Word,
    WordDraft,
    Wordbook,
    word_changes_to_document,
)

CREATED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_word_from_document_fills_defaults_for_missing_fields():
    """Schemaless documents may lack fields; they decode to defaults."""
    word = Word.from_document("w1", {"word": "你好", "wordbookId": "wb1"})

    assert word.id == "w1"
    assert word.word == "你好"
    assert word.wordbook_id == "wb1"
    assert word.pinyin == ""
    assert word.part_of_speech == []
    assert word.related_words is None
    assert word.mastery == 0
    assert word.review_date is None
    assert word.study_count is None


def test_word_from_draft_zeroes_progress():
    draft = WordDraft(word="猫", pinyin="māo", mastery=40, part_of_speech=["noun"])

    word = Word.from_draft("w1", "wb1", draft, CREATED)

    assert word.created_at == CREATED
    assert word.wordbook_id == "wb1"
    assert word.study_count == 0
    assert word.review_date is None
    assert word.mastery == 40
    assert word.part_of_speech == ["noun"]


def test_draft_document_uses_stored_field_names():
    draft = WordDraft(
        word="大",
        example_sentence="很大",
        related_words=RelatedWords(opposite="小"),
    )

    doc = draft.to_document()

    assert doc["word"] == "大"
    assert doc["exampleSentence"] == "很大"
    assert doc["relatedWords"] == {"opposite": "小"}
    assert "wordbookId" not in doc
    assert "createdAt" not in doc


def test_word_document_roundtrip_keeps_related_words():
    word = Word.from_draft(
        "w1", "wb1", WordDraft(word="快", related_words=RelatedWords(same="迅速", opposite="慢")), CREATED
    )

    restored = Word.from_document("w1", word.to_document())

    assert restored == word


def test_word_changes_map_to_stored_names():
    doc = word_changes_to_document(
        {"example_translation": "It is big", "study_count": 3, "related_words": RelatedWords(same="巨")}
    )

    assert doc == {
        "exampleTranslation": "It is big",
        "studyCount": 3,
        "relatedWords": {"same": "巨"},
    }


@pytest.mark.parametrize("field_name", ["wordbook_id", "id"])
def test_word_changes_reject_fields_that_pin_the_word(field_name):
    with pytest.raises(ValueError, match="cannot be changed"):
        word_changes_to_document({field_name: "other"})


def test_word_changes_reject_unknown_fields():
    with pytest.raises(ValueError, match="Unknown word field"):
        word_changes_to_document({"colour": "red"})


def test_wordbook_from_document_defaults_to_not_trashed():
    wordbook = Wordbook.from_document("wb1", {"name": "HSK 1", "userId": "u1", "createdAt": CREATED})

    assert wordbook.trashed is False
    assert wordbook.trashed_at is None
    assert wordbook.to_document()["trashed"] is False


def test_tag_document_includes_owner():
    tag = PartOfSpeechTag(id="t1", name="noun", color="#ff0000", user_id="u1")

    assert tag.to_document() == {"name": "noun", "color": "#ff0000", "userId": "u1"}
    assert PartOfSpeechTag.from_document("t1", tag.to_document()) == tag
