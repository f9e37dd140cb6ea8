"""Word entities - vocabulary entries with linguistic metadata and study progress."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class RelatedWords:
    """Optional synonym/antonym pair attached to a word."""

    same: Optional[str] = None
    opposite: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {}
        if self.same is not None:
            doc["same"] = self.same
        if self.opposite is not None:
            doc["opposite"] = self.opposite
        return doc

    @classmethod
    def from_document(cls, data: Optional[Dict[str, Any]]) -> Optional["RelatedWords"]:
        if not data:
            return None
        return cls(same=data.get("same"), opposite=data.get("opposite"))


# Attribute name -> stored field name. Stored names follow the web client
# so both clients can share one database.
WORD_FIELDS: Dict[str, str] = {
    "word": "word",
    "pinyin": "pinyin",
    "favorite": "favorite",
    "translation": "translation",
    "part_of_speech": "partOfSpeech",
    "example_sentence": "exampleSentence",
    "example_translation": "exampleTranslation",
    "related_words": "relatedWords",
    "usage_frequency": "usageFrequency",
    "mastery": "mastery",
    "note": "note",
    "wordbook_id": "wordbookId",
    "created_at": "createdAt",
    "review_date": "reviewDate",
    "study_count": "studyCount",
}

# Fields that identify where a word lives; partial updates may not touch them.
IMMUTABLE_WORD_FIELDS = frozenset({"id", "wordbook_id"})

# Progress fields cleared by a reset.
RESET_PROGRESS_CHANGES: Dict[str, Any] = {
    "mastery": 0,
    "study_count": 0,
    "review_date": None,
}


@dataclass(frozen=True)
class WordDraft:
    """Caller-supplied fields of a new word.

    Everything the store or the data-access layer assigns (id, wordbook id,
    creation timestamp, review date, study count) is left out.
    """

    word: str
    pinyin: str = ""
    favorite: bool = False
    translation: str = ""
    part_of_speech: List[str] = field(default_factory=list)
    example_sentence: str = ""
    example_translation: str = ""
    related_words: Optional[RelatedWords] = None
    usage_frequency: int = 0
    mastery: int = 0
    note: str = ""

    def to_document(self) -> Dict[str, Any]:
        doc = {
            "word": self.word,
            "pinyin": self.pinyin,
            "favorite": self.favorite,
            "translation": self.translation,
            "partOfSpeech": list(self.part_of_speech),
            "exampleSentence": self.example_sentence,
            "exampleTranslation": self.example_translation,
            "usageFrequency": self.usage_frequency,
            "mastery": self.mastery,
            "note": self.note,
        }
        if self.related_words is not None:
            doc["relatedWords"] = self.related_words.to_document()
        return doc


@dataclass(frozen=True)
class Word:
    """A stored vocabulary entry.

    ``wordbook_id`` always matches the wordbook whose ``words`` collection
    holds the document.
    """

    id: str
    word: str
    wordbook_id: str
    created_at: Optional[datetime]
    pinyin: str = ""
    favorite: bool = False
    translation: str = ""
    part_of_speech: List[str] = field(default_factory=list)
    example_sentence: str = ""
    example_translation: str = ""
    related_words: Optional[RelatedWords] = None
    usage_frequency: int = 0
    mastery: int = 0
    note: str = ""
    review_date: Optional[datetime] = None
    study_count: Optional[int] = None

    @classmethod
    def from_draft(
        cls,
        word_id: str,
        wordbook_id: str,
        draft: WordDraft,
        created_at: datetime,
    ) -> "Word":
        return cls(
            id=word_id,
            word=draft.word,
            wordbook_id=wordbook_id,
            created_at=created_at,
            pinyin=draft.pinyin,
            favorite=draft.favorite,
            translation=draft.translation,
            part_of_speech=list(draft.part_of_speech),
            example_sentence=draft.example_sentence,
            example_translation=draft.example_translation,
            related_words=draft.related_words,
            usage_frequency=draft.usage_frequency,
            mastery=draft.mastery,
            note=draft.note,
            review_date=None,
            study_count=0,
        )

    def to_document(self) -> Dict[str, Any]:
        doc = {
            "word": self.word,
            "pinyin": self.pinyin,
            "favorite": self.favorite,
            "translation": self.translation,
            "partOfSpeech": list(self.part_of_speech),
            "exampleSentence": self.example_sentence,
            "exampleTranslation": self.example_translation,
            "usageFrequency": self.usage_frequency,
            "mastery": self.mastery,
            "note": self.note,
            "wordbookId": self.wordbook_id,
            "createdAt": self.created_at,
            "reviewDate": self.review_date,
            "studyCount": self.study_count,
        }
        if self.related_words is not None:
            doc["relatedWords"] = self.related_words.to_document()
        return doc

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "Word":
        return cls(
            id=doc_id,
            word=data.get("word", ""),
            wordbook_id=data.get("wordbookId", ""),
            created_at=data.get("createdAt"),
            pinyin=data.get("pinyin") or "",
            favorite=bool(data.get("favorite", False)),
            translation=data.get("translation") or "",
            part_of_speech=list(data.get("partOfSpeech") or []),
            example_sentence=data.get("exampleSentence") or "",
            example_translation=data.get("exampleTranslation") or "",
            related_words=RelatedWords.from_document(data.get("relatedWords")),
            usage_frequency=data.get("usageFrequency") or 0,
            mastery=data.get("mastery") or 0,
            note=data.get("note") or "",
            review_date=data.get("reviewDate"),
            study_count=data.get("studyCount"),
        )


def word_changes_to_document(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Translate attribute-named partial changes into stored field names.

    Raises:
        ValueError: If a change names an unknown field or one that pins the
            word to its wordbook.
    """
    doc: Dict[str, Any] = {}
    for name, value in changes.items():
        if name in IMMUTABLE_WORD_FIELDS:
            raise ValueError(f"Word field cannot be changed: {name}")
        if name not in WORD_FIELDS:
            raise ValueError(f"Unknown word field: {name}")
        if name == "related_words" and isinstance(value, RelatedWords):
            value = value.to_document()
        elif name == "part_of_speech":
            value = list(value)
        doc[WORD_FIELDS[name]] = value
    return doc
