"""Word Importer - parses CSV word lists into drafts for bulk import."""

import csv
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

from wordbook_manager.core import RelatedWords, WordDraft

logger = logging.getLogger(__name__)

# Normalized header -> WordDraft attribute.
_COLUMNS = {
    "word": "word",
    "pinyin": "pinyin",
    "translation": "translation",
    "partofspeech": "part_of_speech",
    "examplesentence": "example_sentence",
    "exampletranslation": "example_translation",
    "note": "note",
    "mastery": "mastery",
    "usagefrequency": "usage_frequency",
    "favorite": "favorite",
    "same": "same",
    "opposite": "opposite",
}

_TRUE_VALUES = {"1", "true", "yes", "y", "x", "★"}

MASTERY_RANGE = (0, 100)


def _normalize_header(header: str) -> str:
    return re.sub(r"[\s_\-]", "", header or "").lower()


def _split_tags(cell: str) -> List[str]:
    return [part.strip() for part in re.split(r"[;,]", cell or "") if part.strip()]


def _to_int(cell: str, column: str, line: int) -> int:
    cell = (cell or "").strip()
    if not cell:
        return 0
    try:
        return int(float(cell))
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Line {line}: invalid {column} value {cell!r}") from e


class WordImporter:
    """Data Factory turning a CSV file with a header row into WordDrafts.

    Headers are matched case-insensitively and accept camelCase or
    snake_case spellings. Rows whose word cell is blank are skipped.
    """

    def read_csv(self, csv_path: Path) -> List[WordDraft]:
        """
        Parse a UTF-8 CSV file.

        Args:
            csv_path: File to read. A BOM is tolerated.

        Returns:
            Drafts in file order.

        Raises:
            ValueError: If there is no ``word`` column, a numeric cell is invalid
                or a mastery lies outside 0-100.
            OSError: If the file cannot be read.
        """
        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            columns = self._map_columns(reader.fieldnames or [])
            if "word" not in columns.values():
                raise ValueError(f"No 'word' column in {csv_path}")

            drafts = []
            for row in reader:
                draft = self._parse_row(row, columns, reader.line_num)
                if draft is not None:
                    drafts.append(draft)

        logger.info("Read %d words from %s", len(drafts), csv_path)
        return drafts

    @staticmethod
    def _map_columns(fieldnames: List[str]) -> Dict[str, str]:
        columns = {}
        for name in fieldnames:
            attribute = _COLUMNS.get(_normalize_header(name))
            if attribute:
                columns[name] = attribute
        return columns

    @staticmethod
    def _parse_row(
        row: Dict[str, str], columns: Dict[str, str], line: int
    ) -> Optional[WordDraft]:
        values = {attr: (row.get(header) or "").strip() for header, attr in columns.items()}
        word = values.get("word", "")
        if not word:
            return None

        mastery = _to_int(values.get("mastery", ""), "mastery", line)
        low, high = MASTERY_RANGE
        if not low <= mastery <= high:
            raise ValueError(
                f"Line {line}: mastery must be between {low} and {high}, got {mastery}"
            )

        related: Optional[RelatedWords] = None
        if values.get("same") or values.get("opposite"):
            related = RelatedWords(
                same=values.get("same") or None,
                opposite=values.get("opposite") or None,
            )

        return WordDraft(
            word=word,
            pinyin=values.get("pinyin", ""),
            translation=values.get("translation", ""),
            part_of_speech=_split_tags(values.get("part_of_speech", "")),
            example_sentence=values.get("example_sentence", ""),
            example_translation=values.get("example_translation", ""),
            note=values.get("note", ""),
            mastery=mastery,
            usage_frequency=_to_int(values.get("usage_frequency", ""), "usageFrequency", line),
            favorite=values.get("favorite", "").lower() in _TRUE_VALUES,
            related_words=related,
        )
