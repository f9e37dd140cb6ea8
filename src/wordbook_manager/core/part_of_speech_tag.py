"""Part-of-speech tag entity - a user-defined label referenced by words."""

from dataclasses import dataclass
from typing import Any, Dict

# Attribute name -> stored field name for fields a caller may change.
TAG_UPDATABLE_FIELDS: Dict[str, str] = {
    "name": "name",
    "color": "color",
}


@dataclass(frozen=True)
class PartOfSpeechTag:
    id: str
    name: str
    color: str
    user_id: str

    def to_document(self) -> Dict[str, Any]:
        return {"name": self.name, "color": self.color, "userId": self.user_id}

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "PartOfSpeechTag":
        return cls(
            id=doc_id,
            name=data.get("name", ""),
            color=data.get("color", ""),
            user_id=data.get("userId", ""),
        )
