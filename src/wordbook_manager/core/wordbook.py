"""Wordbook entity - a named collection of words owned by a user."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Wordbook:
    """Represents a wordbook document stored under ``users/{uid}/wordbooks``.

    Attributes:
        id: Document identifier.
        name: Display name (renamable).
        user_id: Owning user identifier.
        created_at: Creation timestamp.
        trashed: Soft-delete flag.
        trashed_at: When the wordbook was moved to trash, if it was.
    """

    id: str
    name: str
    user_id: str
    created_at: Optional[datetime]
    trashed: bool = False
    trashed_at: Optional[datetime] = None

    def to_document(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "userId": self.user_id,
            "createdAt": self.created_at,
            "trashed": self.trashed,
            "trashedAt": self.trashed_at,
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "Wordbook":
        return cls(
            id=doc_id,
            name=data.get("name", ""),
            user_id=data.get("userId", ""),
            created_at=data.get("createdAt"),
            trashed=bool(data.get("trashed", False)),
            trashed_at=data.get("trashedAt"),
        )
