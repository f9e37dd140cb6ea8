"""Deletion Journal - records progress of multi-step deletes so they can resume.

Deleting a wordbook (children first, then the wordbook document) and
deleting a part-of-speech tag (scrub references, then the tag document)
are not atomic at the store. Each run is tracked as a DeletionProgress;
a failure leaves it in FAILED with the ids already handled, and a resume
skips those ids.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)


class DeletionKind(str, Enum):
    WORDBOOK = "wordbook"
    POS_TAG = "pos_tag"


class DeletionStage(str, Enum):
    PENDING = "pending"
    CHILDREN_DONE = "children_done"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class DeletionProgress:
    """Recorded state of one multi-step delete.

    Attributes:
        kind: What is being deleted.
        user_id: Owner of the target.
        target_id: Wordbook id or tag id.
        stage: Current stage.
        processed_ids: Child words already deleted (wordbook) or already
            scrubbed of the tag (pos_tag), as ``wordbook_id/word_id``.
        children_finished: Whether every child step has succeeded.
        error: Message of the last failure, if any.
    """

    kind: DeletionKind
    user_id: str
    target_id: str
    stage: DeletionStage = DeletionStage.PENDING
    processed_ids: Set[str] = field(default_factory=set)
    children_finished: bool = False
    error: Optional[str] = None


class DeletionJournal:
    """Process-local record of multi-step deletes, keyed by (kind, user, target).

    Only unfinished deletes are held: an entry is dropped once its delete
    completes.
    """

    def __init__(self) -> None:
        self._entries: Dict[Tuple[DeletionKind, str, str], DeletionProgress] = {}

    def begin(self, kind: DeletionKind, user_id: str, target_id: str) -> DeletionProgress:
        """Start tracking a delete, or pick up an unfinished one for the same target."""
        key = (kind, user_id, target_id)
        progress = self._entries.get(key)
        if progress is None:
            progress = DeletionProgress(kind=kind, user_id=user_id, target_id=target_id)
            self._entries[key] = progress
        else:
            progress.stage = (
                DeletionStage.CHILDREN_DONE if progress.children_finished else DeletionStage.PENDING
            )
            progress.error = None
        return progress

    def mark_processed(self, progress: DeletionProgress, child_id: str) -> None:
        progress.processed_ids.add(child_id)

    def mark_children_done(self, progress: DeletionProgress) -> None:
        progress.children_finished = True
        progress.stage = DeletionStage.CHILDREN_DONE

    def mark_completed(self, progress: DeletionProgress) -> None:
        progress.stage = DeletionStage.COMPLETED
        progress.error = None
        self._entries.pop((progress.kind, progress.user_id, progress.target_id), None)
        logger.info(
            "Deleted %s %s for user %s", progress.kind.value, progress.target_id, progress.user_id
        )

    def mark_failed(self, progress: DeletionProgress, error: BaseException) -> None:
        progress.stage = DeletionStage.FAILED
        progress.error = str(error) or type(error).__name__
        logger.warning(
            "Deleting %s %s failed after %d child steps: %s",
            progress.kind.value,
            progress.target_id,
            len(progress.processed_ids),
            progress.error,
        )

    def get(self, kind: DeletionKind, user_id: str, target_id: str) -> Optional[DeletionProgress]:
        return self._entries.get((kind, user_id, target_id))

    def failed_deletions(
        self, user_id: str, kind: Optional[DeletionKind] = None
    ) -> List[DeletionProgress]:
        """Unfinished deletes of a user that stopped on an error."""
        return [
            p
            for p in self._entries.values()
            if p.user_id == user_id
            and p.stage == DeletionStage.FAILED
            and (kind is None or p.kind == kind)
        ]
