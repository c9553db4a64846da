"""
Question records and the operations applied to the board document.

Every operation is a full read-modify-write of the document: read it from the
store, change it in memory, write the whole thing back.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Protocol

from askboard.errors import NotFound, UnknownAction, ValidationError

logger = logging.getLogger(__name__)

UPVOTE = "upvote"

# hide/unhide plus the older client vocabulary, which must keep working.
VISIBILITY_ACTIONS = {
    "hide": True,
    "mute": True,
    "blind": True,
    "unhide": False,
    "unmute": False,
    "unblind": False,
}


class DocumentStore(Protocol):
    def read(self) -> list:
        ...

    def write(self, document: list) -> None:
        ...


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Record:
    id: str
    text: str
    created_at: str
    votes: int = 0
    hidden: bool = False

    @classmethod
    def new(cls, text: str) -> "Record":
        return cls(id=str(uuid.uuid4()), text=text, created_at=_utc_timestamp())

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "createdAt": self.created_at,
            "votes": self.votes,
            "hidden": self.hidden,
        }


def _find(document: list, record_id: str) -> Optional[dict]:
    for row in document:
        if isinstance(row, dict) and row.get("id") == record_id:
            return row
    return None


def apply_action(row: dict, action: str) -> dict:
    """Apply a mutation action to a stored row in place and return it."""
    if action == UPVOTE:
        row["votes"] = int(row.get("votes") or 0) + 1
    elif action in VISIBILITY_ACTIONS:
        row["hidden"] = VISIBILITY_ACTIONS[action]
    else:
        raise UnknownAction()
    return row


class QuestionBoard:
    """Record operations over a document store."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def list(self) -> list:
        return self.store.read()

    def create(self, text: Optional[str]) -> dict:
        text = (text or "").strip()
        if not text:
            raise ValidationError("text_required")

        document = self.store.read()
        record = Record.new(text).as_dict()
        document.insert(0, record)
        self.store.write(document)
        logger.info("Created question %s", record["id"])
        return record

    def mutate(self, record_id: Optional[str], action: Optional[str]) -> dict:
        if not record_id or not action:
            raise ValidationError("id_action_required")

        document = self.store.read()
        row = _find(document, record_id)
        if row is None:
            raise NotFound()

        apply_action(row, action)
        self.store.write(document)
        return row

    def delete(self, record_id: Optional[str]) -> None:
        """Remove the matching record; an unknown or missing id removes nothing."""
        document = self.store.read()
        if record_id:
            document = [
                row
                for row in document
                if not (isinstance(row, dict) and row.get("id") == record_id)
            ]
        self.store.write(document)

    def delete_all(self) -> None:
        self.store.read()
        self.store.write([])
