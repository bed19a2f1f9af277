from __future__ import annotations
from dataclasses import dataclass

NoteId = str

ACTIVE = "notes"
TRASH = "trashcan"


@dataclass(frozen=True)
class Note:
    id: NoteId  # canonical UUID string
    title: str
    text: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "title": self.title, "text": self.text}
