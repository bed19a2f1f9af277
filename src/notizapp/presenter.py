"""State of the "new note" entry form."""

from dataclasses import dataclass

from .core.errors import ValidationError
from .core.model import Note
from .core.store import NoteStore


@dataclass
class NoteForm:
    """
    Draft title/text plus the last validation message.

    A failed submit replaces the message and keeps the drafts; a successful
    one clears the drafts and the message.
    """

    store: NoteStore
    title: str = ""
    text: str = ""
    error_message: str = ""

    def submit(self) -> Note | None:
        try:
            note = self.store.create(self.title, self.text)
        except ValidationError as e:
            self.error_message = str(e)
            return None
        self.title = ""
        self.text = ""
        self.error_message = ""
        return note
