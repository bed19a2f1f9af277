"""Exception hierarchy for notizapp."""

from .model import NoteId


class NotizError(Exception):
    """Base class for all notizapp errors."""


class ValidationError(NotizError):
    """Rejected input at the note creation boundary."""

    message = "Invalid note"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class EmptyTitleError(ValidationError):
    message = "Title is missing"


class EmptyTextError(ValidationError):
    message = "Text is missing"


class NotFoundError(NotizError):
    def __init__(self, collection: str, id: NoteId):
        self.collection = collection
        self.id = id
        super().__init__(f"Note {id} not found in {collection}")


class PersistError(NotizError):
    """Reading or writing a collection failed."""


class EncodeError(PersistError):
    pass


class WriteError(PersistError):
    pass


class CorruptDataError(PersistError):
    def __init__(self, collection: str, reason: str):
        self.collection = collection
        self.reason = reason
        super().__init__(f"Stored collection {collection!r} is unreadable: {reason}")
