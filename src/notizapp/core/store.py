import logging
from collections.abc import Callable

from .errors import EmptyTextError, EmptyTitleError, NotFoundError, PersistError
from .model import ACTIVE, TRASH, Note, NoteId
from .persistence import PersistenceAdapter
from .ports import IdGenerator

logger = logging.getLogger(__name__)

Listener = Callable[["NoteStore"], None]


def _remove(notes: list[Note], id: NoteId) -> Note | None:
    """Remove the first note with ``id``, keeping the order of the rest."""
    for i, note in enumerate(notes):
        if note.id == id:
            return notes.pop(i)
    return None


class NoteStore:
    """
    Owner of the active and trashed note collections.

    Lifecycle: create -> active -> delete -> trash -> restore (back to active)
    or purge (gone). Every mutation writes the affected collection(s) through
    the persistence adapter before returning.
    """

    def __init__(self, persistence: PersistenceAdapter, idgen: IdGenerator):
        self.persistence = persistence
        self.idgen = idgen
        self._active: list[Note] = []
        self._trashed: list[Note] = []
        self._listeners: list[Listener] = []

    def load(self) -> None:
        self._active = self.persistence.load(ACTIVE)
        self._trashed = self.persistence.load(TRASH)
        logger.debug(
            "loaded %d active and %d trashed notes", len(self._active), len(self._trashed)
        )

    # Queries
    def list_active(self) -> tuple[Note, ...]:
        return tuple(self._active)

    def list_trashed(self) -> tuple[Note, ...]:
        return tuple(self._trashed)

    def get(self, id: NoteId) -> Note | None:
        for note in self._active + self._trashed:
            if note.id == id:
                return note
        return None

    # Mutations
    def create(self, title: str, text: str) -> Note:
        if title == "":
            raise EmptyTitleError()
        if text == "":
            raise EmptyTextError()
        note = Note(id=self.idgen.new_id(), title=title, text=text)
        self._active.append(note)
        self._persist(ACTIVE)
        return note

    def delete(self, id: NoteId) -> Note:
        note = _remove(self._active, id)
        if note is None:
            raise NotFoundError(ACTIVE, id)
        self._trashed.append(note)
        self._persist(TRASH, ACTIVE)
        return note

    def restore(self, id: NoteId) -> Note:
        note = _remove(self._trashed, id)
        if note is None:
            raise NotFoundError(TRASH, id)
        self._active.append(note)
        self._persist(ACTIVE, TRASH)
        return note

    def purge(self, id: NoteId) -> Note | None:
        note = _remove(self._trashed, id)
        if note is None:
            logger.debug("purge of %s: not in trash, nothing to do", id)
            return None
        self._persist(TRASH)
        return note

    # Subscriptions
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(store)`` after every successful mutation."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _persist(self, *collections: str) -> None:
        """Save ``collections`` in order; moves list the destination first."""
        try:
            for name in collections:
                notes = self._active if name == ACTIVE else self._trashed
                self.persistence.save(name, notes)
        except PersistError:
            logger.error("persisting %s failed; in-memory state kept", ", ".join(collections))
            raise
        for listener in list(self._listeners):
            listener(self)
