"""Whole-collection persistence of notes into a key-value store."""

import logging
import sqlite3
from collections.abc import Sequence

from .errors import CorruptDataError, EncodeError, WriteError
from .model import Note
from .ports import CollectionCodec, KeyValueStore

logger = logging.getLogger(__name__)

ON_CORRUPT_CHOICES = ("discard", "raise")


class PersistenceAdapter:
    """
    Stateless conduit between a NoteStore and a KeyValueStore.

    Every save overwrites the full collection under its key. A missing key
    loads as an empty collection. A key whose value cannot be decoded is
    either discarded with a warning (``on_corrupt="discard"``) or reported as
    CorruptDataError (``on_corrupt="raise"``).
    """

    def __init__(
        self,
        storage: KeyValueStore,
        codec: CollectionCodec,
        on_corrupt: str = "discard",
    ):
        if on_corrupt not in ON_CORRUPT_CHOICES:
            raise ValueError(f"on_corrupt must be one of {ON_CORRUPT_CHOICES}, got {on_corrupt!r}")
        self.storage = storage
        self.codec = codec
        self.on_corrupt = on_corrupt

    def save(self, collection: str, notes: Sequence[Note]) -> None:
        try:
            contents = self.codec.encode(notes)
        except (TypeError, ValueError) as e:
            raise EncodeError(f"Could not encode {collection!r}: {e}") from e
        try:
            self.storage.write_raw(collection, contents)
        except (OSError, sqlite3.Error) as e:
            raise WriteError(f"Could not write {collection!r}: {e}") from e
        logger.debug("saved %d notes to %r", len(notes), collection)

    def load(self, collection: str) -> list[Note]:
        try:
            raw = self.storage.read_raw(collection)
            if raw is None:
                logger.debug("no stored value for %r, starting empty", collection)
                return []
            return self.codec.decode(raw)
        except ValueError as e:
            # UnicodeDecodeError lands here too
            if self.on_corrupt == "raise":
                raise CorruptDataError(collection, str(e)) from e
            logger.warning("discarding unreadable collection %r: %s", collection, e)
            return []
