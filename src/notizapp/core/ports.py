from typing import Protocol, Sequence
from .model import NoteId, Note


class KeyValueStore(Protocol):
    """
    Flat string store: one value per key, whole-value overwrite.
    """

    def read_raw(self, key: str) -> str | None:
        pass

    def write_raw(self, key: str, contents: str) -> None:
        pass




class CollectionCodec(Protocol):
    """
    Round-trip an ordered sequence of notes through structured text.
    decode() raises ValueError on anything it cannot turn back into notes.
    """

    def encode(self, notes: Sequence[Note]) -> str:
        pass

    def decode(self, text: str) -> list[Note]:
        pass


class IdGenerator(Protocol):
    def new_id(self) -> NoteId:
        pass
