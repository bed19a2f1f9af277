import io
import uuid
from typing import Any, Sequence

import yaml

from ..core.model import Note
from ..core.ports import CollectionCodec

_FIELDS = ("id", "title", "text")


def canonical_id(value: Any) -> str:
    """Return the canonical (lowercase, hyphenated) form of a UUID string."""
    if not isinstance(value, str):
        raise ValueError(f"id must be a string, got {type(value).__name__}")
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise ValueError(f"id {value!r} is not a UUID") from None


class YamlCollectionCodec(CollectionCodec):
    """
    A collection is a YAML sequence of ``{id, title, text}`` mappings:

        - id: 0b6f6c1e-2f0e-4d8a-9a8c-0c7d3c1e8b55
          title: Groceries
          text: Milk, eggs

    JSON arrays of the same objects decode as well. Non-ASCII text is written
    as escapes; the reader folds raw NEL and friends into line breaks.
    """

    def encode(self, notes: Sequence[Note]) -> str:
        buf = io.StringIO()
        try:
            yaml.safe_dump(
                [n.to_dict() for n in notes], buf, sort_keys=False, allow_unicode=False
            )
        except yaml.YAMLError as e:
            raise ValueError(str(e)) from e
        return buf.getvalue()

    def decode(self, text: str) -> list[Note]:
        try:
            data = yaml.safe_load(io.StringIO(text))
        except yaml.YAMLError as e:
            raise ValueError(f"not valid YAML: {e}") from e
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f"expected a sequence of notes, got {type(data).__name__}")
        notes = [self._note(i, item) for i, item in enumerate(data)]
        seen: set[str] = set()
        for note in notes:
            if note.id in seen:
                raise ValueError(f"duplicate id {note.id}")
            seen.add(note.id)
        return notes

    def _note(self, index: int, item: Any) -> Note:
        if not isinstance(item, dict):
            raise ValueError(f"entry {index} is not a mapping")
        missing = [f for f in _FIELDS if f not in item]
        if missing:
            raise ValueError(f"entry {index} lacks {', '.join(missing)}")
        for f in ("title", "text"):
            if not isinstance(item[f], str):
                raise ValueError(f"entry {index}: {f} must be a string")
        return Note(id=canonical_id(item["id"]), title=item["title"], text=item["text"])
