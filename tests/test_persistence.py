"""Tests for PersistenceAdapter and the YAML collection codec."""

import logging

import pytest

from notizapp.adapters.fs_storage import FsStorage
from notizapp.adapters.memory_store import InMemoryStore
from notizapp.adapters.yaml_codec import YamlCollectionCodec, canonical_id
from notizapp.core.errors import CorruptDataError, EncodeError, PersistError
from notizapp.core.model import Note
from notizapp.core.persistence import PersistenceAdapter

NOTES = [
    Note(id="0b6f6c1e-2f0e-4d8a-9a8c-0c7d3c1e8b55", title="Groceries", text="Milk, eggs"),
    Note(id="7d1f3a52-9e44-4c3b-8f0a-5b2f6e9d1c07", title="yes", text="123"),
    Note(id="c3a9e6b0-1d2f-4e8a-b7c5-6f4e3d2c1b0a", title="Ümlaut: ok", text="line one\nline two\n"),
]


@pytest.fixture
def kv():
    return InMemoryStore()


@pytest.fixture
def adapter(kv):
    return PersistenceAdapter(kv, YamlCollectionCodec())


def test_round_trip_preserves_values_and_order(adapter):
    adapter.save("notes", NOTES)
    assert adapter.load("notes") == NOTES


def test_round_trip_empty(adapter):
    adapter.save("trashcan", [])
    assert adapter.load("trashcan") == []


def test_save_overwrites(adapter):
    adapter.save("notes", NOTES)
    adapter.save("notes", NOTES[:1])
    assert adapter.load("notes") == NOTES[:1]


def test_collections_are_independent(adapter):
    adapter.save("notes", NOTES[:1])
    adapter.save("trashcan", NOTES[1:])
    assert adapter.load("notes") == NOTES[:1]
    assert adapter.load("trashcan") == NOTES[1:]


def test_missing_key_loads_empty(adapter, caplog):
    """First run: nothing stored yet is not an error."""
    with caplog.at_level(logging.WARNING):
        assert adapter.load("notes") == []
    assert caplog.records == []


def test_stored_format_is_yaml_mappings(adapter, kv):
    adapter.save("notes", NOTES[:1])
    assert kv.read_raw("notes") == (
        "- id: 0b6f6c1e-2f0e-4d8a-9a8c-0c7d3c1e8b55\n"
        "  title: Groceries\n"
        "  text: Milk, eggs\n"
    )


@pytest.mark.parametrize(
    "raw",
    [
        "- id: [unclosed\n",
        "just a string\n",
        "{id: 1}\n",
        "- 42\n",
        "- id: 0b6f6c1e-2f0e-4d8a-9a8c-0c7d3c1e8b55\n  title: t\n",
        "- id: not-a-uuid\n  title: t\n  text: x\n",
        "- id: 0b6f6c1e-2f0e-4d8a-9a8c-0c7d3c1e8b55\n  title: 5\n  text: x\n",
    ],
)
def test_corrupt_data_discarded_with_warning(kv, raw, caplog):
    kv.write_raw("notes", raw)
    adapter = PersistenceAdapter(kv, YamlCollectionCodec())
    with caplog.at_level(logging.WARNING, logger="notizapp.core.persistence"):
        assert adapter.load("notes") == []
    assert "discarding unreadable collection 'notes'" in caplog.text


def test_corrupt_data_raises_when_configured(kv):
    kv.write_raw("trashcan", "- id: [unclosed\n")
    adapter = PersistenceAdapter(kv, YamlCollectionCodec(), on_corrupt="raise")
    with pytest.raises(CorruptDataError) as exc:
        adapter.load("trashcan")
    assert exc.value.collection == "trashcan"
    assert isinstance(exc.value, PersistError)


def test_unknown_policy_rejected(kv):
    with pytest.raises(ValueError):
        PersistenceAdapter(kv, YamlCollectionCodec(), on_corrupt="ignore")


def test_encode_failure(adapter, kv):
    bad = Note(id=NOTES[0].id, title=object(), text="x")  # type: ignore[arg-type]
    with pytest.raises(EncodeError):
        adapter.save("notes", [bad])
    assert kv.read_raw("notes") is None


def test_decode_json_array():
    """Collections written as JSON arrays still load; ids are canonicalized."""
    raw = '[{"id":"E621E1F8-C36C-495A-93FC-0C247A3E6E5F","title":"Hallo","text":"Welt"}]'
    notes = YamlCollectionCodec().decode(raw)
    assert notes == [Note(id="e621e1f8-c36c-495a-93fc-0c247a3e6e5f", title="Hallo", text="Welt")]


def test_decode_empty_document():
    assert YamlCollectionCodec().decode("") == []


def test_canonical_id():
    assert canonical_id("E621E1F8-C36C-495A-93FC-0C247A3E6E5F") == "e621e1f8-c36c-495a-93fc-0c247a3e6e5f"
    with pytest.raises(ValueError):
        canonical_id(12)
    with pytest.raises(ValueError):
        canonical_id("xyz")


@pytest.mark.parametrize(
    "text",
    [
        "a\x85b",
        "x\x85",
        "a\x85\nb",
        "a\u2028b\u2029c",
        "\ufeffbom",
        "cr\r\nlf",
        "nul\x00byte",
        "tab\tand\x1bescape",
        "\x7f\x9f",
        "  leading and trailing  ",
        "Grüße ✓ 日本",
    ],
)
def test_round_trip_line_breaks_and_control_characters(adapter, text):
    """Titles and texts come back exactly as saved, whatever they contain."""
    note = Note(id=NOTES[0].id, title=text, text=text)
    adapter.save("notes", [note])
    assert adapter.load("notes") == [note]


def test_stored_text_is_ascii(adapter, kv):
    adapter.save("notes", [Note(id=NOTES[0].id, title="Grüße", text="a\x85b")])
    assert kv.read_raw("notes").isascii()


def test_non_utf8_file_discarded(tmp_path, caplog):
    """A collection file with undecodable bytes loads as empty."""
    (tmp_path / "notes.yaml").write_bytes(b"- id: \xff\xfe\n")
    adapter = PersistenceAdapter(FsStorage(tmp_path), YamlCollectionCodec())
    with caplog.at_level(logging.WARNING, logger="notizapp.core.persistence"):
        assert adapter.load("notes") == []
    assert "discarding unreadable collection 'notes'" in caplog.text


def test_non_utf8_file_raises_when_configured(tmp_path):
    (tmp_path / "trashcan.yaml").write_bytes(b"- id: \xff\xfe\n")
    adapter = PersistenceAdapter(FsStorage(tmp_path), YamlCollectionCodec(), on_corrupt="raise")
    with pytest.raises(CorruptDataError) as exc:
        adapter.load("trashcan")
    assert exc.value.collection == "trashcan"


def test_duplicate_ids_rejected(kv):
    note = NOTES[0]
    kv.write_raw("notes", YamlCollectionCodec().encode([note, note]))
    assert PersistenceAdapter(kv, YamlCollectionCodec()).load("notes") == []
    with pytest.raises(CorruptDataError, match="duplicate id"):
        PersistenceAdapter(kv, YamlCollectionCodec(), on_corrupt="raise").load("notes")
