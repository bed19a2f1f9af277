"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.fs_storage import FsStorage
from .adapters.idgen import UuidId
from .adapters.memory_store import InMemoryStore
from .adapters.sqlite_store import SQLiteStore
from .adapters.yaml_codec import YamlCollectionCodec
from .config import NotizConfig, load_config
from .core.persistence import PersistenceAdapter
from .core.ports import KeyValueStore
from .core.store import NoteStore


@dataclass
class Runtime:
    """Container for all wired components."""
    store: NoteStore
    persistence: PersistenceAdapter
    config: NotizConfig


def build_storage(config: NotizConfig) -> KeyValueStore:
    backend = config.store.backend
    if backend == "sqlite":
        return SQLiteStore(db_path=config.store.db)
    if backend == "memory":
        return InMemoryStore()
    return FsStorage(config.store.root)


def build_runtime(
    data_path: Path | None = None,
    config_path: Path | None = None,
    backend: str | None = None,
) -> Runtime:
    """Build, wire and hydrate all components for a data directory."""
    config = load_config(config_path=config_path, data_path=data_path)

    # CLI args win over config values
    if data_path is not None:
        config.store.root = data_path
        config.store.db = data_path / "notiz.sqlite"
    if backend is not None:
        config.store.backend = backend

    persistence = PersistenceAdapter(
        build_storage(config),
        YamlCollectionCodec(),
        on_corrupt=config.load.on_corrupt,
    )
    store = NoteStore(persistence, UuidId())
    store.load()

    return Runtime(store=store, persistence=persistence, config=config)
