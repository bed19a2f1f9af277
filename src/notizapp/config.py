"""Configuration loader for notiz.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .core.persistence import ON_CORRUPT_CHOICES

BACKENDS = ("fs", "sqlite", "memory")


@dataclass
class StoreConfig:
    """Where and how the collections are kept."""
    backend: str
    root: Path
    db: Path


@dataclass
class LoadConfig:
    """What to do with stored data that cannot be read back."""
    on_corrupt: str = "discard"


@dataclass
class NotizConfig:
    """Complete notizapp configuration."""
    store: StoreConfig
    load: LoadConfig


def load_config(config_path: Path | None = None, data_path: Path | None = None) -> NotizConfig:
    """
    Load configuration from notiz.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/notiz.toml
    3. data_path/notiz.toml

    Args:
        config_path: Explicit path to config file
        data_path: Data directory for fallback search

    Returns:
        NotizConfig with resolved settings

    Raises:
        ValueError: on an unknown backend or on_corrupt policy
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / "notiz.toml")
    if data_path:
        search_paths.append(data_path / "notiz.toml")

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    store_data = toml_data.get("store", {})
    backend = store_data.get("backend", "fs")
    if backend not in BACKENDS:
        raise ValueError(f"Unknown store backend {backend!r} (expected one of {', '.join(BACKENDS)})")
    root = Path(store_data.get("root", data_path or Path("./notiz-data")))
    db = Path(store_data.get("db", root / "notiz.sqlite"))

    load_data = toml_data.get("load", {})
    on_corrupt = load_data.get("on_corrupt", "discard")
    if on_corrupt not in ON_CORRUPT_CHOICES:
        raise ValueError(f"Unknown on_corrupt policy {on_corrupt!r}")

    return NotizConfig(
        store=StoreConfig(backend=backend, root=root, db=db),
        load=LoadConfig(on_corrupt=on_corrupt),
    )
