from pathlib import Path
from ..core.ports import KeyValueStore


class FsStorage(KeyValueStore):
    def __init__(self, root: Path, suffix: str = ".yaml"):
        self.root = root
        self.suffix = suffix

    def _path(self, key: str) -> Path:
        return self.root / f"{key}{self.suffix}"

    def read_raw(self, key: str) -> str | None:
        p = self._path(key)
        return p.read_text(encoding="utf-8") if p.exists() else None

    def write_raw(self, key: str, contents: str) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        # readers never see a half-written collection
        tmp = self.root / f"{key}{self.suffix}.tmp"
        tmp.write_text(contents, encoding="utf-8")
        tmp.replace(self._path(key))
