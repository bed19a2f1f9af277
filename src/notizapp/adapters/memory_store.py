from ..core.ports import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Process-local store; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._d = dict(initial or {})

    def read_raw(self, key: str) -> str | None:
        return self._d.get(key)

    def write_raw(self, key: str, contents: str) -> None:
        self._d[key] = contents
