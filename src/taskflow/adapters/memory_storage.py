"""In-memory key-value storage adapter."""


class MemoryKeyValueStorage:
    """
    Dict-backed storage.

    Implements KeyValueStorage protocol. Nothing survives the process; used
    for tests and throwaway sessions.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
