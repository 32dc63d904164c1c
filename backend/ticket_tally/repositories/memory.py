"""In-process repository."""
import json
from typing import Any, Dict, Optional
from ticket_tally.repositories import Repository


class InMemoryRepository(Repository):
    """Keeps each collection as a serialized JSON string.

    Payloads go through ``json`` on every write so reads return fresh
    copies, just as a real store would.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, payload in (initial or {}).items():
            self._data[key] = json.dumps(payload)

    async def read(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def write(self, key: str, payload: Any) -> None:
        self._data[key] = json.dumps(payload)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)
