"""Time-bounded cache with an injected clock."""
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional

from shiftgen.utils.logging_setup import get_logger

logger = get_logger("shiftgen.data.cache")

Clock = Callable[[], float]


@dataclass
class _Entry:
    value: Any
    stored_at: float


class TTLCache:
    """
    Cache of fetched lists, owned by whoever composes the data layer.

    Entries older than ``ttl_seconds`` (per ``clock``) are treated as
    missing. Writers call :meth:`invalidate` after mutating the source.
    """

    def __init__(self, ttl_seconds: float = 300.0, clock: Optional[Clock] = None):
        self.ttl_seconds = ttl_seconds
        self.clock = clock or time.monotonic
        self._entries: Dict[Hashable, _Entry] = {}

    def get(self, key: Hashable) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() - entry.stored_at > self.ttl_seconds:
            logger.debug("Cache expired: %s", key)
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: Hashable, value: Any) -> None:
        self._entries[key] = _Entry(value=value, stored_at=self.clock())

    def get_or_load(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        value = self.get(key)
        if value is None:
            logger.debug("Cache miss: %s", key)
            value = loader()
            self.set(key, value)
        return value

    def invalidate(self, key: Optional[Hashable] = None) -> None:
        """Drop one entry, or everything when ``key`` is None."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
