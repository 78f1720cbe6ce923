import time
from collections.abc import Callable
from dataclasses import dataclass

from .fileinfo import FileInfo

# Freshness window for cached metadata, in seconds
FRESHNESS_WINDOW = 0.05


@dataclass
class CacheEntry:
    data: FileInfo
    cached_at: float


class MetadataCache:
    """
    Single-slot cache for the metadata of one path.

    Holds at most one FileInfo together with the clock reading taken when it
    was stored. An entry is served only while its age is under the freshness
    window. Changes made to the filesystem inside the window are not seen:
    staleness is bounded by the window, never by change notification.

    Not thread-safe. Each Path owns its own cache.
    """

    def __init__(
        self,
        freshness_seconds: float = FRESHNESS_WINDOW,
        clock: Callable[[], float] | None = None,
    ):
        self.freshness_seconds = freshness_seconds
        self.clock = clock or time.monotonic
        self._entry: CacheEntry | None = None

    @property
    def cached_at(self) -> float | None:
        """
        Clock reading of the stored entry, or None when empty.

        Introspection only: Path never reads it.
        """
        return self._entry.cached_at if self._entry else None

    def peek(self) -> FileInfo | None:
        """
        Return the stored metadata regardless of its age.

        Introspection only, like cached_at. Lookups that must respect the
        freshness window go through get().
        """
        return self._entry.data if self._entry else None

    def get(self) -> FileInfo | None:
        """
        Retrieve the metadata if cached and still fresh.

        Returns:
            The cached FileInfo if its age is under the window, else None.
            A stale entry stays stored until it is replaced or invalidated.
        """
        if self._entry is None:
            return None
        if self.clock() - self._entry.cached_at >= self.freshness_seconds:
            return None
        return self._entry.data

    def put(self, info: FileInfo) -> None:
        """Store metadata stamped with the current clock reading."""
        self._entry = CacheEntry(data=info, cached_at=self.clock())

    def invalidate(self) -> None:
        self._entry = None
