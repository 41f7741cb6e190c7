# geocode_tool/infrastructure/cache/_store.py

"""Expiring key-value cache persisted to a single JSON file"""

# Standard library imports
from datetime import timedelta
from json import dump as json_dump
from json import dumps as json_dumps
from json import load as json_load
from logging import getLogger
from os import close as os_close
from os import fdopen
from os import fsync
from os import makedirs
from os import replace
from os import unlink
from os.path import exists
from os.path import join
from tempfile import mkstemp
from time import time
from typing import Callable
from typing import TypedDict

# Local imports
from geocode_tool.core.domain.constants import CACHE_FILE_NAME
from geocode_tool.core.domain.errors import CacheExpiredError
from geocode_tool.core.domain.errors import CacheMissError
from geocode_tool.core.domain.errors import PersistenceError
from geocode_tool.core.types.json import JSONType

logger = getLogger(__name__)


class CacheEntry(TypedDict):
    """Stored value with its absolute expiry (epoch seconds)"""

    value: JSONType
    expires_at: float


class ExpiringCacheStore:
    """In-memory map of key -> (value, expiry) backed by one JSON file

    Writes only mark the store dirty; nothing reaches the disk until
    save_file() is called. Not thread-safe: callers serialize access.
    """

    __slots__ = ("cache_dir", "file_path", "_entries", "_dirty", "_clock")

    def __init__(
        self,
        cache_dir: str,
        file_name: str = CACHE_FILE_NAME,
        clock: Callable[[], float] = time,
    ):
        """Initialize the store and load any existing cache file

        Args:
            cache_dir: Directory holding the cache file
            file_name: Base name of the cache file, without the .json suffix
            clock: Returns the current time in epoch seconds
        """
        self.cache_dir = cache_dir
        self.file_path = join(cache_dir, f"{file_name}.json")
        self._entries: dict[str, CacheEntry] = {}
        self._dirty = False
        self._clock = clock
        self.load()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @property
    def entries(self) -> dict[str, CacheEntry]:
        """Copy of the raw entry mapping"""
        return {key: CacheEntry(**entry) for key, entry in self._entries.items()}

    def get(self, key: str) -> tuple[JSONType, float]:
        """Look up a key

        Args:
            key: Normalized cache key

        Returns:
            Tuple of (value, expires_at)

        Raises:
            CacheMissError: key is absent
            CacheExpiredError: entry expiry has passed
        """
        entry = self._entries.get(key)
        if entry is None:
            raise CacheMissError(key)

        expires_at = entry["expires_at"]
        if self._clock() >= expires_at:
            raise CacheExpiredError(key, expires_at)

        return entry["value"], expires_at

    def set(self, key: str, value: JSONType, ttl: timedelta) -> float:
        """Store a value that expires ttl from now

        Args:
            key: Normalized cache key
            value: JSON-serializable payload
            ttl: Positive lifetime of the entry

        Returns:
            The absolute expiry that was stored

        Raises:
            ValueError: ttl is not positive
            TypeError: value is not JSON-serializable
        """
        ttl_seconds = ttl.total_seconds()
        if ttl_seconds <= 0:
            raise ValueError(f"Cache TTL must be positive, got {ttl}")
        json_dumps(value)

        expires_at = self._clock() + ttl_seconds
        self._entries[key] = CacheEntry(value=value, expires_at=expires_at)
        self._dirty = True
        return expires_at

    def delete(self, key: str) -> bool:
        """Remove a key, returning True if it was present"""
        if self._entries.pop(key, None) is None:
            return False
        self._dirty = True
        return True

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed"""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now >= entry["expires_at"]]
        for key in expired:
            del self._entries[key]
        if expired:
            self._dirty = True
            logger.debug(f"Purged {len(expired)} expired cache entries")
        return len(expired)

    def clear(self) -> None:
        """Drop all entries; the empty state is persisted on the next save"""
        if self._entries:
            self._entries.clear()
            self._dirty = True

    def updated(self) -> bool:
        """True iff the store changed since the last successful save"""
        return self._dirty

    def load(self) -> bool:
        """Replace in-memory entries with the contents of the cache file

        A missing file leaves the store empty. An unreadable or malformed file
        is logged and also leaves the store empty; malformed individual
        entries are skipped.

        Returns:
            True if the file was read
        """
        self._entries = {}
        self._dirty = False
        if not exists(self.file_path):
            return False

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json_load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load cache file {self.file_path}: {e}")
            return False

        if not isinstance(data, dict):
            logger.warning(f"Ignoring cache file {self.file_path}: top level is not an object")
            return False

        skipped = 0
        for key, raw_entry in data.items():
            if (
                not isinstance(raw_entry, dict)
                or "value" not in raw_entry
                or not isinstance(raw_entry.get("expires_at"), (int, float))
                or isinstance(raw_entry.get("expires_at"), bool)
            ):
                skipped += 1
                continue
            self._entries[key] = CacheEntry(
                value=raw_entry["value"], expires_at=float(raw_entry["expires_at"])
            )

        if skipped:
            logger.warning(f"Skipped {skipped} malformed entries in {self.file_path}")
        logger.debug(f"Loaded {len(self._entries):,} cache entries from {self.file_path}")
        return True

    def save_file(self) -> None:
        """Write all entries to the cache file

        The document is written to a temporary file in the same directory and
        renamed over the target, so a crash never leaves a partial file.

        Raises:
            PersistenceError: directory creation, write or rename failed
        """
        try:
            makedirs(self.cache_dir, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Failed to create cache directory {self.cache_dir}: {e}") from e

        try:
            fd, temp_path = mkstemp(dir=self.cache_dir, prefix=".geocode_cache_", suffix=".tmp")
        except OSError as e:
            raise PersistenceError(f"Failed to create temporary cache file: {e}") from e

        try:
            try:
                f = fdopen(fd, "w", encoding="utf-8")
            except OSError:
                os_close(fd)
                raise
            with f:
                json_dump(self._entries, f)
                f.flush()
                fsync(f.fileno())
            replace(temp_path, self.file_path)
        except (OSError, TypeError, ValueError) as e:
            if exists(temp_path):
                unlink(temp_path)
            raise PersistenceError(f"Failed to save cache file {self.file_path}: {e}") from e

        self._dirty = False
        logger.info(f"Saved {len(self._entries):,} cache entries to {self.file_path}")
