# geocode_tool/infrastructure/cache/__init__.py

"""Cache infrastructure for persistent geocode results.

Provides the expiring JSON-file cache store and the adapter that backs the
cache file up to remote object storage.
"""

# Local imports
from geocode_tool.infrastructure.cache._store import CacheEntry
from geocode_tool.infrastructure.cache._store import ExpiringCacheStore
from geocode_tool.infrastructure.cache._sync import CacheSyncAdapter

__all__ = ["CacheEntry", "CacheSyncAdapter", "ExpiringCacheStore"]
