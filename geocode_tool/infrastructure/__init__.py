# geocode_tool/infrastructure/__init__.py

"""System infrastructure components for caching, configuration, storage and providers.

This module provides infrastructure services including the expiring cache
store, cache backup through object storage, configuration management and the
geocoding provider client.
"""

# Local imports
from geocode_tool.infrastructure.cache import CacheSyncAdapter
from geocode_tool.infrastructure.cache import ExpiringCacheStore
from geocode_tool.infrastructure.config import ConfigLoader
from geocode_tool.infrastructure.providers import GoogleMapsProvider

__all__ = ["CacheSyncAdapter", "ConfigLoader", "ExpiringCacheStore", "GoogleMapsProvider"]
