# geocode_tool/core/domain/errors.py

"""Exception hierarchy for geocoding, caching and cache synchronization

Propagation rules:
- CacheError subclasses never reach callers of the public geocoding
  operations; they are logged and the provider is called instead.
- ProviderError (and NoResultsError) always propagate to the caller.
- PersistenceError and SyncError propagate only from GeocodingService.clear().
"""


class GeocodeError(Exception):
    """Base class for all errors raised by geocode_tool"""


class MissingRequiredConfigError(GeocodeError):
    """A required configuration value (e.g. the provider API key) is missing"""


class NilContextError(GeocodeError):
    """An operation was invoked without a request context"""

    def __init__(self, message: str = "context is nil"):
        super().__init__(message)


class ContextCancelledError(GeocodeError):
    """The request context was cancelled or its deadline passed"""


class ProviderError(GeocodeError):
    """Calling the geocoding provider failed (network, auth, decode, status)"""


class NoResultsError(ProviderError):
    """The provider answered successfully but returned no results"""

    def __init__(self, message: str = "no results found"):
        super().__init__(message)


class InvalidLatLngError(GeocodeError):
    """A point has an unset (zero) latitude or longitude"""

    def __init__(self, message: str = "invalid geo lat/lng"):
        super().__init__(message)


class InvalidUnitError(GeocodeError):
    """An unrecognized distance unit was requested"""

    def __init__(self, unit: object):
        super().__init__(f"invalid geo distance unit: {unit!r}")
        self.unit = unit


class CacheError(GeocodeError):
    """Base class for recoverable cache lookup failures"""

    def __init__(self, message: str, key: str):
        super().__init__(message)
        self.key = key


class CacheMissError(CacheError):
    """Key is not present in the cache"""

    def __init__(self, key: str):
        super().__init__(f"cache miss for key {key}", key)


class CacheExpiredError(CacheError):
    """Key is present but its expiry has passed"""

    def __init__(self, key: str, expires_at: float):
        super().__init__(f"cache entry for key {key} expired at {expires_at}", key)
        self.expires_at = expires_at


class CacheCorruptError(CacheError):
    """Cached value could not be deserialized into the expected shape"""


class PersistenceError(GeocodeError):
    """Reading, writing or creating the local cache file or directory failed"""


class SyncError(GeocodeError):
    """Uploading or downloading the cache file to/from object storage failed"""
