# geocode_tool/__init__.py

"""Geocode Tool Package

A thin client for geocoding, distance and routing lookups with an expiring
local JSON cache that is restored from and backed up to object storage.
"""

# Local imports
# High-level API
from geocode_tool.application.services import GeocodingService

# Data models
from geocode_tool.core.domain import AddressQuery
from geocode_tool.core.domain import DistanceUnit
from geocode_tool.core.domain import Point
from geocode_tool.core.domain import RequestContext
from geocode_tool.core.domain import RouteLeg
from geocode_tool.core.domain import StorageBackend
from geocode_tool.core.domain import errors

# For users who want lower-level control
from geocode_tool.infrastructure import CacheSyncAdapter
from geocode_tool.infrastructure import ConfigLoader
from geocode_tool.infrastructure import ExpiringCacheStore
from geocode_tool.infrastructure import GoogleMapsProvider
from geocode_tool.infrastructure.storage import LocalObjectStorage
from geocode_tool.infrastructure.storage import S3ObjectStorage

# Version info
__version__ = "0.1.0"

__all__: list[str] = [
    # Primary API
    "GeocodingService",
    # Data models
    "AddressQuery",
    "DistanceUnit",
    "Point",
    "RequestContext",
    "RouteLeg",
    "StorageBackend",
    "errors",
    # Advanced usage - infrastructure
    "CacheSyncAdapter",
    "ConfigLoader",
    "ExpiringCacheStore",
    "GoogleMapsProvider",
    "LocalObjectStorage",
    "S3ObjectStorage",
    # Version
    "__version__",
]
