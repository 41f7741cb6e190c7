# geocode_tool/core/domain/constants.py

"""Shared constants for cache lifetimes, defaults and file naming"""

# Standard library imports
from datetime import timedelta

# Cache lifetimes. ONE_YEAR is 365 * 24 * 30 hours (not a calendar year) and is
# kept that way so existing cache files keep their expiry semantics.
ONE_YEAR = timedelta(hours=365 * 24 * 30)
THIRTY_DAYS = timedelta(hours=24 * 30)
ONE_DAY = timedelta(hours=24)
FIVE_HOURS = timedelta(hours=5)
ONE_HOUR = timedelta(hours=1)
THIRTY_MINUTES = timedelta(minutes=30)

DEFAULT_TTL = ONE_YEAR
DEFAULT_COUNTRY_CODE = "USA"

# Persisted cache layout: <data_dir>/geo/geocode_cache.json
CACHE_SUBDIR = "geo"
CACHE_FILE_NAME = "geocode_cache"

DEFAULT_PROVIDER_HOST = "https://maps.googleapis.com"
DEFAULT_GEOCODE_PATH = "/maps/api/geocode/json"
DEFAULT_DIRECTIONS_PATH = "/maps/api/directions/json"
DEFAULT_DISTANCE_MATRIX_PATH = "/maps/api/distancematrix/json"
