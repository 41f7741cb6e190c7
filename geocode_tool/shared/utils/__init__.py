# geocode_tool/shared/utils/__init__.py

"""Shared utility functions"""

# Local imports
from geocode_tool.shared.utils.cache_keys import UNSET_LAT_LONG_KEY
from geocode_tool.shared.utils.cache_keys import lat_long_cache_key
from geocode_tool.shared.utils.cache_keys import normalize_cache_key

__all__ = ["UNSET_LAT_LONG_KEY", "lat_long_cache_key", "normalize_cache_key"]
