# geocode_tool/application/services/__init__.py

"""Application services for orchestration.

This module provides the geocoding facade that coordinates the cache store,
cache backup and the geocoding provider.
"""

# Local imports
from geocode_tool.application.services._distance import compute_distance
from geocode_tool.application.services._distance import parse_distance_unit
from geocode_tool.application.services._geocoding_service import GeocodingService

__all__ = ["GeocodingService", "compute_distance", "parse_distance_unit"]
