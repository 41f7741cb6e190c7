# geocode_tool/infrastructure/providers/__init__.py

"""Geocoding provider clients"""

# Local imports
from geocode_tool.infrastructure.providers._google import GoogleMapsProvider

__all__ = ["GoogleMapsProvider"]
