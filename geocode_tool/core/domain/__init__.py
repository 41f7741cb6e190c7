# geocode_tool/core/domain/__init__.py

"""Core domain models, enumerations and errors"""

# Local imports
from geocode_tool.core.domain.context import RequestContext
from geocode_tool.core.domain.enums import DistanceUnit
from geocode_tool.core.domain.enums import StorageBackend
from geocode_tool.core.domain.models import AddressQuery
from geocode_tool.core.domain.models import Point
from geocode_tool.core.domain.models import RouteLeg

__all__ = [
    "AddressQuery",
    "DistanceUnit",
    "Point",
    "RequestContext",
    "RouteLeg",
    "StorageBackend",
]
