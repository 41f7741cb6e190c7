# geocode_tool/core/types/__init__.py

"""Type definitions and protocols for geocode_tool

Pure type definitions with no implementation logic.
"""

# Local imports
from geocode_tool.core.types.json import JSONDict
from geocode_tool.core.types.json import JSONList
from geocode_tool.core.types.json import JSONPrimitive
from geocode_tool.core.types.json import JSONType
from geocode_tool.core.types.protocols import GeocodingProvider
from geocode_tool.core.types.protocols import ObjectStorage
from geocode_tool.core.types.protocols import StorageFileRequest

__all__ = [
    "GeocodingProvider",
    "JSONDict",
    "JSONList",
    "JSONPrimitive",
    "JSONType",
    "ObjectStorage",
    "StorageFileRequest",
]
