# geocode_tool/infrastructure/storage/__init__.py

"""Object storage backends for cache backup and restore"""

# Local imports
from geocode_tool.infrastructure.storage._factory import create_object_storage
from geocode_tool.infrastructure.storage._local import LocalObjectStorage
from geocode_tool.infrastructure.storage._s3 import S3ObjectStorage

__all__ = ["LocalObjectStorage", "S3ObjectStorage", "create_object_storage"]
