# geocode_tool/infrastructure/storage/_factory.py

"""Factory selecting the object storage backend from configuration"""

# Local imports
from geocode_tool.core.domain.enums import StorageBackend
from geocode_tool.core.types.protocols import ObjectStorage
from geocode_tool.infrastructure.config._models import CachingConfig
from geocode_tool.infrastructure.storage._local import LocalObjectStorage
from geocode_tool.infrastructure.storage._s3 import S3ObjectStorage


def create_object_storage(caching: CachingConfig) -> ObjectStorage | None:
    """Build the configured object storage backend

    Args:
        caching: Caching configuration section

    Returns:
        Storage backend, or None when no bucket is configured
    """
    if not caching.bucket_name:
        return None

    if caching.storage_backend is StorageBackend.S3:
        return S3ObjectStorage(region=caching.region, endpoint_url=caching.endpoint_url)
    return LocalObjectStorage(caching.storage_dir)
