# geocode_tool/core/domain/enums.py

"""Domain enumerations for geocoding and distance lookups"""

# Standard library imports
from enum import Enum


class DistanceUnit(Enum):
    """Units supported by distance calculations"""

    KM = "KM"
    MILES = "MILES"
    METERS = "METERS"
    FEET = "FEET"


class StorageBackend(Enum):
    """Remote object storage implementations for cache backup"""

    LOCAL = "local"  # Directory on the local filesystem (development, tests)
    S3 = "s3"  # S3-compatible bucket via boto3
