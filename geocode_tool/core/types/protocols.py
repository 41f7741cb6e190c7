# geocode_tool/core/types/protocols.py

"""Protocol definitions for the external collaborators"""

# Standard library imports
from dataclasses import dataclass
from os.path import basename
from typing import BinaryIO
from typing import Protocol

# Local imports
from geocode_tool.core.domain.models import Point
from geocode_tool.core.domain.models import RouteLeg

# ============================================================================
# Geocoding Provider
# ============================================================================


class GeocodingProvider(Protocol):
    """Remote geocoding/directions API

    Geocoding methods return every interpretation the provider offers, in
    provider order. They raise NoResultsError on an empty result set and
    ProviderError on any other failure.

    distance_matrix returns one leg per (origin, destination) pair in
    row-major order, with start/end set to the strings it was given.
    """

    def geocode_address(self, address: str, timeout: float | None = None) -> list[Point]: ...

    def geocode_components(
        self, components: dict[str, str], timeout: float | None = None
    ) -> list[Point]: ...

    def reverse_geocode(
        self, latitude: float, longitude: float, timeout: float | None = None
    ) -> list[Point]: ...

    def directions(
        self, origin: str, destination: str, timeout: float | None = None
    ) -> list[RouteLeg]: ...

    def distance_matrix(
        self, origins: list[str], destinations: list[str], timeout: float | None = None
    ) -> list[RouteLeg]: ...


# ============================================================================
# Object Storage
# ============================================================================


@dataclass(frozen=True, slots=True)
class StorageFileRequest:
    """Addresses one object in remote storage

    The object name is "<basename(directory)>/<file_name>" inside bucket_name.
    mod_time is the local file's modification time (epoch seconds), passed as
    a version hint only.
    """

    bucket_name: str
    file_name: str
    directory: str
    mod_time: int = 0

    @property
    def object_name(self) -> str:
        prefix = basename(self.directory.rstrip("/\\"))
        return f"{prefix}/{self.file_name}" if prefix else self.file_name


class ObjectStorage(Protocol):
    """Remote blob storage used to back up the cache file

    Both methods return the number of bytes transferred and raise on failure.
    """

    def upload_file(self, reader: BinaryIO, request: StorageFileRequest) -> int: ...

    def download_file(self, writer: BinaryIO, request: StorageFileRequest) -> int: ...
