# tests/conftest.py

"""Pytest configuration and fixtures for test suite"""

# Standard library imports
from datetime import timedelta
from io import BytesIO
from logging import getLogger
from os.path import join
from typing import BinaryIO

# Third party imports
import pytest

# Local imports
from geocode_tool.core.domain.context import RequestContext
from geocode_tool.core.domain.models import Point
from geocode_tool.core.domain.models import RouteLeg
from geocode_tool.core.types.protocols import StorageFileRequest
from geocode_tool.infrastructure.cache import CacheSyncAdapter
from geocode_tool.infrastructure.cache import ExpiringCacheStore
from geocode_tool.infrastructure.config import AppConfig


# Custom markers
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: mark test as slow running")


@pytest.fixture(autouse=True, scope="function")
def basic_isolation(monkeypatch):
    """Minimal isolation for most tests - reset logging and config env vars"""
    root_logger = getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(30)  # WARNING level

    for name in ("GEOCODER_KEY", "DATA_DIR", "BUCKET_NAME"):
        monkeypatch.delenv(name, raising=False)

    yield


class FakeClock:
    """Controllable replacement for time.time"""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta.total_seconds()


class StubProvider:
    """In-process GeocodingProvider recording every call

    Each geocoding method answers from a queue of responses: a list of points
    is returned, an exception instance is raised. When the queue is empty the
    default points are returned.
    """

    def __init__(self, default_points: list[Point] | None = None):
        self.default_points = default_points or []
        self.responses: dict[str, list[list[Point] | Exception]] = {
            "geocode_address": [],
            "geocode_components": [],
            "reverse_geocode": [],
        }
        self.calls: list[tuple[str, tuple]] = []
        self.timeouts: list[float | None] = []
        self.route_legs: list[RouteLeg] = []
        self.matrix_error: Exception | None = None
        self.closed = False

    def queue(self, method: str, *responses: list[Point] | Exception) -> None:
        self.responses[method].extend(responses)

    def _answer(self, method: str, args: tuple, timeout: float | None) -> list[Point]:
        self.calls.append((method, args))
        self.timeouts.append(timeout)
        queued = self.responses[method]
        response = queued.pop(0) if queued else self.default_points
        if isinstance(response, Exception):
            raise response
        return list(response)

    def calls_to(self, method: str) -> list[tuple]:
        return [args for name, args in self.calls if name == method]

    def close(self) -> None:
        self.closed = True

    def geocode_address(self, address: str, timeout: float | None = None) -> list[Point]:
        return self._answer("geocode_address", (address,), timeout)

    def geocode_components(
        self, components: dict[str, str], timeout: float | None = None
    ) -> list[Point]:
        return self._answer("geocode_components", (dict(components),), timeout)

    def reverse_geocode(
        self, latitude: float, longitude: float, timeout: float | None = None
    ) -> list[Point]:
        return self._answer("reverse_geocode", (latitude, longitude), timeout)

    def directions(
        self, origin: str, destination: str, timeout: float | None = None
    ) -> list[RouteLeg]:
        self.calls.append(("directions", (origin, destination)))
        return list(self.route_legs)

    def distance_matrix(
        self, origins: list[str], destinations: list[str], timeout: float | None = None
    ) -> list[RouteLeg]:
        self.calls.append(("distance_matrix", (list(origins), list(destinations))))
        if self.matrix_error is not None:
            raise self.matrix_error
        return [
            RouteLeg(
                start=origin,
                end=destination,
                duration=timedelta(minutes=10),
                distance_meters=1000 * (i + 1) + j,
            )
            for i, origin in enumerate(origins)
            for j, destination in enumerate(destinations)
        ]


class InMemoryObjectStorage:
    """ObjectStorage keeping objects in a dict keyed by (bucket, object name)"""

    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.requests: list[tuple[str, StorageFileRequest]] = []
        self.fail_upload: Exception | None = None
        self.fail_download: Exception | None = None

    def upload_file(self, reader: BinaryIO, request: StorageFileRequest) -> int:
        self.requests.append(("upload", request))
        if self.fail_upload is not None:
            raise self.fail_upload
        data = reader.read()
        self.objects[(request.bucket_name, request.object_name)] = data
        return len(data)

    def download_file(self, writer: BinaryIO, request: StorageFileRequest) -> int:
        self.requests.append(("download", request))
        if self.fail_download is not None:
            raise self.fail_download
        data = self.objects[(request.bucket_name, request.object_name)]
        writer.write(data)
        return len(data)

    def read(self, bucket: str, object_name: str) -> BytesIO:
        return BytesIO(self.objects[(bucket, object_name)])


IRVINE = Point(latitude=33.66, longitude=-117.83, formatted_address="Irvine, CA 92612, USA")


@pytest.fixture
def ctx():
    """Request context without a deadline"""
    return RequestContext()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stub_provider():
    return StubProvider(default_points=[IRVINE])


@pytest.fixture
def memory_storage():
    return InMemoryObjectStorage()


@pytest.fixture
def cache_dir(tmp_path):
    """Cache directory laid out as <data_dir>/geo"""
    return str(tmp_path / "data" / "geo")


@pytest.fixture
def cache_store(cache_dir, clock):
    return ExpiringCacheStore(cache_dir, clock=clock)


@pytest.fixture
def sync_adapter(cache_store, memory_storage):
    return CacheSyncAdapter(cache_store.file_path, "geo-bucket", memory_storage)


@pytest.fixture
def app_config(tmp_path):
    """Config with an API key and caching into tmp_path"""
    return AppConfig.model_validate(
        {
            "provider": {"api_key": "test-key"},
            "caching": {
                "enabled": True,
                "data_dir": str(tmp_path / "data"),
                "bucket_name": "geo-bucket",
            },
        }
    )


@pytest.fixture
def cache_file_path(tmp_path):
    return join(str(tmp_path / "data"), "geo", "geocode_cache.json")
