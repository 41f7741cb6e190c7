# geocode_tool/application/services/_geocoding_service.py

"""Geocoding facade: cache first, provider on a miss, result stored back"""

# Standard library imports
from datetime import timedelta
from logging import getLogger
from os.path import join
from typing import Callable

# Third party imports
from pydantic import ValidationError

# Local imports
from geocode_tool.application.services._distance import compute_distance
from geocode_tool.core.domain.constants import CACHE_FILE_NAME
from geocode_tool.core.domain.constants import CACHE_SUBDIR
from geocode_tool.core.domain.constants import DEFAULT_COUNTRY_CODE
from geocode_tool.core.domain.constants import DEFAULT_TTL
from geocode_tool.core.domain.context import RequestContext
from geocode_tool.core.domain.context import require_context
from geocode_tool.core.domain.enums import DistanceUnit
from geocode_tool.core.domain.errors import CacheCorruptError
from geocode_tool.core.domain.errors import CacheError
from geocode_tool.core.domain.errors import MissingRequiredConfigError
from geocode_tool.core.domain.errors import NoResultsError
from geocode_tool.core.domain.errors import ProviderError
from geocode_tool.core.domain.models import AddressQuery
from geocode_tool.core.domain.models import Point
from geocode_tool.core.domain.models import RouteLeg
from geocode_tool.core.types.json import JSONType
from geocode_tool.core.types.protocols import GeocodingProvider
from geocode_tool.core.types.protocols import ObjectStorage
from geocode_tool.infrastructure.cache import CacheSyncAdapter
from geocode_tool.infrastructure.cache import ExpiringCacheStore
from geocode_tool.infrastructure.config import AppConfig
from geocode_tool.infrastructure.providers import GoogleMapsProvider
from geocode_tool.infrastructure.storage import create_object_storage
from geocode_tool.shared.utils.cache_keys import lat_long_cache_key
from geocode_tool.shared.utils.cache_keys import normalize_cache_key

logger = getLogger(__name__)

type GeocodeStrategy = tuple[str, Callable[[float | None], list[Point]]]


class GeocodingService:
    """Public geocoding, distance and routing operations

    When a cache store is attached, geocoding results are looked up by
    normalized key before the provider is called and written back afterwards.
    Cache failures never fail a lookup. The cache is persisted and backed up
    only by clear(). Used as a context manager, the service runs clear() and
    then close() on exit.

    Not thread-safe: one caller at a time per instance.
    """

    def __init__(
        self,
        provider: GeocodingProvider,
        cache: ExpiringCacheStore | None = None,
        sync: CacheSyncAdapter | None = None,
        default_country: str = DEFAULT_COUNTRY_CODE,
        default_ttl: timedelta = DEFAULT_TTL,
    ):
        """Initialize the service

        Args:
            provider: Geocoding/directions provider
            cache: Cache store owned by this service, None disables caching
            sync: Cache backup adapter; defaults to save-only for the cache file
            default_country: Country used when a call gives none
            default_ttl: Lifetime of cached results
        """
        self.provider = provider
        self.cache = cache
        if cache is not None and sync is None:
            sync = CacheSyncAdapter(cache.file_path, "", None)
        self.sync = sync
        self.default_country = default_country
        self.default_ttl = default_ttl

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        provider: GeocodingProvider | None = None,
        storage: ObjectStorage | None = None,
    ) -> "GeocodingService":
        """Build a service, restoring the cache file from storage if needed

        Args:
            config: Application configuration
            provider: Provider override, GoogleMapsProvider by default
            storage: Object storage override, built from config by default

        Raises:
            MissingRequiredConfigError: the provider API key is missing
        """
        if not config.provider.api_key:
            raise MissingRequiredConfigError("geocoding provider api_key is required")

        if provider is None:
            provider = GoogleMapsProvider(config.provider)

        cache = None
        sync = None
        caching = config.caching
        if caching.enabled:
            cache_dir = join(caching.data_dir, CACHE_SUBDIR)
            file_path = join(cache_dir, f"{CACHE_FILE_NAME}.json")
            if storage is None:
                storage = create_object_storage(caching)
            sync = CacheSyncAdapter(file_path, caching.bucket_name, storage)
            if sync.download_initial():
                logger.info(f"Restored geocode cache from bucket {caching.bucket_name}")
            cache = ExpiringCacheStore(cache_dir, CACHE_FILE_NAME)
            logger.info(f"Geocode cache enabled at {file_path} ({len(cache):,} entries)")

        return cls(
            provider,
            cache=cache,
            sync=sync,
            default_country=config.provider.default_country,
        )

    @property
    def cache_enabled(self) -> bool:
        return self.cache is not None

    def __enter__(self) -> "GeocodingService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        try:
            self.clear()
        finally:
            self.close()

    # ------------------------------------------------------------------
    # Cache helpers
    # ------------------------------------------------------------------

    def _get_from_cache(self, key: str) -> Point | None:
        """Cached point for key, or None on any cache failure"""
        if self.cache is None:
            return None
        try:
            value, expires_at = self.cache.get(key)
            point = self._point_from_cache(key, value)
        except CacheCorruptError as e:
            logger.warning(f"Geocoder cache get error: {e}")
            return None
        except CacheError as e:
            logger.debug(f"Geocoder cache get error: {e}")
            return None

        logger.debug(f"Returning cached value for key {key} (expires {expires_at})")
        return point

    @staticmethod
    def _point_from_cache(key: str, value: JSONType) -> Point:
        try:
            return Point.model_validate(value)
        except ValidationError as e:
            raise CacheCorruptError(f"cached value for key {key} is not a point: {e}", key) from e

    def _set_in_cache(self, key: str, point: Point, ttl: timedelta | None = None) -> None:
        """Store point under key; a zero or missing ttl means the default"""
        if self.cache is None:
            return
        if not ttl:
            ttl = self.default_ttl
        try:
            self.cache.set(key, point.model_dump(mode="json"), ttl)
        except (TypeError, ValueError) as e:
            logger.error(f"Geocoder cache set error for key {key}: {e}")

    @staticmethod
    def _first(points: list[Point]) -> Point:
        if not points:
            raise NoResultsError()
        return points[0]

    # ------------------------------------------------------------------
    # Geocoding
    # ------------------------------------------------------------------

    def geocode(
        self, ctx: RequestContext | None, postal_code: str, country_code: str = ""
    ) -> Point:
        """Resolve a postal code to a point

        The cache key is the normalized postal code alone. The provider's first
        result wins.

        Raises:
            NilContextError: ctx is None
            NoResultsError: the provider found nothing
            ProviderError: the provider call failed
        """
        ctx = require_context(ctx)
        country_code = country_code or self.default_country

        key = normalize_cache_key(postal_code)
        cached = self._get_from_cache(key)
        if cached is not None:
            return cached

        ctx.check()
        points = self.provider.geocode_components(
            {"country": country_code, "postal_code": postal_code}, timeout=ctx.remaining()
        )
        point = self._first(points)
        self._set_in_cache(key, point)
        return point

    def _address_strategies(self, address: AddressQuery) -> list[GeocodeStrategy]:
        """Query forms from strictest to loosest"""
        strategies: list[GeocodeStrategy] = [
            (
                "address",
                lambda timeout: self.provider.geocode_address(address.address_string(), timeout),
            ),
            (
                "components",
                lambda timeout: self.provider.geocode_components(address.components(), timeout),
            ),
        ]
        if address.postal_code:
            strategies.append(
                (
                    "postal_code",
                    lambda timeout: self.provider.geocode_components(
                        {"country": address.country, "postal_code": address.postal_code}, timeout
                    ),
                )
            )
        return strategies

    def geocode_address(self, ctx: RequestContext | None, address: AddressQuery) -> Point:
        """Resolve a structured address to a point

        Tries the free-form address string, then the component filter, then
        the bare postal code and country, stopping at the first non-empty
        result set.

        Raises:
            NilContextError: ctx is None
            ProviderError: every strategy failed; carries the last error
        """
        ctx = require_context(ctx)
        if not address.country:
            address = address.model_copy(update={"country": self.default_country})

        key = normalize_cache_key(address.address_string())
        cached = self._get_from_cache(key)
        if cached is not None:
            return cached

        last_error: ProviderError = NoResultsError()
        for name, strategy in self._address_strategies(address):
            ctx.check()
            try:
                points = strategy(ctx.remaining())
            except ProviderError as e:
                logger.warning(f"Geocoding {address.address_string()!r} by {name} failed: {e}")
                last_error = e
                continue
            if points:
                point = points[0]
                self._set_in_cache(key, point)
                return point
            last_error = NoResultsError()

        logger.error(
            f"Geocoder request error for country {address.country}, "
            f"postal code {address.postal_code}: {last_error}"
        )
        raise last_error

    def geocode_lat_long(
        self, ctx: RequestContext | None, latitude: float, longitude: float, hint: str = ""
    ) -> Point:
        """Reverse geocode a coordinate pair

        Among several results, the first whose formatted address contains hint
        (case-sensitive) wins; otherwise the first result.

        Raises:
            NilContextError: ctx is None
            NoResultsError: the provider found nothing
            ProviderError: the provider call failed
        """
        ctx = require_context(ctx)

        key = lat_long_cache_key(latitude, longitude, hint)
        cached = self._get_from_cache(key)
        if cached is not None:
            return cached

        ctx.check()
        points = self.provider.reverse_geocode(latitude, longitude, timeout=ctx.remaining())
        point = self._first(points)
        if hint:
            point = next((p for p in points if hint in p.formatted_address), point)

        self._set_in_cache(key, point)
        return point

    # ------------------------------------------------------------------
    # Distance and routing
    # ------------------------------------------------------------------

    def get_distance(
        self,
        ctx: RequestContext | None,
        unit: DistanceUnit | str,
        point_a: Point,
        point_b: Point,
    ) -> float:
        """Geodesic distance between two points in the requested unit

        Raises:
            NilContextError: ctx is None
            InvalidLatLngError: either point is invalid
            InvalidUnitError: unit is not recognized
        """
        require_context(ctx)
        return compute_distance(unit, point_a, point_b)

    def _route(self, ctx: RequestContext | None, origin: str, destination: str) -> list[RouteLeg]:
        ctx = require_context(ctx)
        ctx.check()
        return self.provider.directions(origin, destination, timeout=ctx.remaining())

    def _route_matrix(
        self, ctx: RequestContext | None, origins: list[str], destinations: list[str]
    ) -> list[RouteLeg]:
        ctx = require_context(ctx)
        if not origins or not destinations:
            return []
        ctx.check()
        legs = self.provider.distance_matrix(origins, destinations, timeout=ctx.remaining())
        return [leg for leg in legs if leg.start != leg.end]

    def get_route_for_address(
        self, ctx: RequestContext | None, origin: AddressQuery, destination: AddressQuery
    ) -> list[RouteLeg]:
        """Directions legs between two addresses"""
        return self._route(ctx, origin.address_string(), destination.address_string())

    def get_route_for_lat_long(
        self, ctx: RequestContext | None, origin: Point, destination: Point
    ) -> list[RouteLeg]:
        """Directions legs between two points"""
        return self._route(ctx, origin.lat_lng_string(), destination.lat_lng_string())

    def get_route_matrix_for_address(
        self,
        ctx: RequestContext | None,
        origins: list[AddressQuery],
        destinations: list[AddressQuery],
    ) -> list[RouteLeg]:
        """Distance matrix legs between addresses, skipping identical pairs

        A single provider failure fails the whole matrix.
        """
        return self._route_matrix(
            ctx,
            [origin.address_string() for origin in origins],
            [destination.address_string() for destination in destinations],
        )

    def get_route_matrix_for_lat_long(
        self, ctx: RequestContext | None, origins: list[Point], destinations: list[Point]
    ) -> list[RouteLeg]:
        """Distance matrix legs between points, skipping identical pairs

        A single provider failure fails the whole matrix.
        """
        return self._route_matrix(
            ctx,
            [origin.lat_lng_string() for origin in origins],
            [destination.lat_lng_string() for destination in destinations],
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def clear(self) -> int:
        """Persist and back up the cache if it changed

        Returns:
            Bytes uploaded to object storage (0 if nothing was uploaded)

        Raises:
            PersistenceError: saving the cache file failed
            SyncError: uploading the cache file failed
        """
        logger.info("Cleaning up geocoder data structures")
        if self.cache is None or self.sync is None:
            return 0
        try:
            return self.sync.upload_if_dirty(self.cache)
        except Exception as e:
            logger.error(f"Error saving geocoder cache: {e}")
            raise

    def close(self) -> None:
        """Release the provider's resources, e.g. its HTTP session"""
        close = getattr(self.provider, "close", None)
        if callable(close):
            close()
