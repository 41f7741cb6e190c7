# geocode_tool/infrastructure/providers/_google.py

"""Google Maps Geocoding, Directions and Distance Matrix client over raw HTTP"""

# Standard library imports
from datetime import timedelta
from logging import getLogger

# Third party imports
from requests import RequestException
from requests import Session

# Local imports
from geocode_tool.core.domain.errors import MissingRequiredConfigError
from geocode_tool.core.domain.errors import NoResultsError
from geocode_tool.core.domain.errors import ProviderError
from geocode_tool.core.domain.models import Point
from geocode_tool.core.domain.models import RouteLeg
from geocode_tool.core.types.json import JSONDict
from geocode_tool.infrastructure.config._models import ProviderConfig

logger = getLogger(__name__)

STATUS_OK = "OK"
STATUS_ZERO_RESULTS = "ZERO_RESULTS"


class GoogleMapsProvider:
    """Geocoding provider backed by the Google Maps web service endpoints

    Host and paths come from ProviderConfig so tests and proxies can point
    the client elsewhere. Every failure surfaces as ProviderError; an empty
    result set surfaces as NoResultsError. No retries.
    """

    def __init__(self, config: ProviderConfig, session: Session | None = None):
        """Initialize the provider client

        Args:
            config: Provider configuration; api_key is required
            session: HTTP session to reuse, a new one by default

        Raises:
            MissingRequiredConfigError: api_key is empty
        """
        if not config.api_key:
            raise MissingRequiredConfigError("geocoding provider api_key is required")
        self.config = config
        self.session = session or Session()

    def close(self) -> None:
        self.session.close()

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------

    def _request(self, path: str, params: dict[str, str], timeout: float | None) -> JSONDict:
        """GET an endpoint and return the decoded body after status checks"""
        url = f"{self.config.host}{path}"
        query = dict(params, key=self.config.api_key)
        try:
            response = self.session.get(url, params=query, timeout=timeout or self.config.timeout)
            response.raise_for_status()
            body = response.json()
        except RequestException as e:
            logger.error(f"Provider request to {path} failed: {e}")
            raise ProviderError(f"provider request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Provider response from {path} is not valid JSON: {e}")
            raise ProviderError(f"malformed provider response: {e}") from e

        if not isinstance(body, dict):
            raise ProviderError("malformed provider response: top level is not an object")

        status = body.get("status")
        if status == STATUS_ZERO_RESULTS:
            raise NoResultsError()
        if status != STATUS_OK:
            message = body.get("error_message") or "no error message"
            logger.error(f"Provider returned status {status} for {path}: {message}")
            raise ProviderError(f"provider status {status}: {message}")
        return body

    def _geocode(self, params: dict[str, str], timeout: float | None) -> list[Point]:
        body = self._request(self.config.geocode_path, params, timeout)
        results = body.get("results") or []
        if not isinstance(results, list) or not results:
            raise NoResultsError()

        points = []
        try:
            for result in results:
                location = result["geometry"]["location"]  # type: ignore[index,call-overload]
                points.append(
                    Point(
                        latitude=location["lat"],
                        longitude=location["lng"],
                        formatted_address=result.get("formatted_address", ""),
                    )
                )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"malformed geocoding result: {e}") from e
        return points

    # ------------------------------------------------------------------
    # Geocoding
    # ------------------------------------------------------------------

    def geocode_address(self, address: str, timeout: float | None = None) -> list[Point]:
        """Forward geocode a free-form address string"""
        return self._geocode({"address": address}, timeout)

    def geocode_components(
        self, components: dict[str, str], timeout: float | None = None
    ) -> list[Point]:
        """Forward geocode using a component filter, e.g. country + postal_code"""
        filter_str = "|".join(f"{name}:{value}" for name, value in components.items())
        return self._geocode({"components": filter_str}, timeout)

    def reverse_geocode(
        self, latitude: float, longitude: float, timeout: float | None = None
    ) -> list[Point]:
        """Reverse geocode a coordinate pair"""
        return self._geocode({"latlng": f"{latitude:f},{longitude:f}"}, timeout)

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def directions(
        self, origin: str, destination: str, timeout: float | None = None
    ) -> list[RouteLeg]:
        """Legs of the first route from origin to destination"""
        body = self._request(
            self.config.directions_path, {"origin": origin, "destination": destination}, timeout
        )
        routes = body.get("routes") or []
        if not isinstance(routes, list) or not routes:
            raise NoResultsError()

        try:
            return [
                RouteLeg(
                    start=leg.get("start_address") or origin,
                    end=leg.get("end_address") or destination,
                    duration=timedelta(seconds=leg["duration"]["value"]),
                    distance_meters=leg["distance"]["value"],
                )
                for leg in routes[0]["legs"]  # type: ignore[index,call-overload]
            ]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"malformed directions result: {e}") from e

    def distance_matrix(
        self, origins: list[str], destinations: list[str], timeout: float | None = None
    ) -> list[RouteLeg]:
        """One leg per origin/destination pair, labelled with the caller's strings

        Any element without an OK status fails the whole matrix.
        """
        body = self._request(
            self.config.distance_matrix_path,
            {"origins": "|".join(origins), "destinations": "|".join(destinations)},
            timeout,
        )
        rows = body.get("rows") or []
        if not isinstance(rows, list) or len(rows) != len(origins):
            raise ProviderError("malformed distance matrix: row count does not match origins")

        legs = []
        try:
            for origin, row in zip(origins, rows):
                elements = row["elements"]  # type: ignore[index,call-overload]
                if len(elements) != len(destinations):
                    raise ProviderError(
                        "malformed distance matrix: element count does not match destinations"
                    )
                for destination, element in zip(destinations, elements):
                    status = element.get("status")
                    if status != STATUS_OK:
                        raise ProviderError(
                            f"distance matrix element {origin} -> {destination} status {status}"
                        )
                    legs.append(
                        RouteLeg(
                            start=origin,
                            end=destination,
                            duration=timedelta(seconds=element["duration"]["value"]),
                            distance_meters=element["distance"]["value"],
                        )
                    )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"malformed distance matrix: {e}") from e
        return legs
