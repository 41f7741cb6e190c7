# geocode_tool/adapters/cli/main.py

"""
Geocode Tool - CLI Main Module

Command-line interface over GeocodingService. Results are printed as JSON;
the cache is saved and backed up before exit.
"""

# Standard library imports
from argparse import Namespace
from json import dumps
from logging import getLogger

# Local imports
from geocode_tool.adapters.cli.parser import create_argument_parser
from geocode_tool.application.services import GeocodingService
from geocode_tool.core.domain.context import RequestContext
from geocode_tool.core.domain.errors import GeocodeError
from geocode_tool.core.domain.models import AddressQuery
from geocode_tool.core.domain.models import Point
from geocode_tool.core.types.json import JSONType
from geocode_tool.infrastructure.config import AppConfig
from geocode_tool.infrastructure.config import ConfigLoader
from geocode_tool.infrastructure.logging import setup_logging

logger = getLogger(__name__)

LOG_LEVELS = ("WARNING", "INFO", "DEBUG")


def build_config(args: Namespace) -> AppConfig:
    """Load the configuration file and apply command-line overrides"""
    app_config = ConfigLoader(args.config).app_config

    caching_updates: dict[str, object] = {}
    if args.cache is not None:
        caching_updates["enabled"] = args.cache
    if args.data_dir:
        caching_updates["data_dir"] = args.data_dir
    if args.bucket:
        caching_updates["bucket_name"] = args.bucket

    provider_updates: dict[str, object] = {}
    if args.timeout is not None:
        provider_updates["timeout"] = args.timeout

    return app_config.model_copy(
        update={
            "caching": app_config.caching.model_copy(update=caching_updates),
            "provider": app_config.provider.model_copy(update=provider_updates),
        }
    )


def run_command(service: GeocodingService, ctx: RequestContext, args: Namespace) -> JSONType:
    """Execute the selected subcommand and return a JSON-serializable result"""
    match args.command:
        case "postal":
            return service.geocode(ctx, args.postal_code, args.country).model_dump(mode="json")
        case "address":
            address = AddressQuery(
                street=args.street,
                city=args.city,
                state=args.state,
                postal_code=args.postal_code,
                country=args.country,
            )
            return service.geocode_address(ctx, address).model_dump(mode="json")
        case "reverse":
            point = service.geocode_lat_long(ctx, args.latitude, args.longitude, args.hint)
            return point.model_dump(mode="json")
        case "distance":
            lat1, lng1, lat2, lng2 = args.coordinates
            point_a = Point(latitude=lat1, longitude=lng1)
            point_b = Point(latitude=lat2, longitude=lng2)
            distance = service.get_distance(ctx, args.unit, point_a, point_b)
            return {"unit": args.unit, "distance": distance}
        case "route":
            legs = service.get_route_for_address(
                ctx, AddressQuery(street=args.origin), AddressQuery(street=args.destination)
            )
            return [leg.model_dump(mode="json") for leg in legs]
        case "matrix":
            legs = service.get_route_matrix_for_address(
                ctx,
                [AddressQuery(street=origin) for origin in args.origins],
                [AddressQuery(street=destination) for destination in args.destinations],
            )
            return [leg.model_dump(mode="json") for leg in legs]
        case _:
            raise ValueError(f"Unknown command {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point

    Returns:
        Process exit code
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(
        log_file=args.log_file,
        log_level=LOG_LEVELS[min(args.verbose, len(LOG_LEVELS) - 1)],
        disable_file_logging=args.log_file is None,
    )

    try:
        service = GeocodingService.from_config(build_config(args))
    except GeocodeError as e:
        logger.error(f"Error setting up geocode service: {e}")
        return 2

    exit_code = 0
    try:
        result = run_command(service, RequestContext(timeout=args.timeout), args)
        print(dumps(result, indent=2))
    except (GeocodeError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        exit_code = 1

    try:
        service.clear()
    except GeocodeError as e:
        logger.error(f"Error cleaning up cache: {e}")
        exit_code = exit_code or 1
    finally:
        service.close()

    return exit_code
