# geocode_tool/adapters/cli/parser.py

"""Command-line argument parser configuration"""

# Standard library imports
from argparse import ArgumentParser

# Local imports
from geocode_tool.core.domain.enums import DistanceUnit


def create_argument_parser() -> ArgumentParser:
    """Create and configure argument parser with all CLI options"""
    parser = ArgumentParser(
        prog="geocode-tool",
        description="Geocode postal codes, addresses and coordinates with a local cache",
    )

    # Configuration
    parser.add_argument(
        "--config", default=None, help="Path to JSON configuration file (default: ./config.json)"
    )
    parser.add_argument("--timeout", type=float, default=None, help="Per-call timeout in seconds")

    # Cache options; unset flags fall back to the configuration file
    cache_group = parser.add_mutually_exclusive_group()
    cache_group.add_argument(
        "--cache", dest="cache", action="store_true", default=None, help="Enable the geocode cache"
    )
    cache_group.add_argument(
        "--no-cache", dest="cache", action="store_false", help="Disable the geocode cache"
    )
    parser.add_argument("--data-dir", default=None, help="Directory holding geo/ cache data")
    parser.add_argument("--bucket", default=None, help="Bucket used to back up the cache file")

    # Logging options
    parser.add_argument(
        "--log-file", default=None, help="Write a debug log to this file (default: no file log)"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (default: warnings only, -v: INFO, -vv: DEBUG)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    postal = subparsers.add_parser("postal", help="Geocode a postal code")
    postal.add_argument("postal_code", help="Postal code to resolve")
    postal.add_argument("--country", default="", help="Country code (default from config)")

    address = subparsers.add_parser("address", help="Geocode a structured address")
    address.add_argument("--street", default="")
    address.add_argument("--city", default="")
    address.add_argument("--state", default="")
    address.add_argument("--postal-code", default="")
    address.add_argument("--country", default="")

    reverse = subparsers.add_parser("reverse", help="Reverse geocode a coordinate pair")
    reverse.add_argument("latitude", type=float)
    reverse.add_argument("longitude", type=float)
    reverse.add_argument("--hint", default="", help="Prefer results whose address contains this")

    distance = subparsers.add_parser("distance", help="Geodesic distance between two points")
    distance.add_argument(
        "coordinates", type=float, nargs=4, metavar=("LAT1", "LNG1", "LAT2", "LNG2")
    )
    distance.add_argument(
        "--unit",
        default=DistanceUnit.KM.value,
        choices=[unit.value for unit in DistanceUnit],
        type=str.upper,
        help="Distance unit (default: KM)",
    )

    route = subparsers.add_parser("route", help="Directions between two addresses")
    route.add_argument("origin", help="Origin address")
    route.add_argument("destination", help="Destination address")

    matrix = subparsers.add_parser("matrix", help="Distance matrix between addresses")
    matrix.add_argument("--origins", nargs="+", required=True)
    matrix.add_argument("--destinations", nargs="+", required=True)

    return parser
