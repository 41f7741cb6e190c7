# geocode_tool/application/services/_distance.py

"""Geodesic distance between two points"""

# Third party imports
from geopy.distance import geodesic

# Local imports
from geocode_tool.core.domain.enums import DistanceUnit
from geocode_tool.core.domain.errors import InvalidLatLngError
from geocode_tool.core.domain.errors import InvalidUnitError
from geocode_tool.core.domain.models import Point


def parse_distance_unit(unit: DistanceUnit | str) -> DistanceUnit:
    """Accept a DistanceUnit or its case-insensitive string value

    Raises:
        InvalidUnitError: unit is not recognized
    """
    if isinstance(unit, DistanceUnit):
        return unit
    if isinstance(unit, str):
        try:
            return DistanceUnit(unit.strip().upper())
        except ValueError:
            pass
    raise InvalidUnitError(unit)


def compute_distance(unit: DistanceUnit | str, point_a: Point, point_b: Point) -> float:
    """Ellipsoidal (WGS-84) inverse distance between two points

    Args:
        unit: Output unit
        point_a: First point
        point_b: Second point

    Returns:
        Distance in the requested unit

    Raises:
        InvalidLatLngError: either point has a zero coordinate
        InvalidUnitError: unit is not recognized
    """
    if not point_a.is_valid() or not point_b.is_valid():
        raise InvalidLatLngError()
    distance_unit = parse_distance_unit(unit)

    distance = geodesic(
        (point_a.latitude, point_a.longitude), (point_b.latitude, point_b.longitude)
    )
    match distance_unit:
        case DistanceUnit.KM:
            return float(distance.km)
        case DistanceUnit.MILES:
            return float(distance.miles)
        case DistanceUnit.METERS:
            return float(distance.meters)
        case DistanceUnit.FEET:
            return float(distance.feet)
