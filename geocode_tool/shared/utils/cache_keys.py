# geocode_tool/shared/utils/cache_keys.py

"""Canonical cache key construction for geocoding lookups"""

# Standard library imports
from urllib.parse import quote
from urllib.parse import unquote

# Raw ":" never survives normalize_cache_key (it is percent-encoded), so keys
# built with it cannot collide with normalized string keys.
LAT_LONG_KEY_PREFIX = "latlng"
LAT_LONG_KEY_SEPARATOR = ":"
UNSET_LAT_LONG_KEY = f"{LAT_LONG_KEY_PREFIX}{LAT_LONG_KEY_SEPARATOR}unset"


def normalize_cache_key(raw: str) -> str:
    """Normalize a lookup string into a cache key

    Algorithm:
    1. Percent-decode, so already-normalized keys map to themselves
    2. Remove all whitespace
    3. Lowercase
    4. Percent-encode everything outside the unreserved set

    Args:
        raw: Postal code, composed address string or any other lookup text

    Returns:
        Canonical key; normalize_cache_key(normalize_cache_key(x)) equals
        normalize_cache_key(x)

    Examples:
        >>> normalize_cache_key(" 92612 ")
        '92612'
        >>> normalize_cache_key("2 Maxwell Ct San Francisco CA")
        '2maxwellctsanfranciscoca'
        >>> normalize_cache_key("Main St, #4")
        'mainst%2C%234'
    """
    if not raw:
        return ""
    decoded = unquote(raw)
    compact = "".join(decoded.split()).lower()
    return quote(compact, safe="")


def lat_long_cache_key(latitude: float, longitude: float, hint: str = "") -> str:
    """Build the cache key for a latitude/longitude pair and optional hint

    Coordinates are formatted to 6 decimal digits with "." spelled "dot" and
    "-" spelled "min". If either coordinate is exactly zero the fixed
    UNSET_LAT_LONG_KEY is used instead, which also covers real points on the
    equator or prime meridian.

    A hint is appended percent-encoded, with case and whitespace preserved.

    Examples:
        >>> lat_long_cache_key(33.66, -117.83)
        'latlng:33dot660000:min117dot830000'
        >>> lat_long_cache_key(0.0, 12.5)
        'latlng:unset'
        >>> lat_long_cache_key(33.66, -117.83, "Irvine, CA")
        'latlng:33dot660000:min117dot830000:Irvine%2C%20CA'
    """

    def encode(value: float) -> str:
        return f"{value:.6f}".replace(".", "dot").replace("-", "min")

    if latitude == 0 or longitude == 0:
        key = UNSET_LAT_LONG_KEY
    else:
        key = LAT_LONG_KEY_SEPARATOR.join(
            [LAT_LONG_KEY_PREFIX, encode(latitude), encode(longitude)]
        )

    if hint:
        key = f"{key}{LAT_LONG_KEY_SEPARATOR}{quote(hint, safe='')}"
    return key
