# geocode_tool/core/domain/models.py

"""Pydantic models for points, address queries and route legs"""

# Standard library imports
from datetime import timedelta

# Third party imports
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

DOMAIN_MODEL_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    str_strip_whitespace=True,
)


class Point(BaseModel):
    """A resolved location

    (0, 0) doubles as the "unset" sentinel, so a point on the equator or the
    prime meridian is reported as invalid.
    """

    model_config = DOMAIN_MODEL_CONFIG

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    formatted_address: str = Field(default="")

    def is_valid(self) -> bool:
        """True when both coordinates are non-zero"""
        return self.latitude != 0 and self.longitude != 0

    def lat_lng_string(self) -> str:
        """Provider query form, e.g. "33.660000,-117.830000" """
        return f"{self.latitude:f},{self.longitude:f}"


class AddressQuery(BaseModel):
    """Structured address used for forward geocoding"""

    model_config = DOMAIN_MODEL_CONFIG

    street: str = ""
    city: str = ""
    postal_code: str = ""
    state: str = ""
    country: str = ""

    def address_string(self) -> str:
        """Join the non-empty components with single spaces

        Order is street, city, state, postal code, country. The result is both
        the free-form provider query and the input to the cache key.
        """
        parts = [self.street, self.city, self.state, self.postal_code, self.country]
        return " ".join(part for part in parts if part)

    def components(self) -> dict[str, str]:
        """Provider component filter for the non-empty fields"""
        mapping = {
            "street_address": self.street,
            "locality": self.city,
            "administrative_area_level_1": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
        }
        return {name: value for name, value in mapping.items() if value}


class RouteLeg(BaseModel):
    """A single origin/destination leg from a directions or matrix response"""

    model_config = DOMAIN_MODEL_CONFIG

    start: str
    end: str
    duration: timedelta = Field(default=timedelta(0))
    distance_meters: int = Field(default=0, ge=0)
