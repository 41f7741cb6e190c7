# geocode_tool/core/types/json.py

"""JSON type definitions for cache payloads and provider responses."""

# JSON Type Usage Guide:
# - JSONDict: a decoded JSON object (provider response body, cached Point payload)
# - JSONList: a decoded JSON array
# - JSONType: any decoded JSON value

type JSONPrimitive = str | int | float | bool | None

type JSONType = JSONDict | JSONList | JSONPrimitive
type JSONDict = dict[str, JSONType]
type JSONList = list[JSONType]

__all__ = ["JSONPrimitive", "JSONType", "JSONDict", "JSONList"]
