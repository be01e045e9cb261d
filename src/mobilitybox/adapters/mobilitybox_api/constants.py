"""Constants for the Mobilitybox API adapter.

API: https://api.themobilitybox.com/v1
Authentication: optional bearer token; the server may also issue an opaque
session token that is echoed back on subsequent requests.
"""

DEFAULT_BASE_URL = "https://api.themobilitybox.com/v1"

# Endpoint paths, relative to the base URL
STATIONS_SEARCH_BY_NAME_PATH = "/stations/search_by_name.json"
STATIONS_SEARCH_BY_POSITION_PATH = "/stations/search_by_position.json"
STATIONS_SEARCH_BY_ID_PATH = "/stations/search_by_id.json"
ATTRIBUTIONS_PATH = "/attributions.json"
TRIP_PATH_TEMPLATE = "/trips/{trip_id}.json"
TRIPS_SEARCH_BY_CHARACTERISTICS_PATH = "/trips/search_by_characteristics.json"
DEPARTURES_PATH = "/departures.json"

# Vector tile URL templates; {z}, {x} and {y} are filled in by the map renderer
STATION_MAP_TILES_PATH = "/station_map/{z}-{x}-{y}.mvt"
TRANSIT_MAP_TILES_PATH = "/transit_map/{z}-{x}-{y}.mvt"

DEFAULT_ID_TYPE = "mobilitybox"

# HTTP headers
SESSION_TOKEN_HEADER = "Session-Token"
DEFAULT_HEADERS = {
    "Accept": "application/json",
}

# Characters of an error body kept in logs and exceptions
ERROR_BODY_MAX_LENGTH = 500
