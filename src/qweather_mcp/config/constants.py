"""
Application Constants and Configuration Values

Centralized constants for provider endpoints, token lifetimes, tool
metadata and transport defaults. Organized by functional area for easy
maintenance and discovery.
"""

# ============= CONFIG FILE =============

# Top-level YAML section holding the provider credentials
CONFIG_SECTION = "WEATHER"

DEFAULT_CONFIG_PATH = "conf.yaml"

# ============= PROVIDER API =============

# Geocoding: free-text location -> provider city id
CITY_LOOKUP_PATH = "/geo/v2/city/lookup"

# Current conditions by city id
WEATHER_NOW_PATH = "/v7/weather/now"

# In-band success code returned in every provider JSON body
SUCCESS_CODE = "200"

# ============= TOKEN SIGNING =============

JWT_ALGORITHM = "EdDSA"

TOKEN_LIFETIME = 86400  # Provider accepts tokens valid for up to 24h
TOKEN_EXPIRY_MARGIN = 100  # Renew slightly before the provider would reject
ISSUED_AT_SKEW = 30  # Backdate iat to tolerate clock drift

# ============= MCP TOOL =============

TOOL_NAME = "getWeatherNow"

TOOL_DESCRIPTION = "获取指定地区实时天气"

LOCATION_DESCRIPTION = '查询的地区，格式为"城市 区域"，如"广州 天河"或仅"广州"'

# ============= TRANSPORTS =============

VALID_TRANSPORTS = ["stdio", "sse"]

SSE_PORT = 8013
