"""
Weather MCP Server

Exposes a single tool, getWeatherNow, that resolves a location name to a
provider city id and returns the current conditions as plain text.

Upstream failures never surface as protocol errors: they are turned into
an explanatory message so the calling agent always gets text back. Only a
missing or non-string ``location`` argument is rejected outright, by
argument validation at the tool boundary.
"""

from typing import Annotated, Optional

import httpx
from fastmcp import Context, FastMCP
from fastmcp.utilities.logging import get_logger
from pydantic import Field

from qweather_mcp.app_context import AppContext, build_app_context, make_lifespan
from qweather_mcp.config.constants import (
    LOCATION_DESCRIPTION,
    TOOL_DESCRIPTION,
    TOOL_NAME,
)
from qweather_mcp.config.settings import ServerSettings
from qweather_mcp.exceptions import DecodeError, NotFoundError, UpstreamError

# Initialize logger for server lifecycle events
logger = get_logger(__name__)

LOCATION_NOT_FOUND = "输入的地区不存在，无法提供天气预报"
WEATHER_FETCH_FAILED = "获取天气信息失败"
WEATHER_PARSE_FAILED = "解析天气数据失败"


async def lookup_weather(app: AppContext, location: str) -> str:
    """
    Resolve a location and report its current weather.

    Args:
        app: Wired services
        location: Location text, e.g. "广州 天河" or "广州"

    Returns:
        str: Weather report, or a message explaining why there is none
    """
    try:
        city_id = await app.locations.resolve(location)
    except (UpstreamError, DecodeError, NotFoundError) as e:
        logger.info(f"Could not resolve {location!r}: {e}")
        return f"{LOCATION_NOT_FOUND}: {e}"

    try:
        return await app.weather.fetch_and_format(city_id, location)
    except UpstreamError as e:
        logger.error(f"Weather request for {location!r} ({city_id}) failed: {e}")
        return f"{WEATHER_FETCH_FAILED}: {e}"
    except DecodeError as e:
        logger.error(f"Weather payload for {location!r} ({city_id}) is invalid: {e}")
        return f"{WEATHER_PARSE_FAILED}: {e}"
    except NotFoundError:
        return LOCATION_NOT_FOUND


async def get_weather_now(
    location: Annotated[str, Field(description=LOCATION_DESCRIPTION)],
    ctx: Context = None,
) -> str:
    app: AppContext = ctx.request_context.lifespan_context
    return await lookup_weather(app, location)


# ============= MCP SERVER INITIALIZATION =============


def create_server(
    settings: ServerSettings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastMCP:
    """
    Build the FastMCP server.

    Args:
        settings: Loaded server settings
        transport: Optional httpx transport for provider calls

    Returns:
        FastMCP: Server with the weather tool registered

    Raises:
        SigningError: If the configured private key cannot be parsed
    """
    app_context = build_app_context(settings, transport=transport)

    mcp = FastMCP(
        name=settings.server_name,
        version=settings.server_version,
        instructions="You are a weather assistant",
        lifespan=make_lifespan(app_context),
    )
    mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)(get_weather_now)
    return mcp
