from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

import httpx
from fastmcp import FastMCP
from fastmcp.utilities.logging import get_logger

from qweather_mcp.config.settings import ServerSettings
from qweather_mcp.services.http_client import QWeatherClient
from qweather_mcp.services.location_service import LocationService
from qweather_mcp.services.token_service import TokenSigner
from qweather_mcp.services.weather_service import WeatherService

logger = get_logger(__name__)


@dataclass
class AppContext:
    settings: ServerSettings
    signer: TokenSigner
    client: QWeatherClient
    locations: LocationService
    weather: WeatherService


def build_app_context(
    settings: ServerSettings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AppContext:
    """
    Wire up all services for the weather server.

    Raises:
        SigningError: If the configured private key cannot be parsed
    """
    signer = TokenSigner(settings.weather)
    client = QWeatherClient(settings, signer, transport=transport)
    return AppContext(
        settings=settings,
        signer=signer,
        client=client,
        locations=LocationService(client),
        weather=WeatherService(client),
    )


def make_lifespan(app_context: AppContext):
    """Lifespan handing the prebuilt AppContext to every tool call."""

    @asynccontextmanager
    async def app_lifespan(mcp: FastMCP):
        logger.info(f"🚀 Starting MCP Server {mcp.name}")
        try:
            yield app_context
        finally:
            logger.info(f"👋 Shutting down MCP Server {mcp.name}")

    return app_lifespan
