"""
Current Weather Service

Fetches real-time conditions for a provider city id and renders them as
the plain-text report returned to MCP clients. Snapshots are never cached.
"""

from fastmcp.utilities.logging import get_logger
from pydantic import BaseModel, Field, ValidationError

from qweather_mcp.config.constants import SUCCESS_CODE, WEATHER_NOW_PATH
from qweather_mcp.exceptions import DecodeError, NotFoundError
from qweather_mcp.services.http_client import QWeatherClient


class WeatherNow(BaseModel):
    """Current conditions. Values are passed through as the provider sends them."""

    obs_time: str = Field(default="", alias="obsTime")
    temp: str = ""
    feels_like: str = Field(default="", alias="feelsLike")
    icon: str = ""
    text: str = ""
    wind_dir: str = Field(default="", alias="windDir")
    wind_scale: str = Field(default="", alias="windScale")
    wind_speed: str = Field(default="", alias="windSpeed")
    humidity: str = ""
    precip: str = ""


class WeatherResponse(BaseModel):
    code: str = ""
    update_time: str = Field(default="", alias="updateTime")
    now: WeatherNow = Field(default_factory=WeatherNow)


def format_report(location_name: str, weather: WeatherResponse) -> str:
    """
    Render a weather snapshot as a fixed-order multi-line report.

    Args:
        location_name: Name shown in the heading, as the user typed it
        weather: Decoded provider response

    Returns:
        str: Report text, every line newline-terminated
    """
    now = weather.now
    lines = [
        f"当前{location_name}的天气状况为：",
        f"温度：{now.temp}℃",
        f"体感温度：{now.feels_like}℃",
        f"天气状况：{now.text}",
        f"风向：{now.wind_dir}",
        f"风力等级：{now.wind_scale}",
        f"风速：{now.wind_speed}公里/小时",
        f"相对湿度：{now.humidity}%",
        f"过去1小时降水量：{now.precip}毫米",
        f"更新时间：{weather.update_time}",
    ]
    return "".join(f"{line}\n" for line in lines)


class WeatherService:
    """Fetches and formats current weather."""

    def __init__(self, client: QWeatherClient):
        self.logger = get_logger("WeatherService")
        self.client = client

    async def fetch_now(self, location_id: str) -> WeatherResponse:
        """
        Fetch current conditions for a city id.

        Args:
            location_id: Provider city id from the LocationService

        Returns:
            WeatherResponse: Decoded response with code "200"

        Raises:
            NotFoundError: If the provider code is not "200"
            DecodeError: If the body is not the expected JSON structure
            UpstreamError: If the request itself fails
        """
        body = await self.client.get(WEATHER_NOW_PATH, {"location": location_id})
        try:
            weather = WeatherResponse.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(str(e)) from e

        # HTTP 200 can still carry an error code in the body
        if weather.code != SUCCESS_CODE:
            self.logger.warning(
                f"Weather lookup for {location_id} returned code {weather.code!r}"
            )
            raise NotFoundError(f"未找到城市天气: {location_id}")

        self.logger.debug(f"Fetched weather for {location_id} (obs {weather.now.obs_time})")
        return weather

    async def fetch_and_format(self, location_id: str, location_name: str) -> str:
        weather = await self.fetch_now(location_id)
        return format_report(location_name, weather)
