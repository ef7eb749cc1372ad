"""
Location Resolver

Maps a free-text place name ("广州 天河", "北京") to the provider's city
id using the geocoding lookup endpoint. The provider ranks candidates by
relevance and the first one is taken as the answer.
"""

from typing import List

from fastmcp.utilities.logging import get_logger
from pydantic import BaseModel, ValidationError, field_validator

from qweather_mcp.config.constants import CITY_LOOKUP_PATH, SUCCESS_CODE
from qweather_mcp.exceptions import DecodeError, NotFoundError
from qweather_mcp.services.http_client import QWeatherClient


class CityLocation(BaseModel):
    """One geocoding candidate."""

    name: str = ""
    id: str = ""
    lat: str = ""
    lon: str = ""
    adm2: str = ""  # district / prefecture
    adm1: str = ""  # province / region
    country: str = ""


class CityLookupResponse(BaseModel):
    code: str = ""
    location: List[CityLocation] = []

    @field_validator("location", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value


class LocationService:
    """Resolves location text to provider city ids."""

    def __init__(self, client: QWeatherClient):
        self.logger = get_logger("LocationService")
        self.client = client

    async def lookup(self, text: str) -> List[CityLocation]:
        """
        Query the geocoding endpoint.

        Args:
            text: Free-text location

        Returns:
            List[CityLocation]: Candidates in provider order, possibly empty

        Raises:
            NotFoundError: If the provider code is not "200"
            DecodeError: If the body is not the expected JSON structure
            UpstreamError: If the request itself fails
        """
        body = await self.client.get(CITY_LOOKUP_PATH, {"location": text})
        try:
            response = CityLookupResponse.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(f"解析城市数据失败: {e}") from e

        if response.code != SUCCESS_CODE:
            self.logger.warning(f"City lookup for {text!r} returned code {response.code!r}")
            raise NotFoundError(f"未找到城市: {text}")
        return response.location

    async def resolve(self, text: str) -> str:
        """
        Resolve location text to the id of the best-ranked candidate.

        Args:
            text: Free-text location

        Returns:
            str: Provider city id

        Raises:
            NotFoundError: If the provider code is not "200" or no candidate matched
            DecodeError: If the body is not the expected JSON structure
            UpstreamError: If the request itself fails
        """
        candidates = await self.lookup(text)
        if not candidates:
            self.logger.warning(f"No city found for {text!r}")
            raise NotFoundError(f"未找到城市: {text}")

        city = candidates[0]
        self.logger.debug(
            f"Resolved {text!r} -> {city.id} ({city.adm1} {city.adm2} {city.name})"
        )
        return city.id
