"""
Weather Provider HTTP Client

Authenticated GET requests against the provider API with:
- Bearer token from the TokenSigner on every call
- Timeout management from HttpSettings
- Uniform mapping of httpx failures onto the service error taxonomy

Each request is attempted exactly once; failures are logged and raised
to the caller unchanged.

Classes:
    QWeatherClient: Issues signed GET requests and returns raw body bytes
"""

from typing import Mapping, Optional

import httpx
from fastmcp.utilities.logging import get_logger

from qweather_mcp.config.settings import ServerSettings
from qweather_mcp.exceptions import BodyReadError, HTTPStatusError, TransportError
from qweather_mcp.services.token_service import TokenSigner


class QWeatherClient:
    """
    HTTP client for the weather provider API.

    A fresh httpx.AsyncClient is opened per call, so the client itself
    holds no connection state beyond its configuration.
    """

    def __init__(
        self,
        settings: ServerSettings,
        signer: TokenSigner,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize provider client.

        Args:
            settings: Server settings (base URL and HTTP timeout are used)
            signer: Token source for the Authorization header
            transport: Optional httpx transport, e.g. httpx.MockTransport
        """
        self.logger = get_logger(self.__class__.__name__)
        self.base_url = settings.weather.base_url
        self.timeout = settings.http.timeout
        self.signer = signer
        self._transport = transport

    @property
    def client_config(self) -> dict:
        """
        Get standardized HTTP client configuration.

        Returns:
            dict: Configuration for httpx.AsyncClient
        """
        config = {
            "timeout": self.timeout,
            "follow_redirects": True,  # Handle redirects automatically
        }
        if self._transport is not None:
            config["transport"] = self._transport
        return config

    async def get(self, path: str, params: Mapping[str, str]) -> bytes:
        """
        Send an authenticated GET request and read the full body.

        Args:
            path: API path appended to the configured base URL
            params: Query parameters

        Returns:
            bytes: Raw response body

        Raises:
            TransportError: If the request could not be sent or timed out
            HTTPStatusError: If the provider answered with a non-200 status
            BodyReadError: If the body could not be read
            SigningError: If no token could be signed
        """
        url = f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {self.signer.get_token()}"}

        try:
            async with httpx.AsyncClient(**self.client_config) as client:
                async with client.stream(
                    "GET", url, params=dict(params), headers=headers
                ) as response:
                    if response.status_code != 200:
                        self.logger.error(
                            f"GET {path} returned HTTP {response.status_code}"
                        )
                        raise HTTPStatusError(
                            f"HTTP错误，状态码: {response.status_code}",
                            status_code=response.status_code,
                        )

                    try:
                        body = await response.aread()
                    except httpx.HTTPError as e:
                        self.logger.error(f"Failed to read body of GET {path}: {e}")
                        raise BodyReadError(f"读取响应失败: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.error(f"GET {path} failed: {e}")
            raise TransportError(f"请求失败: {e}") from e

        self.logger.debug(f"GET {path} -> {len(body)} bytes")
        return body
