"""Shared fixtures: a throwaway Ed25519 key, settings and a fake provider."""

import copy
import json
from typing import Any, Dict, List, Tuple, Union

import httpx
import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
)

from qweather_mcp.config.constants import CITY_LOOKUP_PATH, WEATHER_NOW_PATH
from qweather_mcp.config.settings import ServerSettings, WeatherSettings

BASE_URL = "https://api.example.test"

GEO_GUANGZHOU_TIANHE = {
    "code": "200",
    "location": [
        {
            "name": "天河",
            "id": "101280101",
            "lat": "23.12",
            "lon": "113.36",
            "adm2": "广州",
            "adm1": "广东省",
            "country": "中国",
        },
        {
            "name": "天河",
            "id": "101290909",
            "lat": "25.01",
            "lon": "102.71",
            "adm2": "昆明",
            "adm1": "云南省",
            "country": "中国",
        },
    ],
}

WEATHER_NOW_OK = {
    "code": "200",
    "updateTime": "2024-05-01T12:00+08:00",
    "now": {
        "obsTime": "2024-05-01T11:50+08:00",
        "temp": "23",
        "feelsLike": "25",
        "icon": "101",
        "text": "多云",
        "windDir": "东南风",
        "windScale": "2",
        "windSpeed": "9",
        "humidity": "78",
        "precip": "0.0",
    },
}

Payload = Union[Dict[str, Any], bytes, Exception, httpx.Response]


class FakeProvider:
    """Routes provider paths to canned payloads and records every request."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: Dict[str, Tuple[int, Payload]] = {
            CITY_LOOKUP_PATH: (200, GEO_GUANGZHOU_TIANHE),
            WEATHER_NOW_PATH: (200, WEATHER_NOW_OK),
        }

    def set(self, path: str, payload: Payload, status: int = 200) -> None:
        self.routes[path] = (status, payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path not in self.routes:
            return httpx.Response(404, text="no route")

        status, payload = self.routes[request.url.path]
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, httpx.Response):
            return payload
        if isinstance(payload, bytes):
            return httpx.Response(status, content=payload)
        return httpx.Response(
            status,
            content=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(scope="session")
def private_key() -> Ed25519PrivateKey:
    return Ed25519PrivateKey.generate()


@pytest.fixture(scope="session")
def private_key_pem(private_key) -> str:
    return private_key.private_bytes(
        Encoding.PEM, PrivateFormat.PKCS8, NoEncryption()
    ).decode("utf-8")


@pytest.fixture
def weather_settings(private_key_pem) -> WeatherSettings:
    return WeatherSettings(
        privateKey=private_key_pem, baseURL=BASE_URL, sub="test", kid="k1"
    )


@pytest.fixture
def server_settings(weather_settings) -> ServerSettings:
    return ServerSettings(weather=weather_settings)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def geo_payload() -> Dict[str, Any]:
    return copy.deepcopy(GEO_GUANGZHOU_TIANHE)


@pytest.fixture
def weather_payload() -> Dict[str, Any]:
    return copy.deepcopy(WEATHER_NOW_OK)


class FailingStream(httpx.AsyncByteStream):
    """Body stream that breaks after the status line has been received."""

    async def __aiter__(self):
        raise httpx.ReadError("connection reset by peer")
        yield b""  # pragma: no cover


@pytest.fixture
def broken_body_response() -> httpx.Response:
    return httpx.Response(200, stream=FailingStream())
