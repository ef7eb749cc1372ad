"""
Provider Credential Signer

Issues the short-lived bearer tokens the weather provider requires on
every request. A token is signed once with the configured Ed25519 key,
kept in memory and reused until shortly before it expires.

Concurrent callers that race past the expiry check may each sign a new
token; any freshly signed token is valid, so the last writer simply wins.

Classes:
    TokenCache: The current token and its expiry (epoch seconds)
    TokenSigner: Parses the key at construction and hands out tokens
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from fastmcp.utilities.logging import get_logger

from qweather_mcp.config.constants import (
    ISSUED_AT_SKEW,
    JWT_ALGORITHM,
    TOKEN_EXPIRY_MARGIN,
    TOKEN_LIFETIME,
)
from qweather_mcp.config.settings import WeatherSettings
from qweather_mcp.exceptions import SigningError


@dataclass
class TokenCache:
    token: str
    expires_at: int


def load_private_key(pem: str) -> Ed25519PrivateKey:
    """
    Parse a PEM-encoded Ed25519 private key.

    Raises:
        SigningError: If the PEM is unreadable or holds another key type
    """
    try:
        key = serialization.load_pem_private_key(pem.encode("utf-8"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningError(f"无法解析私钥: {e}") from e

    if not isinstance(key, Ed25519PrivateKey):
        raise SigningError(
            f"无法解析私钥: expected Ed25519 key, got {type(key).__name__}"
        )
    return key


class TokenSigner:
    """
    Signs and caches provider JWTs.

    The private key is parsed eagerly so that a bad key fails at startup,
    where the entry point can report it, instead of on the first request.
    """

    def __init__(
        self,
        settings: WeatherSettings,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize signer.

        Args:
            settings: Provider credentials (key, subject, key id)
            clock: Source of the current epoch time, in seconds

        Raises:
            SigningError: If the private key cannot be parsed
        """
        self.logger = get_logger("TokenSigner")
        self._key = load_private_key(settings.private_key)
        self._sub = settings.sub
        self._kid = settings.kid
        self._clock = clock
        self._cache: Optional[TokenCache] = None

    @property
    def cache(self) -> Optional[TokenCache]:
        return self._cache

    def get_token(self) -> str:
        """
        Return a valid bearer token, signing a new one only when needed.

        Returns:
            str: Encoded JWT

        Raises:
            SigningError: If signing fails. Callers do not convert it into a
                user message, so a tool call surfaces it as a tool error.
        """
        now = int(self._clock())
        cached = self._cache
        if cached is not None and now < cached.expires_at:
            self.logger.debug(f"Reusing cached token (expires at {cached.expires_at})")
            return cached.token

        expires_at = now + TOKEN_LIFETIME - TOKEN_EXPIRY_MARGIN
        claims = {
            "iat": now - ISSUED_AT_SKEW,
            "exp": expires_at,
            "sub": self._sub,
        }

        try:
            # kid is added next to the default alg/typ header fields
            token = jwt.encode(
                claims, self._key, algorithm=JWT_ALGORITHM, headers={"kid": self._kid}
            )
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise SigningError(f"无法签名token: {e}") from e

        self._cache = TokenCache(token=token, expires_at=expires_at)
        self.logger.debug(f"Signed new token (expires at {expires_at})")
        return token

    def invalidate(self) -> None:
        """Drop the cached token so the next call signs a fresh one."""
        self._cache = None
