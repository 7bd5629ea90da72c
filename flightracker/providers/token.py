"""Bearer-token cache for the OpenSky OAuth2 client-credentials flow."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
import time
from typing import Callable

import httpx

from flightracker.config import settings
from flightracker.providers.errors import AuthError

logger = logging.getLogger("flightracker.providers.token")

DEFAULT_TOKEN_LIFETIME = 1800


@dataclass(frozen=True)
class Token:
    """Opaque bearer string with its absolute expiry on the manager's clock."""

    access_token: str
    expires_at: float
    token_type: str = "Bearer"

    def is_valid(self, now: float, safety_margin: float) -> bool:
        return now < self.expires_at - safety_margin

    @property
    def authorization(self) -> str:
        return f"{self.token_type} {self.access_token}"


class TokenManager:
    """Single-slot token cache with single-flight refresh.

    Concurrent ``obtain()`` calls made while no valid token is cached all wait
    on one shared exchange instead of issuing their own.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        client_id: str | None = None,
        client_secret: str | None = None,
        token_url: str | None = None,
        safety_margin: float | None = None,
        timeout: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.http_client = http_client
        self.client_id = client_id or settings.opensky_client_id
        self.client_secret = client_secret or settings.opensky_client_secret
        self.token_url = token_url or settings.opensky_token_url
        self.safety_margin = (
            safety_margin if safety_margin is not None else settings.token_safety_margin
        )
        self.timeout = timeout or settings.opensky_timeout
        self._clock = clock
        self._token: Token | None = None
        self._pending: asyncio.Future[Token] | None = None

    @property
    def token(self) -> Token | None:
        return self._token

    async def obtain(self) -> Token:
        """Return a valid token, exchanging credentials only when needed."""

        token = self._token
        if token is not None and token.is_valid(self._clock(), self.safety_margin):
            return token

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._exchange())
            self._pending.add_done_callback(self._clear_pending)
        # A cancelled waiter must not cancel the exchange the others share.
        return await asyncio.shield(self._pending)

    def invalidate(self) -> None:
        """Drop the cached token so the next ``obtain()`` re-authenticates."""

        if self._token is not None:
            logger.info("Invalidating cached OpenSky token")
        self._token = None

    def _clear_pending(self, future: asyncio.Future[Token]) -> None:
        if self._pending is future:
            self._pending = None
        if not future.cancelled():
            # Mark the failure as retrieved when every waiter has gone away.
            future.exception()

    async def _exchange(self) -> Token:
        if not self.client_id or not self.client_secret:
            logger.error("OpenSky client credentials are not configured")
            raise AuthError("OpenSky client credentials are not configured")

        data = {
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }
        issued_at = self._clock()
        logger.info("Requesting new OpenSky access token")
        try:
            response = await self.http_client.post(
                self.token_url, data=data, timeout=self.timeout
            )
        except httpx.TimeoutException as exc:
            logger.error("OpenSky token request timed out: %s", exc)
            raise AuthError("OpenSky token request timed out") from exc
        except httpx.RequestError as exc:
            logger.error("OpenSky token request failed: %s", exc)
            raise AuthError("OpenSky token request failed") from exc

        if not response.is_success:
            logger.error(
                "OpenSky token endpoint returned error: status=%s body=%s",
                response.status_code,
                response.text[:200],
            )
            raise AuthError(
                f"Token request failed with status {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Failed to parse OpenSky token response: %s", exc)
            raise AuthError("Token response is not valid JSON") from exc

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not access_token:
            logger.error("OpenSky token response did not include an access token")
            raise AuthError("Token response did not include an access token")

        lifetime = payload.get("expires_in")
        if lifetime is None:
            lifetime = DEFAULT_TOKEN_LIFETIME
        try:
            lifetime = float(lifetime)
        except (TypeError, ValueError) as exc:
            logger.error("OpenSky token response has an invalid expires_in: %r", lifetime)
            raise AuthError("Token response has an invalid expires_in") from exc

        token = Token(
            access_token=access_token,
            expires_at=issued_at + lifetime,
            token_type=payload.get("token_type") or "Bearer",
        )
        self._token = token
        logger.info("OpenSky access token obtained (expires in %ss)", lifetime)
        return token


__all__ = ["Token", "TokenManager"]
