"""Failure types raised by upstream provider clients."""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for failures talking to an upstream provider."""


class AuthError(ProviderError):
    """Token exchange failed or returned no access token."""


class UpstreamError(ProviderError):
    """A provider answered with a non-success status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(message or f"Upstream provider returned HTTP {status_code}")
        self.status_code = status_code


class NetworkError(ProviderError):
    """Transport failure, timeout, or an undecodable provider payload."""


__all__ = ["AuthError", "NetworkError", "ProviderError", "UpstreamError"]
