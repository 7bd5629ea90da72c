"""Upstream provider clients for telemetry and route lookup."""

from .adsbdb import RouteResolver, format_airport, usable_callsign
from .errors import AuthError, NetworkError, ProviderError, UpstreamError
from .opensky import SnapshotFetcher, normalize_state
from .token import Token, TokenManager

__all__ = [
    "AuthError",
    "NetworkError",
    "ProviderError",
    "RouteResolver",
    "SnapshotFetcher",
    "Token",
    "TokenManager",
    "UpstreamError",
    "format_airport",
    "normalize_state",
    "usable_callsign",
]
