"""
Upstream failure types.

Anything the provider does that is neither a usable payload nor a confirmed
"not found" ends up as one of these. Single-item resolvers log and absorb
them; batch resolvers let them escape so the caller sees one failure for the
whole batch.
"""
from __future__ import annotations

from typing import Optional


class UpstreamError(Exception):
    """Base class for provider failures."""

    def __init__(self, message: str, *, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class UpstreamTransportError(UpstreamError):
    """Network failure or timeout before a response arrived."""


class UpstreamHTTPError(UpstreamError):
    """Provider answered with a non-2xx status that is not a recognised not-found."""

    def __init__(self, status_code: int, *, url: Optional[str] = None):
        super().__init__(f"HTTP {status_code} from provider", url=url)
        self.status_code = status_code


class UpstreamPayloadError(UpstreamError):
    """Response body was not JSON or did not have the expected shape."""


class UpstreamNotFoundError(UpstreamError):
    """A not-found outcome reached a batch whose policy does not absorb it."""
