# clawheal — Gateway Probe
# GET the gateway health endpoint and report the HTTP status code.
# Created: 2026-10-12

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

# Status reported when no HTTP response was received at all
NO_RESPONSE = 0


class GatewayProbe:
    """Single-shot HTTP health probe."""

    def __init__(self, url: str, timeout: float = 5.0) -> None:
        self.url = url
        self.timeout = timeout

    def probe(self) -> int:
        """Return the response status, or ``NO_RESPONSE`` on connection failure."""
        try:
            response = httpx.get(self.url, timeout=self.timeout)
            return response.status_code
        except httpx.HTTPError as exc:
            logger.debug("Gateway probe %s failed: %s", self.url, exc)
            return NO_RESPONSE
