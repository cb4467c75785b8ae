"""Prober: one outbound GET reduced to an up/down signal.

Network failures are not errors here: they come back as the
PROBE_FAILURE sentinel and classify as down like any other bad status.
"""

from __future__ import annotations

import logging

import httpx

from .records import SystemStatus

logger = logging.getLogger(__name__)

PROBE_FAILURE = 500
DEFAULT_TIMEOUT = 10.0


def probe(url: str, timeout: float = DEFAULT_TIMEOUT) -> int:
    """GET `url` and return the response status code, or PROBE_FAILURE."""
    try:
        with httpx.Client(timeout=timeout, follow_redirects=True) as client:
            resp = client.get(url)
        return resp.status_code
    except httpx.TimeoutException:
        logger.warning("Probe %s timed out after %.0fs", url, timeout)
        return PROBE_FAILURE
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("Probe %s failed: %s: %s", url, type(e).__name__, e)
        return PROBE_FAILURE


def classify(code: int) -> SystemStatus:
    """2xx/3xx is up, everything else (including PROBE_FAILURE) is down."""
    if 200 <= code < 400:
        return SystemStatus.GREEN
    return SystemStatus.RED
