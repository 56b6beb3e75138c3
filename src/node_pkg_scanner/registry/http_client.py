"""Async HTTP client utilities for fetching the compromised-packages list.

Provides a thin wrapper around ``httpx.AsyncClient`` with standardised
timeouts, user-agent headers, and error handling, so that remote fetch
behaviour is consistent and testable.

Raises ``RegistryFetchError`` (a subclass of ``NodePkgScannerError``) on any
transport failure or non-2xx response. A single attempt is made; retrying
is the caller's decision.
"""

from __future__ import annotations

import logging

import httpx

from node_pkg_scanner import __version__
from node_pkg_scanner.exceptions import RegistryFetchError

logger = logging.getLogger(__name__)

# Timeout for the list request (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = f"node-pkg-scanner/{__version__}"


async def fetch_text(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Fetch a URL and return the response body as text.

    Args:
        url: The URL to fetch.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (used by tests).

    Returns:
        Response body text.

    Raises:
        RegistryFetchError: On timeouts, transport errors or non-2xx status.
    """
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
            transport=transport,
        ) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            return resp.text
    except httpx.TimeoutException as exc:
        raise RegistryFetchError(f"Timeout fetching {url}") from exc
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        raise RegistryFetchError(
            f"HTTP {status}: {exc.response.reason_phrase} from {url}"
        ) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise RegistryFetchError(f"Request error for {url}: {exc}") from exc
