"""HTTP client for per-municipality result resources.

Uses httpx for async HTTP requests.  Each call performs exactly one request;
failures are reported as ``FetchError`` and never retried.
"""

from typing import Any

import httpx
from loguru import logger


class FetchError(Exception):
    """Raised when fetching a municipality's results fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


async def fetch_municipality_results(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout: float | None = None,
) -> dict[str, Any]:
    """Fetch the raw results document for one municipality.

    Args:
        client: Shared async HTTP client for the run.
        url: Resource URL built by ``build_resource_url``.
        timeout: Request timeout in seconds; ``None`` waits indefinitely.

    Returns:
        The decoded JSON object.

    Raises:
        FetchError: On transport errors, non-success status, or a body that
            is not a JSON object.
    """
    try:
        logger.debug("Fetching results from {}", url)
        response = await client.get(url, timeout=timeout)
        response.raise_for_status()
    except httpx.TimeoutException as exc:
        msg = f"Timeout fetching results from {url}"
        logger.error(msg)
        raise FetchError(msg) from exc
    except httpx.HTTPStatusError as exc:
        msg = f"HTTP {exc.response.status_code} fetching results from {url}"
        logger.error(msg)
        raise FetchError(msg, status_code=exc.response.status_code) from exc
    except httpx.HTTPError as exc:
        msg = f"HTTP error fetching results from {url}: {exc}"
        logger.error(msg)
        raise FetchError(msg) from exc

    try:
        document = response.json()
    except ValueError as exc:
        msg = f"Invalid JSON response from {url}"
        logger.error(msg)
        raise FetchError(msg) from exc

    if not isinstance(document, dict):
        msg = f"Expected a JSON object from {url}, got {type(document).__name__}"
        logger.error(msg)
        raise FetchError(msg)

    return document
