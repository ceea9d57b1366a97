"""
HTTP transport shared by REST engines and HTTP-based chat clients.
"""
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from .config import settings
from .errors import MalformedResponseError, TransportError


def get_httpx_client_kwargs() -> dict:
    """Get httpx client kwargs including proxy if configured"""
    kwargs = {"timeout": settings.HTTP_TIMEOUT}
    if settings.PROXY_URL:
        kwargs["proxy"] = settings.PROXY_URL
        logger.debug(f"Using proxy: {settings.PROXY_URL}")
    return kwargs


async def request_json(
    method: str,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    json: Any = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """
    Send one HTTP request and decode the JSON body.

    Args:
        method: HTTP method
        url: Absolute URL
        params: Query parameters
        headers: Extra request headers
        json: JSON request body
        transport: Optional httpx transport (tests pass httpx.MockTransport)

    Returns:
        Decoded JSON body

    Raises:
        TransportError: network failure or non-2xx status
        MalformedResponseError: body is not JSON
    """
    kwargs = get_httpx_client_kwargs()
    if transport is not None:
        kwargs["transport"] = transport

    logger.debug(f"{method} {url}")
    try:
        async with httpx.AsyncClient(**kwargs) as client:
            response = await client.request(method, url, params=params, headers=headers, json=json)
    except httpx.HTTPError as e:
        logger.error(f"Request to {url} failed: {e}")
        raise TransportError(None, str(e)) from e

    if response.is_error:
        logger.error(f"{url} returned {response.status_code}: {response.text[:200]}")
        raise TransportError(response.status_code, f"HTTP {response.status_code}: {response.reason_phrase}")

    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponseError(f"Invalid JSON from {url}: {e}") from e
