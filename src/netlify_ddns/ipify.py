"""
Public IPv4 discovery.

This module asks the ipify service for the host's public IPv4 address.
"""

from __future__ import annotations

import asyncio
import ipaddress
import logging
from typing import TYPE_CHECKING

import httpx
from starlette import status as st_status

from netlify_ddns.errors import IPDiscoveryError

if TYPE_CHECKING:
    from typing import Final


IPIFY_URL: Final[str] = "https://api.ipify.org?format=text"

# Deadline for the whole lookup in seconds
MAX_DELAY: Final[float] = 15.0


logger = logging.getLogger(__name__)


def ipify_client() -> httpx.AsyncClient:
    """
    Build an HTTP client for the lookup.

    Per-request timeouts are disabled; the lookup deadline is the only bound.

    Returns
    -------
    httpx.AsyncClient
        A new client. The caller must close it.
    """
    return httpx.AsyncClient(timeout=None)


async def discover_ipv4(
    client: httpx.AsyncClient | None = None,
    *,
    url: str = IPIFY_URL,
    timeout: float = MAX_DELAY,
) -> str:
    """
    Fetch the public IPv4 address of this host.

    The response body is returned as-is once it is confirmed to be an IPv4
    literal.

    Parameters
    ----------
    client : httpx.AsyncClient | None, optional
        HTTP client to use. A temporary client is created when omitted.
    url : str, optional
        Address of the plain-text lookup endpoint.
    timeout : float, optional
        Deadline in seconds; the request is cancelled when it elapses.

    Returns
    -------
    str
        The public IPv4 address.

    Raises
    ------
    IPDiscoveryError
        If the request fails, times out or returns something other than
        an IPv4 address.
    """
    if client is None:
        async with ipify_client() as own_client:
            return await discover_ipv4(own_client, url=url, timeout=timeout)

    try:
        async with asyncio.timeout(timeout):
            response = await client.get(url)
    except TimeoutError as e:
        msg = f"request to {url} timed out after {timeout:g}s"
        raise IPDiscoveryError(msg) from e
    except httpx.HTTPError as e:
        msg = f"request to {url} failed: {e}"
        raise IPDiscoveryError(msg) from e

    logger.debug("[ipify] GET %s -> %d", url, response.status_code)

    if response.status_code != st_status.HTTP_200_OK:
        msg = f"unexpected status {response.status_code} from {url}"
        raise IPDiscoveryError(msg)

    ipv4 = response.text
    try:
        ipaddress.IPv4Address(ipv4)
    except ValueError as e:
        msg = f"{url} returned a value that is not an IPv4 address: {ipv4!r}"
        raise IPDiscoveryError(msg) from e

    return ipv4
