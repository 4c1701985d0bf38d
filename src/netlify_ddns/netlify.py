"""
Netlify DNS API client.

This module implements the three Netlify DNS operations the updater needs:
listing, creating and deleting records in a zone. The API has no in-place
update, so callers replace a record by deleting and re-creating it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx
from pydantic import TypeAdapter, ValidationError
from starlette import status as st_status

from netlify_ddns.errors import APIError
from netlify_ddns.models import DNSRecord

if TYPE_CHECKING:
    from collections.abc import Generator
    from types import TracebackType
    from typing import Final, Self

    from netlify_ddns.models import DNSRecordCreate


# Netlify API base URL
NETLIFY_API_BASE: Final[str] = "https://api.netlify.com/api/v1"

USER_AGENT: Final[str] = "NetlifyDDNS"

# HTTP timeout in seconds
HTTP_TIMEOUT: Final[float] = 30.0

# Total attempts per call, including the first one
DEFAULT_RETRY_ATTEMPTS: Final[int] = 3

# Base delay in seconds for exponential backoff between attempts
DEFAULT_BACKOFF: Final[float] = 0.5

# Upper bound in seconds for a server-supplied Retry-After
MAX_RETRY_DELAY: Final[float] = 30.0

IDEMPOTENT_METHODS: Final[frozenset[str]] = frozenset({"GET", "DELETE"})


logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(list[DNSRecord])


class NetlifyAuth(httpx.Auth):
    """
    Attach Netlify credentials to every outgoing request.

    Sets the `Authorization: Bearer <token>` and `User-Agent` headers.
    """

    def __init__(self, token: str) -> None:
        """
        Initialize NetlifyAuth.

        Parameters
        ----------
        token : str
            Netlify personal access token.
        """
        self._token = token

    def auth_flow(
        self,
        request: httpx.Request,
    ) -> Generator[httpx.Request, httpx.Response, None]:
        """Set the auth and user-agent headers on the request."""
        request.headers["User-Agent"] = USER_AGENT
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request


def _is_retryable(method: str, status_code: int) -> bool:
    """Whether a response status warrants another attempt."""
    if status_code == st_status.HTTP_429_TOO_MANY_REQUESTS:
        return True
    return (
        method in IDEMPOTENT_METHODS
        and status_code >= st_status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def _error_message(response: httpx.Response) -> str:
    """Extract the error message Netlify puts in a failed response."""
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return response.text or response.reason_phrase


class NetlifyClient:
    """
    Netlify DNS API client.

    Use as an async context manager so the underlying HTTP connection
    pool is closed on exit. Failed calls are retried inside the client;
    a call that still fails raises `APIError`.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = NETLIFY_API_BASE,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        backoff: float = DEFAULT_BACKOFF,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize NetlifyClient.

        Parameters
        ----------
        token : str
            Netlify personal access token.
        base_url : str, optional
            API base URL.
        retry_attempts : int, optional
            Total attempts per call, including the first one.
        backoff : float, optional
            Base delay in seconds for exponential backoff.
        transport : httpx.AsyncBaseTransport | None, optional
            Custom transport (used by tests).
        """
        self.retry_attempts = max(1, retry_attempts)
        self.backoff = backoff
        self._client = httpx.AsyncClient(
            base_url=base_url,
            auth=NetlifyAuth(token),
            timeout=HTTP_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> Self:
        """Enter the client context."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the underlying HTTP client."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    def _retry_delay(self, attempt: int, response: httpx.Response | None) -> float:
        """
        Compute how long to wait before the next attempt.

        Parameters
        ----------
        attempt : int
            Zero-based index of the attempt that just failed.
        response : httpx.Response | None
            The failed response, if any.

        Returns
        -------
        float
            Delay in seconds.
        """
        if response is not None:
            retry_after = response.headers.get("retry-after", "")
            if retry_after.isdigit():
                return min(float(retry_after), MAX_RETRY_DELAY)
        return self.backoff * (2**attempt)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, str | int] | None = None,
    ) -> httpx.Response:
        """
        Send a request, retrying transient failures.

        Parameters
        ----------
        method : str
            HTTP method.
        path : str
            Path relative to the API base URL.
        json : dict[str, str | int] | None, optional
            JSON request body.

        Returns
        -------
        httpx.Response
            A successful response.

        Raises
        ------
        APIError
            If the last attempt fails.
        """
        for attempt in range(self.retry_attempts):
            is_last = attempt == self.retry_attempts - 1

            try:
                response = await self._client.request(method, path, json=json)
            except httpx.TransportError as e:
                if is_last or method not in IDEMPOTENT_METHODS:
                    msg = f"{method} {path} failed: {e}"
                    raise APIError(msg) from e
                delay = self._retry_delay(attempt, None)
                logger.warning(
                    "[netlify] %s %s failed: '%s', retrying in %.1fs",
                    method,
                    path,
                    e,
                    delay,
                )
                await asyncio.sleep(delay)
                continue

            logger.debug("[netlify] %s %s -> %d", method, path, response.status_code)

            if response.is_success:
                return response

            if is_last or not _is_retryable(method, response.status_code):
                msg = (
                    f"{method} {path} returned {response.status_code}: "
                    f"{_error_message(response)}"
                )
                raise APIError(msg, status_code=response.status_code)

            delay = self._retry_delay(attempt, response)
            logger.warning(
                "[netlify] %s %s -> %d, retrying in %.1fs",
                method,
                path,
                response.status_code,
                delay,
            )
            await asyncio.sleep(delay)

        # retry_attempts >= 1, so the loop always returns or raises
        msg = f"{method} {path} was not attempted"
        raise APIError(msg)

    async def list_records(self, zone_id: str) -> list[DNSRecord]:
        """
        List all DNS records in a zone.

        Parameters
        ----------
        zone_id : str
            The Netlify zone ID.

        Returns
        -------
        list[DNSRecord]
            Records in provider order.

        Raises
        ------
        APIError
            If the request fails or the response cannot be parsed.
        """
        path = f"/dns_zones/{zone_id}/dns_records"
        response = await self._request("GET", path)
        logger.debug("[netlify] Response: %s", response.text)

        try:
            return _records_adapter.validate_json(response.content)
        except ValidationError as e:
            msg = f"GET {path} returned an unexpected body: {e}"
            raise APIError(msg, status_code=response.status_code) from e

    async def create_record(self, zone_id: str, record: DNSRecordCreate) -> DNSRecord:
        """
        Create a DNS record in a zone.

        Parameters
        ----------
        zone_id : str
            The Netlify zone ID.
        record : DNSRecordCreate
            The record to create.

        Returns
        -------
        DNSRecord
            The created record.

        Raises
        ------
        APIError
            If the request fails or the response cannot be parsed.
        """
        path = f"/dns_zones/{zone_id}/dns_records"
        response = await self._request("POST", path, json=record.to_payload())
        logger.debug("[netlify] Response: %s", response.text)

        try:
            return DNSRecord.model_validate_json(response.content)
        except ValidationError as e:
            msg = f"POST {path} returned an unexpected body: {e}"
            raise APIError(msg, status_code=response.status_code) from e

    async def delete_record(self, zone_id: str, record_id: str) -> None:
        """
        Delete a DNS record.

        Parameters
        ----------
        zone_id : str
            The Netlify zone ID.
        record_id : str
            The record ID.

        Raises
        ------
        APIError
            If the request fails.
        """
        await self._request("DELETE", f"/dns_zones/{zone_id}/dns_records/{record_id}")
