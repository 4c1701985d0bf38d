"""
A record reconciliation.

This module drives the Netlify zone toward a single A record that points at
the host's current public IPv4 address. Netlify DNS has no record update, so
a stale record is deleted before its replacement is created.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from netlify_ddns.errors import APIError, IPDiscoveryError
from netlify_ddns.ipify import discover_ipv4
from netlify_ddns.models import DNSRecord, DNSRecordCreate, ReconcileOutcome, RecordType

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from netlify_ddns.config import Config
    from netlify_ddns.netlify import NetlifyClient


logger = logging.getLogger(__name__)


def find_a_record(records: Iterable[DNSRecord], hostname: str) -> DNSRecord | None:
    """
    Find the A record for a hostname.

    Parameters
    ----------
    records : Iterable[DNSRecord]
        Records in provider order.
    hostname : str
        The fully qualified hostname to look for.

    Returns
    -------
    DNSRecord | None
        The first matching A record, or None. Later duplicates are ignored.
    """
    for record in records:
        if record.hostname == hostname and record.type == RecordType.A:
            return record
    return None


class Reconciler:
    """
    Keep one A record in sync with the public IPv4 address.

    Attributes
    ----------
    config : Config
        Application configuration.
    client : NetlifyClient
        Netlify DNS API client.
    """

    def __init__(
        self,
        config: Config,
        client: NetlifyClient,
        discover: Callable[[], Awaitable[str]] = discover_ipv4,
    ) -> None:
        """
        Initialize Reconciler.

        Parameters
        ----------
        config : Config
            Application configuration.
        client : NetlifyClient
            Netlify DNS API client.
        discover : Callable[[], Awaitable[str]], optional
            Coroutine function returning the public IPv4 address.
        """
        self.config = config
        self.client = client
        self._discover = discover

    async def reconcile(self) -> ReconcileOutcome:
        """
        Run one reconciliation pass.

        Returns
        -------
        ReconcileOutcome
            UNCHANGED if the record was already correct, otherwise
            CREATED or REPLACED.

        Raises
        ------
        IPDiscoveryError
            If the public address could not be determined.
        APIError
            If a Netlify call failed.
        """
        zone_id = self.config.zone_id
        hostname = self.config.record_hostname

        try:
            ipv4 = await self._discover()
        except IPDiscoveryError as e:
            msg = f"error retrieving your public ipv4 address: {e}"
            raise IPDiscoveryError(msg) from e

        try:
            records = await self.client.list_records(zone_id)
        except APIError as e:
            msg = f"error listing DNS records from Netlify DNS: {e}"
            raise APIError(msg, status_code=e.status_code) from e

        existing = find_a_record(records, hostname)

        if existing is not None:
            if existing.hostname == hostname and existing.value == ipv4:
                return ReconcileOutcome.UNCHANGED

            logger.info(
                "removing DNS record %s, ip %s", existing.hostname, existing.value,
            )
            try:
                await self.client.delete_record(
                    existing.zone_id or zone_id, existing.id,
                )
            except APIError as e:
                msg = f"error deleting existing record from Netlify DNS: {e}"
                raise APIError(msg, status_code=e.status_code) from e

        record = DNSRecordCreate(
            hostname=hostname,
            type=RecordType.A,
            value=ipv4,
            ttl=existing.ttl if existing is not None else None,
        )

        logger.info("add DNS record %s, ip %s", hostname, ipv4)
        try:
            await self.client.create_record(zone_id, record)
        except APIError as e:
            msg = f"error creating new DNS record on Netlify DNS: {e}"
            raise APIError(msg, status_code=e.status_code) from e

        if existing is not None:
            return ReconcileOutcome.REPLACED
        return ReconcileOutcome.CREATED
