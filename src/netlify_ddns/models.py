"""
Data models for Netlify DDNS.

This module defines the DNS record shapes exchanged with the Netlify DNS API
and the outcome of a reconciliation pass.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class RecordType(StrEnum):
    """
    DNS record types the updater knows by name.

    Records of other types are still parsed; their `type` is kept as the
    raw string from the provider.

    Attributes
    ----------
    A : str
        IPv4 address record.
    AAAA : str
        IPv6 address record.
    CNAME : str
        Canonical name (alias) record.
    TXT : str
        Text record.
    """

    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"
    TXT = "TXT"


class ReconcileOutcome(StrEnum):
    """
    Result of a successful reconciliation pass.

    Attributes
    ----------
    UNCHANGED : str
        The A record already pointed at the current address.
    CREATED : str
        No A record existed; one was created.
    REPLACED : str
        A stale A record was deleted and a new one created.
    """

    UNCHANGED = "unchanged"
    CREATED = "created"
    REPLACED = "replaced"


class DNSRecord(BaseModel):
    """
    A DNS record as returned by the Netlify DNS API.

    Attributes
    ----------
    id : str
        The record ID.
    zone_id : str
        The ID of the zone owning the record (`dns_zone_id` on the wire).
    hostname : str
        The fully qualified domain name.
    type : str
        The record type (A, AAAA, CNAME, ...).
    value : str
        The record value.
    ttl : int | None
        TTL in seconds, or None when the provider omits it.
    """

    id: str
    zone_id: str = Field(default="", alias="dns_zone_id")
    hostname: str
    type: str
    value: str = ""
    ttl: int | None = Field(default=None, ge=0)

    model_config = {"populate_by_name": True, "extra": "ignore"}


class DNSRecordCreate(BaseModel):
    """
    Payload for creating a DNS record.

    Attributes
    ----------
    hostname : str
        The fully qualified domain name.
    type : RecordType
        The record type.
    value : str
        The record value.
    ttl : int | None
        TTL in seconds, or None to let the provider apply its default.
    """

    hostname: str = Field(..., min_length=1)
    type: RecordType
    value: str = Field(..., min_length=1)
    ttl: int | None = Field(default=None, ge=0)

    def to_payload(self) -> dict[str, str | int]:
        """
        Build the JSON request body.

        Returns
        -------
        dict[str, str | int]
            The payload, without a `ttl` key when no TTL is set.
        """
        return self.model_dump(mode="json", exclude_none=True)
