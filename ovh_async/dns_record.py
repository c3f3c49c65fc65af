"""
High-level access to the DNS zone records API.

Provides the OvhDnsRecord type and functions to get, list, create and
delete records and refresh DNS zones.

Copyright (c) 2026 Snapp'
Author: Yannis Duvignau (yduvignau@snapp.fr)
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ovh_async.client import OvhClient
from ovh_async.exceptions import InvalidResponse
from ovh_async.validation import validate_record_target, validate_subdomain

logger = logging.getLogger(__name__)


class DnsRecordType(str, Enum):
    """DNS record types handled by the zone API."""

    A = "A"
    AAAA = "AAAA"
    CAA = "CAA"
    CNAME = "CNAME"
    DKIM = "DKIM"
    DMARC = "DMARC"
    DNAME = "DNAME"
    LOC = "LOC"
    MX = "MX"
    NAPTR = "NAPTR"
    NS = "NS"
    PTR = "PTR"
    SPF = "SPF"
    SRV = "SRV"
    SSHFP = "SSHFP"
    TLSA = "TLSA"
    TXT = "TXT"


@dataclass
class OvhDnsRecord:
    """A single DNS record of a zone."""

    zone: str
    field_type: DnsRecordType
    target: str
    sub_domain: Optional[str] = None
    ttl: Optional[int] = None
    id: Optional[int] = None

    @classmethod
    def from_api(cls, payload: dict) -> "OvhDnsRecord":
        """Build a record from an API payload; an empty subDomain means the zone apex."""
        try:
            return cls(
                zone=payload["zone"],
                field_type=DnsRecordType(payload["fieldType"]),
                target=payload["target"],
                sub_domain=payload.get("subDomain") or None,
                ttl=payload.get("ttl"),
                id=payload.get("id"),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise InvalidResponse(f"Unexpected DNS record payload: {payload!r}") from e

    @property
    def fqdn(self) -> str:
        if self.sub_domain:
            return f"{self.sub_domain}.{self.zone}."
        return f"{self.zone}."

    def __str__(self) -> str:
        return f"{self.fqdn} {self.ttl or 0} {self.field_type.value} {self.target}"


def _record_type(value: Union[DnsRecordType, str]) -> DnsRecordType:
    if isinstance(value, DnsRecordType):
        return value
    return DnsRecordType(value.upper())


def _record_path(zone: str, record_id: Optional[int] = None) -> str:
    if record_id is None:
        return f"/domain/zone/{zone}/record"
    return f"/domain/zone/{zone}/record/{record_id}"


async def get_record(client: OvhClient, zone: str, record_id: int) -> OvhDnsRecord:
    """Retrieve a DNS record by ID."""
    payload = await client.call("GET", _record_path(zone, record_id))
    return OvhDnsRecord.from_api(payload)


async def list_records(
    client: OvhClient,
    zone: str,
    *,
    field_type: Optional[Union[DnsRecordType, str]] = None,
    sub_domain: Optional[str] = None,
) -> list[OvhDnsRecord]:
    """
    List DNS records of a zone.

    Filters are applied by the API, then one extra call per record fetches
    its details. The detail calls run concurrently.

    Parameters:
        client: OVH API client
        zone: Zone name (e.g. "example.com")
        field_type: Only list records of this type
        sub_domain: Only list records of this subdomain

    Returns:
        The records, in the order the API listed their IDs
    """
    if field_type is not None:
        field_type = _record_type(field_type).value

    record_ids = await client.call(
        "GET", _record_path(zone), fieldType=field_type, subDomain=sub_domain
    )
    logger.debug(
        "Fetched %d record ID(s) for %s (type: %s, subdomain: %s)",
        len(record_ids), zone, field_type or "any", sub_domain or "any",
    )

    return await asyncio.gather(*(get_record(client, zone, rid) for rid in record_ids))


async def create_record(
    client: OvhClient,
    zone: str,
    field_type: Union[DnsRecordType, str],
    target: str,
    *,
    sub_domain: Optional[str] = None,
    ttl: Optional[int] = None,
) -> OvhDnsRecord:
    """
    Create a DNS record.

    The change is only served once the zone is refreshed, see refresh_zone.

    Parameters:
        client: OVH API client
        zone: Zone name
        field_type: Record type
        target: Record target; MX targets are "priority host", SRV targets
            "priority weight port host"
        sub_domain: Subdomain, None for the zone apex
        ttl: TTL in seconds, None for the zone default

    Returns:
        The created record

    Raises:
        ValueError: When the subdomain, type or target is invalid
    """
    field_type = _record_type(field_type)
    sub_domain = sub_domain or ""

    if not validate_subdomain(sub_domain):
        raise ValueError(f"Invalid subdomain: {sub_domain}")
    is_valid, error_msg = validate_record_target(field_type.value, target)
    if not is_valid:
        raise ValueError(error_msg)
    if ttl is not None and ttl < 0:
        raise ValueError("TTL must be a non-negative number")

    data = {
        "fieldType": field_type.value,
        "subDomain": "" if sub_domain == "@" else sub_domain,
        "target": target.strip(),
    }
    if ttl is not None:
        data["ttl"] = ttl

    payload = await client.call("POST", _record_path(zone), data)
    record = OvhDnsRecord.from_api(payload)
    logger.info("Created %s record %s -> %s (ID: %s)", field_type.value, record.fqdn, record.target, record.id)
    return record


async def delete_record(client: OvhClient, zone: str, record_id: int) -> None:
    """Delete a DNS record by ID."""
    await client.call("DELETE", _record_path(zone, record_id))
    logger.info("Deleted record %s from zone %s", record_id, zone)


async def refresh_zone(client: OvhClient, zone: str) -> None:
    """Refresh the DNS zone to apply pending changes."""
    await client.call("POST", f"/domain/zone/{zone}/refresh")
    logger.info("DNS zone refreshed for %s", zone)
