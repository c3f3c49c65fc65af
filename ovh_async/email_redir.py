"""
High-level access to the email redirection API.

Copyright (c) 2026 Snapp'
Author: Yannis Duvignau (yduvignau@snapp.fr)
"""

import asyncio
import logging
from dataclasses import dataclass

from ovh_async.client import OvhClient
from ovh_async.exceptions import InvalidResponse, OvhError
from ovh_async.validation import validate_email

logger = logging.getLogger(__name__)


@dataclass
class OvhMailRedir:
    """A single email redirection."""

    id: str
    from_: str
    to: str

    @classmethod
    def from_api(cls, payload: dict) -> "OvhMailRedir":
        try:
            return cls(id=str(payload["id"]), from_=payload["from"], to=payload["to"])
        except (KeyError, TypeError) as e:
            raise InvalidResponse(f"Unexpected redirection payload: {payload!r}") from e

    def __str__(self) -> str:
        return f"{self.id}: {self.from_} -> {self.to}"


def _redir_path(domain: str, redir_id: str = "") -> str:
    path = f"/email/domain/{domain}/redirection"
    return f"{path}/{redir_id}" if redir_id else path


async def get_redir(client: OvhClient, domain: str, redir_id: str) -> OvhMailRedir:
    """Retrieve an email redirection entry."""
    payload = await client.call("GET", _redir_path(domain, redir_id))
    return OvhMailRedir.from_api(payload)


async def list_redirs(client: OvhClient, domain: str) -> list[OvhMailRedir]:
    """
    List the email redirections of a domain.

    One extra API call per redirection fetches its details; those calls
    run concurrently. Redirections whose details cannot be fetched (for
    instance deleted in the meantime) are skipped.

    Parameters:
        client: OVH API client
        domain: Email domain

    Returns:
        The redirections that could be fetched
    """
    redir_ids = await client.call("GET", _redir_path(domain))
    results = await asyncio.gather(
        *(get_redir(client, domain, rid) for rid in redir_ids),
        return_exceptions=True,
    )

    redirs = []
    for redir_id, result in zip(redir_ids, results):
        if isinstance(result, OvhError):
            logger.warning("Skipping redirection %s of %s: %s", redir_id, domain, result)
            continue
        if isinstance(result, BaseException):
            raise result
        redirs.append(result)
    return redirs


async def create_redir(
    client: OvhClient,
    domain: str,
    from_: str,
    to: str,
    local_copy: bool = False,
) -> dict:
    """
    Create a redirection.

    Parameters:
        client: OVH API client
        domain: Email domain
        from_: Address to redirect from
        to: Address to forward the emails to
        local_copy: Keep a local copy of redirected messages

    Returns:
        The pending task returned by the API

    Raises:
        ValueError: When an address is invalid
    """
    for address in (from_, to):
        if not validate_email(address):
            raise ValueError(f"Invalid email address: {address}")

    data = {"from": from_, "to": to, "localCopy": local_copy}
    task = await client.call("POST", _redir_path(domain), data)
    logger.info("Created redirection %s -> %s on %s", from_, to, domain)
    return task


async def delete_redir(client: OvhClient, domain: str, redir_id: str) -> dict:
    """Delete a redirection, returning the pending task."""
    task = await client.call("DELETE", _redir_path(domain, redir_id))
    logger.info("Deleted redirection %s on %s", redir_id, domain)
    return task
