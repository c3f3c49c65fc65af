"""
CLI entry point for ovh-async.

Provides argument parsing, logging setup and the command handlers that
drive the typed DNS and email redirection bindings and the raw call
path from a terminal.

Copyright (c) 2026 Snapp'
Author: Yannis Duvignau (yduvignau@snapp.fr)
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

import coloredlogs
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ovh_async import dns_record, email_redir
from ovh_async.client import OvhClient
from ovh_async.config import load_credentials
from ovh_async.constants import SUPPORTED_RECORD_TYPES
from ovh_async.exceptions import APIError, InvalidCredential, NetworkError, OvhError

logger = logging.getLogger(__name__)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging with coloredlogs.

    Parameters:
        verbose: If True, set log level to DEBUG; otherwise INFO
    """
    level = "DEBUG" if verbose else "INFO"
    coloredlogs.install(
        level=level,
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        logger=logging.getLogger(),
    )
    logger.debug("Logging configured at %s level", level)


def load_client(config: Optional[str] = None) -> OvhClient:
    """
    Create a client from the given ovh.conf, or from the environment.

    Without an explicit config file, .env/environment credentials are
    tried first, then the standard ovh.conf locations.

    Raises:
        InvalidConfiguration: When no complete credential set is found
    """
    if config:
        return OvhClient.from_conf(config)

    creds = load_credentials()
    if creds is not None:
        logger.debug("Using credentials from environment")
        return OvhClient.from_credentials(creds)
    return OvhClient.from_conf()


async def connect(client: OvhClient) -> None:
    """
    Check the client can reach the API with valid credentials.

    Parameters:
        client: OVH API client

    Raises:
        OvhError: When the connection check fails after retries
    """
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(description="Connecting to OVH API...", total=None)
        result = await client.check_connection()

    logger.info(
        "Connected to OVH API (credential ID: %s)",
        result.get("credentialId", "unknown"),
    )


async def cmd_redir_list(client: OvhClient, args: argparse.Namespace) -> None:
    redirs = await email_redir.list_redirs(client, args.domain)
    if not redirs:
        console.print("[yellow]ℹ[/yellow] No redirections found")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("From", style="cyan")
    table.add_column("To", style="green")
    for redir in redirs:
        table.add_row(redir.id, redir.from_, redir.to)

    console.print(table)
    console.print(f"\n[dim]Total redirections: {len(redirs)}[/dim]")


async def cmd_redir_create(client: OvhClient, args: argparse.Namespace) -> None:
    task = await email_redir.create_redir(
        client, args.domain, args.from_, args.to, local_copy=args.local_copy
    )
    console.print(
        f"[green]✓[/green] Redirection [cyan]{args.from_}[/cyan] → {args.to} "
        f"requested (task ID: {(task or {}).get('id', 'N/A')})"
    )


async def cmd_redir_delete(client: OvhClient, args: argparse.Namespace) -> None:
    task = await email_redir.delete_redir(client, args.domain, args.id)
    console.print(
        f"[green]✓[/green] Deletion of redirection {args.id} requested "
        f"(task ID: {(task or {}).get('id', 'N/A')})"
    )


async def cmd_dns_list(client: OvhClient, args: argparse.Namespace) -> None:
    records = await dns_record.list_records(
        client, args.zone, field_type=args.type, sub_domain=args.subdomain
    )
    if not records:
        console.print("[yellow]ℹ[/yellow] No DNS entries found")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim", width=10)
    table.add_column("Type", width=8)
    table.add_column("Subdomain", style="cyan")
    table.add_column("Target", style="green")
    table.add_column("TTL", justify="right", width=8)
    for record in records:
        table.add_row(
            str(record.id),
            record.field_type.value,
            record.sub_domain or "@",
            record.target,
            str(record.ttl or 0),
        )

    console.print(table)
    console.print(f"\n[dim]Total entries: {len(records)}[/dim]")


async def cmd_dns_create(client: OvhClient, args: argparse.Namespace) -> None:
    record = await dns_record.create_record(
        client,
        args.zone,
        args.type,
        args.target,
        sub_domain=args.subdomain,
        ttl=args.ttl,
    )
    console.print(
        f"[green]✓[/green] Created: [cyan]{record.fqdn}[/cyan] → {record.target} "
        f"({record.field_type.value}, ID: {record.id})"
    )
    if args.refresh:
        await dns_record.refresh_zone(client, args.zone)
        console.print("[green]✓[/green] DNS zone refreshed successfully")


async def cmd_dns_delete(client: OvhClient, args: argparse.Namespace) -> None:
    await dns_record.delete_record(client, args.zone, args.id)
    console.print(f"[green]✓[/green] Deleted record {args.id} from [cyan]{args.zone}[/cyan]")
    if args.refresh:
        await dns_record.refresh_zone(client, args.zone)
        console.print("[green]✓[/green] DNS zone refreshed successfully")


async def cmd_call(client: OvhClient, args: argparse.Namespace) -> None:
    data = json.loads(args.data) if args.data else None
    result = await client.call(args.method, args.path, data, need_auth=not args.no_auth)
    if result is None:
        console.print("[dim](empty response)[/dim]")
    else:
        console.print_json(data=result)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="ovh-async",
        description="Call the OVH API: DNS records, email redirections and raw calls",
    )
    parser.add_argument(
        "-c", "--config",
        help="ovh.conf file containing API credentials (default: environment, then standard locations)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging output",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    redir = commands.add_parser("redir", help="Manage email redirections")
    redir_cmds = redir.add_subparsers(dest="action", required=True)

    p = redir_cmds.add_parser("list", help="List all redirections for a given domain")
    p.add_argument("domain", help="Domain to list the aliases from")
    p.set_defaults(handler=cmd_redir_list)

    p = redir_cmds.add_parser("create", help="Create a redirection")
    p.add_argument("domain", help="Domain to create the alias in")
    p.add_argument("from_", metavar="from", help="Address to create an alias from")
    p.add_argument("to", help="Address to forward the emails to")
    p.add_argument("-l", "--local-copy", action="store_true", help="Keep local copy of redirected messages")
    p.set_defaults(handler=cmd_redir_create)

    p = redir_cmds.add_parser("delete", help="Delete a redirection")
    p.add_argument("domain")
    p.add_argument("id")
    p.set_defaults(handler=cmd_redir_delete)

    dns = commands.add_parser("dns", help="Manage DNS zone records")
    dns_cmds = dns.add_subparsers(dest="action", required=True)

    p = dns_cmds.add_parser("list", help="List DNS records of a zone")
    p.add_argument("zone")
    p.add_argument("-t", "--type", type=str.upper, choices=SUPPORTED_RECORD_TYPES, help="Only this record type")
    p.add_argument("-s", "--subdomain", help="Only this subdomain")
    p.set_defaults(handler=cmd_dns_list)

    p = dns_cmds.add_parser("create", help="Create a DNS record")
    p.add_argument("zone")
    p.add_argument("type", type=str.upper, choices=SUPPORTED_RECORD_TYPES)
    p.add_argument("target", help="Record target (e.g. '1.2.3.4', '10 mail.example.com.')")
    p.add_argument("-s", "--subdomain", help="Subdomain (default: zone apex)")
    p.add_argument("--ttl", type=int, help="TTL in seconds")
    p.add_argument("--refresh", action="store_true", help="Refresh the zone afterwards")
    p.set_defaults(handler=cmd_dns_create)

    p = dns_cmds.add_parser("delete", help="Delete a DNS record")
    p.add_argument("zone")
    p.add_argument("id", type=int)
    p.add_argument("--refresh", action="store_true", help="Refresh the zone afterwards")
    p.set_defaults(handler=cmd_dns_delete)

    p = commands.add_parser("call", help="Call any API route and print the JSON response")
    p.add_argument("method", type=str.upper, choices=["GET", "POST", "PUT", "DELETE"])
    p.add_argument("path", help="API path (e.g. /me)")
    p.add_argument("-d", "--data", help="JSON request body")
    p.add_argument("--no-auth", action="store_true", help="Send an unsigned request")
    p.set_defaults(handler=cmd_call)

    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    """
    Run the selected command.

    Returns:
        Process exit code
    """
    try:
        async with load_client(args.config) as client:
            if not (args.command == "call" and args.no_auth):
                await connect(client)
            await args.handler(client, args)

    except InvalidCredential as e:
        console.print(f"[bold red]✗[/bold red] Invalid API credentials: {e}")
        logger.critical("Invalid OVH credentials: %s", e)
        return 1
    except NetworkError as e:
        console.print(f"[bold red]✗[/bold red] Network error: {e}")
        logger.error("Network error: %s", e, exc_info=True)
        return 1
    except APIError as e:
        console.print(f"[bold red]✗[/bold red] OVH API error: {e}")
        logger.error("API error: %s", e, exc_info=True)
        return 1
    except OvhError as e:
        console.print(f"[bold red]✗[/bold red] {e}")
        logger.error("%s", e)
        return 1
    except ValueError as e:
        console.print(f"[red]✗[/red] {e}")
        logger.warning("Invalid input rejected: %s", e)
        return 1

    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """Main application entry point."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)
    logger.debug("Running %s %s", args.command, getattr(args, "action", ""))

    try:
        code = asyncio.run(run(args))
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠[/yellow] Operation cancelled by user")
        logger.info("User exited via keyboard interrupt")
        code = 130

    sys.exit(code)
