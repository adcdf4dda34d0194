"""CLI: metagraph-sessions address|create|create-with-id|notarize|extend|close"""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from metagraph_sessions.errors import ConfigurationError

console = Console()


def _get_client(ctx, throwaway_wallet=False):
    from metagraph_sessions.cli.main import _get_client
    return _get_client(ctx, throwaway_wallet)


def _print_response(title, response, json_output):
    from metagraph_sessions.cli.main import _print_response
    _print_response(title, response, json_output)


def _run(coro):
    from metagraph_sessions.cli.main import _run
    return _run(coro)


def _parse_metadata(pairs: tuple[str, ...]) -> dict[str, str]:
    metadata: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ConfigurationError(f"Metadata must be KEY=VALUE, got {pair!r}")
        metadata[key] = value
    return metadata


@click.command("address")
@click.pass_context
def address_cmd(ctx):
    """Show the validator DAG address and the external wallet address."""

    async def _address():
        async with _get_client(ctx) as client:
            table = Table(title="Addresses")
            table.add_column("Role", style="bold")
            table.add_column("Chain")
            table.add_column("Address")
            table.add_row("validator", "dag", client.sessions.access_provider)
            if client.settings.external_private_key:
                table.add_row("wallet", client.signer.chain, client.sessions.external_address)
            else:
                table.add_row("wallet", client.signer.chain, "[dim]not configured[/dim]")
            console.print(table)

    _run(_address())


@click.command("create")
@click.option("--access-obj", default=None, help="Access object (default: ACCESS_OBJ)")
@click.option("--end-ordinal", type=int, default=None, help="End snapshot ordinal (default: END_SNAPSHOT_ORDINAL)")
@click.option("--json-output", "--json", is_flag=True)
@click.pass_context
def create_cmd(ctx, access_obj: Optional[str], end_ordinal: Optional[int], json_output: bool):
    """Create a session signed by the external wallet."""

    async def _create():
        async with _get_client(ctx, throwaway_wallet=True) as client:
            settings = client.settings
            with console.status("Submitting create..."):
                response = await client.sessions.create(
                    access_obj or settings.access_obj,
                    settings.end_snapshot_ordinal if end_ordinal is None else end_ordinal,
                )
        _print_response("Session created", response, json_output)

    _run(_create())


@click.command("notarize")
@click.option("--access-id", required=True, help="Identity the session is granted to")
@click.option("--access-obj", default=None, help="Access object (default: ACCESS_OBJ)")
@click.option("--end-ordinal", type=int, default=None, help="End snapshot ordinal (default: END_SNAPSHOT_ORDINAL)")
@click.option("-m", "--metadata", multiple=True, help="KEY=VALUE, repeatable")
@click.option("--json-output", "--json", is_flag=True)
@click.pass_context
def notarize_cmd(ctx, access_id: str, access_obj: Optional[str], end_ordinal: Optional[int],
                 metadata: tuple[str, ...], json_output: bool):
    """Create a session backed only by the validator proof."""

    async def _notarize():
        fields = _parse_metadata(metadata)
        async with _get_client(ctx) as client:
            settings = client.settings
            with console.status("Submitting notarized create..."):
                response = await client.sessions.create_notarized(
                    access_id,
                    access_obj or settings.access_obj,
                    settings.end_snapshot_ordinal if end_ordinal is None else end_ordinal,
                    fields,
                )
        _print_response("Notarized session created", response, json_output)

    _run(_notarize())


@click.command("extend")
@click.argument("session_id")
@click.option("--end-ordinal", type=int, default=None,
              help="New end snapshot ordinal (default: EXTENDED_SNAPSHOT_ORDINAL)")
@click.option("--json-output", "--json", is_flag=True)
@click.pass_context
def extend_cmd(ctx, session_id: str, end_ordinal: Optional[int], json_output: bool):
    """Extend a session."""

    async def _extend():
        async with _get_client(ctx) as client:
            ordinal = client.settings.extended_snapshot_ordinal if end_ordinal is None else end_ordinal
            with console.status("Submitting extend..."):
                response = await client.sessions.extend(session_id, ordinal)
        _print_response(f"Session {session_id} extended to {ordinal}", response, json_output)

    _run(_extend())


@click.command("close")
@click.argument("session_id")
@click.option("--json-output", "--json", is_flag=True)
@click.pass_context
def close_cmd(ctx, session_id: str, json_output: bool):
    """Close a session."""

    async def _close():
        async with _get_client(ctx) as client:
            with console.status("Submitting close..."):
                response = await client.sessions.close(session_id)
        _print_response(f"Session {session_id} closed", response, json_output)

    _run(_close())


@click.command("create-with-id")
@click.option("--creator", default=None, help="Session creator (default: CREATOR)")
@click.option("--session-id", default=None, help="Session id to create (default: SESSION_ID)")
@click.option("--end-ordinal", type=int, default=None, help="End snapshot ordinal (default: END_SNAPSHOT_ORDINAL)")
@click.option("--json-output", "--json", is_flag=True)
@click.pass_context
def create_with_id_cmd(ctx, creator: Optional[str], session_id: Optional[str], end_ordinal: Optional[int],
                       json_output: bool):
    """Create a session under a chosen id, backed only by the validator proof."""

    async def _create_with_id():
        async with _get_client(ctx) as client:
            settings = client.settings
            creator_value = creator or settings.creator
            id_value = session_id or settings.session_id
            if not creator_value or not id_value:
                raise ConfigurationError("create-with-id needs --creator/CREATOR and --session-id/SESSION_ID")
            with console.status("Submitting create..."):
                response = await client.sessions.create_with_id(
                    creator_value,
                    id_value,
                    settings.end_snapshot_ordinal if end_ordinal is None else end_ordinal,
                )
        _print_response(f"Session {id_value} created", response, json_output)

    _run(_create_with_id())
