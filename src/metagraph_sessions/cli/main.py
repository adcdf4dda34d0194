"""
metagraph-sessions CLI.

Commands:
  metagraph-sessions address            Show validator and wallet addresses
  metagraph-sessions create             Create a wallet-signed session
  metagraph-sessions notarize           Create a validator-notarized session
  metagraph-sessions create-with-id     Create a validator-notarized session under a chosen id
  metagraph-sessions extend <id>        Extend a session
  metagraph-sessions close <id>         Close a session
  metagraph-sessions run                create → wait → extend → wait → close

Settings come from the environment (or --env-file). Exit code is 1 on any
configuration or pipeline error.
"""

import asyncio
import json
from typing import Any, Optional

import click
from rich.console import Console

from metagraph_sessions import __version__
from metagraph_sessions.app_logging import configure_logging
from metagraph_sessions.client import AsyncMetagraphSessions
from metagraph_sessions.config import load_settings
from metagraph_sessions.errors import MetagraphError, SubmissionError
from metagraph_sessions.signers.registry import get_signer

console = Console()
err_console = Console(stderr=True)


def _report(error: MetagraphError) -> None:
    where = f" during {error.stage}" if error.stage else ""
    err_console.print(f"[red]{type(error).__name__}{where}: {error.message}[/red]")
    if isinstance(error, SubmissionError) and error.body is not None:
        if isinstance(error.body, (dict, list)):
            err_console.print_json(json.dumps(error.body))
        else:
            err_console.print(str(error.body))


def _run(coro):
    try:
        return asyncio.run(coro)
    except MetagraphError as e:
        _report(e)
        raise SystemExit(1)


def _get_client(ctx: click.Context, throwaway_wallet: bool = False) -> AsyncMetagraphSessions:
    opts = ctx.obj or {}
    settings = load_settings(opts.get("env_file"), **opts.get("overrides", {}))
    configure_logging("DEBUG" if opts.get("verbose") else settings.log_level)

    external_key: Optional[str] = None
    if throwaway_wallet and settings.external_private_key is None:
        signer = get_signer(settings.external_chain)
        external_key = signer.new_private_key()
        err_console.print(
            f"[yellow]No {settings.external_chain} private key configured; "
            f"using a throwaway wallet {signer.address_of(external_key)}[/yellow]"
        )
    return AsyncMetagraphSessions(settings, external_private_key=external_key)


def _print_response(title: str, response: Any, json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps(response, indent=2))
        return
    console.print(f"[green]{title}[/green]")
    if response is not None:
        console.print_json(json.dumps(response))


@click.group()
@click.version_option(__version__)
@click.option("--env-file", default=".env", show_default=True, help="Dotenv file with settings")
@click.option("--chain", type=click.Choice(["ethereum", "solana"]), default=None,
              help="External wallet chain (overrides EXTERNAL_CHAIN)")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def main(ctx: click.Context, env_file: str, chain: Optional[str], verbose: bool):
    """Sign and submit metagraph session commands."""
    overrides = {"external_chain": chain} if chain else {}
    ctx.obj = {"env_file": env_file, "overrides": overrides, "verbose": verbose}


# Register subcommands from separate modules
from metagraph_sessions.cli.sessions import (
    address_cmd,
    close_cmd,
    create_cmd,
    create_with_id_cmd,
    extend_cmd,
    notarize_cmd,
)
from metagraph_sessions.cli.lifecycle import run_cmd

main.add_command(address_cmd)
main.add_command(create_cmd)
main.add_command(create_with_id_cmd)
main.add_command(notarize_cmd)
main.add_command(extend_cmd)
main.add_command(close_cmd)
main.add_command(run_cmd)


if __name__ == "__main__":
    main()
