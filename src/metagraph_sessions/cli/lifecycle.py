"""CLI: metagraph-sessions run"""

from typing import Optional

import click
from rich.console import Console

console = Console()


def _get_client(ctx, throwaway_wallet=False):
    from metagraph_sessions.cli.main import _get_client
    return _get_client(ctx, throwaway_wallet)


def _run(coro):
    from metagraph_sessions.cli.main import _run
    return _run(coro)


@click.command("run")
@click.option("--delay", type=float, default=None, help="Seconds between steps (default: LIFECYCLE_DELAY_SECONDS)")
@click.pass_context
def run_cmd(ctx, delay: Optional[float]):
    """Create a session, extend it, then close it."""
    if delay is not None:
        ctx.obj.setdefault("overrides", {})["lifecycle_delay_seconds"] = delay

    async def _lifecycle():
        async with _get_client(ctx, throwaway_wallet=True) as client:
            settings = client.settings
            lifecycle = client.lifecycle()
            handle = await lifecycle.create(settings.access_obj, settings.end_snapshot_ordinal)
            console.print(f"[green]Created[/green] session {handle.id}")
            await lifecycle.extend(settings.extended_snapshot_ordinal)
            console.print(f"[green]Extended[/green] to ordinal {settings.extended_snapshot_ordinal}")
            await lifecycle.close()
            console.print(f"[green]Closed[/green] session {handle.id}")

    _run(_lifecycle())
