"""CLI commands for otpbridge.

The native host itself is `serve` (also installed as `otpbridge-host`); the
other commands let an operator exercise the same dispatcher from a terminal.
"""

from __future__ import annotations

import typer
from rich.console import Console

from otpbridge import __logo__, __version__
from otpbridge.cli.command_groups.credentials_command import register_credentials_commands
from otpbridge.cli.command_groups.manifest_command import register_manifest_commands
from otpbridge.cli.shared.logging_utils import configure_logging
from otpbridge.host.dispatcher import Dispatcher

app = typer.Typer(
    name="otpbridge",
    help=f"{__logo__} otpbridge - YubiKey OATH codes over native messaging",
    no_args_is_help=True,
)

console = Console()


def make_dispatcher(timestamp: int | None = None) -> Dispatcher:
    """Dispatcher from the loaded config; a timestamp pins the clock."""
    from otpbridge.config.loader import load_config
    from otpbridge.credentials.clock import FixedClock
    from otpbridge.host.native import build_dispatcher

    try:
        config = load_config()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)
    configure_logging(config.logging, name="cli")
    dispatcher = build_dispatcher(config)
    if timestamp is not None:
        dispatcher.clock = FixedClock(timestamp)
    return dispatcher


@app.command()
def serve() -> None:
    """Answer one framed request on stdin/stdout (what browsers launch)."""
    from otpbridge.host.native import main

    raise typer.Exit(main([]))


@app.command()
def version() -> None:
    """Show otpbridge version."""
    console.print(f"{__logo__} otpbridge v{__version__}")


register_credentials_commands(app, console, make_dispatcher)
register_manifest_commands(app, console)


if __name__ == "__main__":
    app()
