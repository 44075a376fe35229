"""Account and code commands, answered through the same dispatcher as the host."""

from __future__ import annotations

from typing import Callable, cast

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from otpbridge.host.dispatcher import Dispatcher
from otpbridge.protocol.messages import (
    AccountListRequest,
    AccountListResponse,
    CodeRequest,
    CodeResponse,
    ErrorResponse,
)


def register_credentials_commands(
    app: typer.Typer,
    console: Console,
    make_dispatcher: Callable[[int | None], Dispatcher],
) -> None:
    """Register accounts/code commands."""

    @app.command("accounts")
    def accounts() -> None:
        """List OATH account names stored on the YubiKey."""
        response = make_dispatcher(None).handle_request(AccountListRequest(type="AccountList"))
        if isinstance(response, ErrorResponse):
            console.print(f"[red]Error:[/red] {escape(response.error)}")
            raise typer.Exit(1)
        accounts = cast(AccountListResponse, response).accounts
        if not accounts:
            console.print("[yellow]No OATH accounts on this device[/yellow]")
            return
        table = Table(title="OATH accounts")
        table.add_column("#", style="dim")
        table.add_column("Account", style="cyan")
        for i, name in enumerate(accounts, start=1):
            table.add_row(str(i), escape(name))
        console.print(table)

    @app.command("code")
    def code(
        query: str = typer.Argument(..., help="Account search term (substring match)"),
        at: int = typer.Option(None, "--at", help="Unix timestamp to compute the code for"),
    ) -> None:
        """Compute the current code for the account matching QUERY."""
        response = make_dispatcher(at).handle_request(CodeRequest(type="Code", account=query))
        if isinstance(response, ErrorResponse):
            console.print(f"[red]Error:[/red] {escape(response.error)}")
            raise typer.Exit(1)
        answer = cast(CodeResponse, response)
        console.print(f"{escape(answer.account)}: [bold green]{answer.code}[/bold green]")
