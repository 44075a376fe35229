"""Native messaging manifest generation."""

from __future__ import annotations

import json
import re
import shutil
from typing import Any

import typer
from rich.console import Console

_HOST_NAME_RE = re.compile(r"^[a-z0-9_]+(\.[a-z0-9_]+)*$")


def build_manifest(*, name: str, path: str, browser: str, extension_id: str) -> dict[str, Any]:
    """Build the host manifest a browser needs to launch otpbridge-host."""
    if not _HOST_NAME_RE.match(name):
        raise ValueError(f"invalid host name {name!r}: use lowercase letters, digits, '_' and '.'")
    manifest: dict[str, Any] = {
        "name": name,
        "description": "YubiKey OATH codes over native messaging",
        "path": path,
        "type": "stdio",
    }
    if browser == "chrome":
        manifest["allowed_origins"] = [f"chrome-extension://{extension_id}/"]
    elif browser == "firefox":
        manifest["allowed_extensions"] = [extension_id]
    else:
        raise ValueError(f"unsupported browser {browser!r}: expected chrome or firefox")
    return manifest


def register_manifest_commands(app: typer.Typer, console: Console) -> None:
    """Register the manifest command."""

    @app.command("manifest")
    def manifest(
        extension: str = typer.Option(..., "--extension", help="Extension id allowed to launch the host"),
        browser: str = typer.Option("chrome", "--browser", help="chrome or firefox"),
        name: str = typer.Option("otpbridge", "--name", help="Native messaging host name"),
        path: str = typer.Option(None, "--path", help="Host executable (default: otpbridge-host on PATH)"),
    ) -> None:
        """Print the native messaging host manifest JSON."""
        host_path = path or shutil.which("otpbridge-host")
        if not host_path:
            console.print("[red]otpbridge-host not found on PATH; pass --path[/red]")
            raise typer.Exit(1)
        try:
            data = build_manifest(name=name, path=host_path, browser=browser.lower(), extension_id=extension)
        except ValueError as e:
            raise typer.BadParameter(str(e))
        typer.echo(json.dumps(data, indent=2))
