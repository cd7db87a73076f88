"""CLI: soapcall auth login|status|logout"""

from typing import Optional

import click
from rich.console import Console

console = Console()


def _load_config() -> dict:
    from soapcall.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from soapcall.cli.main import _save_config
    _save_config(cfg)


@click.group()
def auth():
    """Saved credentials."""


@auth.command("login")
@click.option("--url", default=None, help="Default endpoint URL")
def auth_login(url: Optional[str]):
    """Save basic-auth credentials for later calls."""
    cfg = _load_config()
    username = click.prompt("Username")
    password = click.prompt("Password", hide_input=True)
    cfg.update({"username": username, "password": password})
    if url:
        cfg["url"] = url
    _save_config(cfg)
    console.print(f"[green]Saved credentials for {username}[/green]")
    console.print("[dim]Stored in ~/.soapcall/config.json[/dim]")


@auth.command("status")
def auth_status():
    """Show saved credentials."""
    cfg = _load_config()
    if cfg.get("username"):
        console.print(f"[green]Logged in[/green] as {cfg['username']}")
    else:
        console.print("[yellow]No saved credentials. Run `soapcall auth login`.[/yellow]")
    if cfg.get("url"):
        console.print(f"Endpoint: {cfg['url']}")


@auth.command("logout")
def auth_logout():
    """Clear saved credentials."""
    cfg = _load_config()
    cfg.pop("username", None)
    cfg.pop("password", None)
    _save_config(cfg)
    console.print("[green]Logged out.[/green]")
