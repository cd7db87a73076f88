"""
soapcall CLI — `soapcall` command.

Commands:
  soapcall auth login          Save basic-auth credentials and a default endpoint
  soapcall call <request>      Send a request document, print the response body
  soapcall envelope <request>  Print the envelope a call would send
"""

import asyncio
import json
import logging
import ssl
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install soapcall[cli]")

from soapcall.auth import BasicAuth
from soapcall.client import AsyncSoapClient
from soapcall.config import Config

console = Console()
CONFIG_FILE = Path.home() / ".soapcall" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _insecure_context() -> ssl.SSLContext:
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


def _get_client(
    url: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    insecure: bool = False,
) -> AsyncSoapClient:
    cfg = _load_config()
    url = url or cfg.get("url")
    if not url:
        console.print("[red]No endpoint. Pass --url or run `soapcall auth login`.[/red]")
        raise SystemExit(1)
    username = username or cfg.get("username")
    password = password if password is not None else cfg.get("password", "")
    return AsyncSoapClient(url, Config(
        basic_auth=BasicAuth(username=username, password=password) if username else None,
        tls=_insecure_context() if insecure else None,
    ))


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log HTTP exchanges")
def main(verbose: bool):
    """soapcall CLI — call SOAP endpoints from the shell."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# Register subcommands from separate modules
from soapcall.cli.auth import auth
from soapcall.cli.call import call_cmd, envelope_cmd

main.add_command(auth)
main.add_command(call_cmd)
main.add_command(envelope_cmd)


if __name__ == "__main__":
    main()
