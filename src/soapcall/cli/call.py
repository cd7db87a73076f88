"""CLI: soapcall call, soapcall envelope"""

from typing import IO, Optional

import click
from lxml import etree
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from soapcall.errors import SoapError
from soapcall.models.envelope import Body, Envelope, Header
from soapcall.models.fault import Fault
from soapcall.transport.tokens import RawXml

console = Console()


def _get_client(**kwargs):
    from soapcall.cli.main import _get_client
    return _get_client(**kwargs)


def _run(coro):
    from soapcall.cli.main import _run
    return _run(coro)


def _read_xml(stream: IO[bytes]) -> RawXml:
    try:
        return RawXml(stream.read())
    except etree.XMLSyntaxError as e:
        raise click.BadParameter(f"{stream.name}: not well-formed XML: {e}")


_header_option = click.option(
    "-H", "--header", "header_files", multiple=True, type=click.File("rb"),
    help="XML document to add as a header item (repeatable)",
)


@click.command("call")
@click.argument("request_file", type=click.File("rb"))
@click.option("-u", "--url", default=None, help="Endpoint URL (defaults to the saved one)")
@click.option("-a", "--action", default="", help="SOAPAction header value, may be empty")
@_header_option
@click.option("--user", default=None)
@click.option("--password", default=None)
@click.option("-k", "--insecure", is_flag=True, help="Skip TLS certificate verification")
@click.option("--timeout", type=float, default=None, help="Deadline in seconds")
@click.option("--raw", is_flag=True, help="Print the response element unformatted")
def call_cmd(
    request_file: IO[bytes], url: Optional[str], action: str, header_files: tuple[IO[bytes], ...],
    user: Optional[str], password: Optional[str], insecure: bool, timeout: Optional[float], raw: bool,
):
    """Send REQUEST_FILE (`-` for stdin) as the body of a SOAP call."""
    request = _read_xml(request_file)
    headers = [_read_xml(f) for f in header_files]

    client = _get_client(url=url, username=user, password=password, insecure=insecure)
    for item in headers:
        client.add_header(item)

    async def _call():
        try:
            return await client.call(action, request, RawXml(), timeout=timeout)
        finally:
            await client.close()

    try:
        result = _run(_call())
    except Fault as fault:
        console.print(f"[red]{escape(str(fault))}[/red]", highlight=False)
        if fault.actor:
            console.print(f"[dim]actor: {escape(fault.actor)}[/dim]", highlight=False)
        raise SystemExit(1)
    except SoapError as e:
        console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
        raise SystemExit(1)

    if result is None or result.element is None:
        console.print("[dim](empty response)[/dim]")
    elif raw:
        click.echo(result.to_xml())
    else:
        console.print(Syntax(result.to_xml(pretty=True).rstrip(), "xml", word_wrap=True))


@click.command("envelope")
@click.argument("request_file", type=click.File("rb"))
@_header_option
def envelope_cmd(request_file: IO[bytes], header_files: tuple[IO[bytes], ...]):
    """Print the envelope `soapcall call` would send for REQUEST_FILE."""
    request = _read_xml(request_file)
    headers = [_read_xml(f) for f in header_files]
    envelope = Envelope(
        header=Header(items=headers) if headers else None,
        body=Body(content=request),
    )
    click.echo(envelope.to_xml())
