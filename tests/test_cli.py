"""CLI commands against an in-process transport."""

import json
import logging
import ssl

import httpx
import pytest
from click.testing import CliRunner

from soapcall import AsyncSoapClient, ENVELOPE_NS
from soapcall.cli import main as cli_main
from soapcall.models.envelope import Body, Envelope
from soapcall.models.fault import Fault
from soapcall.transport.tokens import RawXml

REQUEST = '<Request xmlns="test:call"><attr1>value1</attr1></Request>'


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(cli_main, "CONFIG_FILE", path)
    return path


@pytest.fixture
def request_file(tmp_path):
    path = tmp_path / "request.xml"
    path.write_text(REQUEST)
    return str(path)


def use_handler(monkeypatch, handler, calls=None):
    def fake_get_client(**kwargs):
        if calls is not None:
            calls.append(kwargs)
        return AsyncSoapClient("http://soap.test/", transport=httpx.MockTransport(handler))
    monkeypatch.setattr(cli_main, "_get_client", fake_get_client)


def test_envelope_command(request_file):
    result = CliRunner().invoke(cli_main.main, ["envelope", request_file])
    assert result.exit_code == 0
    assert result.output == (
        f'<Envelope xmlns="{ENVELOPE_NS}"><Body xmlns="{ENVELOPE_NS}">{REQUEST}</Body></Envelope>\n'
    )


def test_envelope_command_rejects_bad_xml(tmp_path):
    path = tmp_path / "bad.xml"
    path.write_text("<Request>")
    result = CliRunner().invoke(cli_main.main, ["envelope", str(path)])
    assert result.exit_code != 0
    assert "not well-formed XML" in result.output


def test_call_command(monkeypatch, config_file, request_file):
    seen: list[httpx.Request] = []
    calls: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        body = Envelope(body=Body(content=RawXml('<Response xmlns="test:call"><attr3>value3</attr3></Response>')))
        return httpx.Response(200, content=body.to_xml().encode())

    use_handler(monkeypatch, handler, calls)
    result = CliRunner().invoke(cli_main.main, [
        "call", request_file, "--url", "http://soap.test/", "--action", "soap.action", "--raw",
    ])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == '<Response xmlns="test:call"><attr3>value3</attr3></Response>'
    assert seen[0].headers["SOAPAction"] == "soap.action"
    assert REQUEST.encode() in seen[0].content
    assert calls[0]["url"] == "http://soap.test/"


def test_call_command_fault(monkeypatch, config_file, request_file):
    def handler(request: httpx.Request) -> httpx.Response:
        body = Envelope(body=Body(fault=Fault(text="      fault text")))
        return httpx.Response(500, content=body.to_xml().encode())

    use_handler(monkeypatch, handler)
    result = CliRunner().invoke(cli_main.main, ["call", request_file])
    assert result.exit_code == 1
    assert "soap: fault text 500" in result.output


def test_call_command_void_response(monkeypatch, config_file, request_file):
    use_handler(monkeypatch, lambda request: httpx.Response(200, content=Envelope().to_xml().encode()))
    result = CliRunner().invoke(cli_main.main, ["call", request_file])
    assert result.exit_code == 0
    assert "(empty response)" in result.output


def test_call_command_requires_endpoint(config_file, request_file):
    result = CliRunner().invoke(cli_main.main, ["call", request_file])
    assert result.exit_code == 1
    assert "No endpoint" in result.output


def test_auth_login_status_logout(config_file):
    runner = CliRunner()
    result = runner.invoke(cli_main.main, ["auth", "login", "--url", "http://soap.test/"], input="user\npass\n")
    assert result.exit_code == 0, result.output
    saved = json.loads(config_file.read_text())
    assert saved == {"username": "user", "password": "pass", "url": "http://soap.test/"}

    client = cli_main._get_client()
    assert client.url == "http://soap.test/"

    result = runner.invoke(cli_main.main, ["auth", "status"])
    assert "user" in result.output

    result = runner.invoke(cli_main.main, ["auth", "logout"])
    assert result.exit_code == 0
    assert json.loads(config_file.read_text()) == {"url": "http://soap.test/"}


def test_verbose_enables_debug_logging(monkeypatch, request_file):
    configured: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: configured.append(kwargs))

    result = CliRunner().invoke(cli_main.main, ["-v", "envelope", request_file])
    assert result.exit_code == 0
    assert configured[0]["level"] == logging.DEBUG

    configured.clear()
    CliRunner().invoke(cli_main.main, ["envelope", request_file])
    assert configured == []


def test_call_command_insecure(monkeypatch, config_file, request_file):
    calls: list[dict] = []
    use_handler(monkeypatch, lambda request: httpx.Response(200, content=Envelope().to_xml().encode()), calls)
    result = CliRunner().invoke(cli_main.main, ["call", request_file, "-u", "http://soap.test/", "-k"])
    assert result.exit_code == 0, result.output
    assert calls[0]["insecure"] is True


def test_insecure_client_skips_verification(config_file):
    client = cli_main._get_client(url="https://soap.test/", insecure=True)
    assert client._config.tls.verify_mode == ssl.CERT_NONE
    assert client._config.tls.check_hostname is False

    assert cli_main._get_client(url="https://soap.test/")._config.tls is None
