"""
AsyncSoapClient / SoapClient — SOAP 1.1 document/literal clients.
"""

import asyncio
from typing import Any, Optional

import httpx
from lxml import etree

from soapcall.body import decode_envelope
from soapcall.config import Config
from soapcall.errors import EmptyBodyError, SoapError, TransportError, UnauthorizedError
from soapcall.models.envelope import Body, Envelope, Header
from soapcall.transport.http import HttpClient
from soapcall.transport.tokens import DISCARD

CONTENT_TYPE = 'text/xml; charset="utf-8"'


class AsyncSoapClient:
    """Async SOAP client (primary).

    Register headers with add_header() before issuing calls; the header list
    is not guarded against mutation concurrent with call().
    """

    def __init__(
        self,
        url: str,
        config: Optional[Config] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._config = config or Config()
        self._headers: list[Any] = []
        self.http = HttpClient(url, self._config, transport=transport)

    @property
    def url(self) -> str:
        return self.http.url

    @property
    def headers(self) -> list[Any]:
        return list(self._headers)

    def add_header(self, item: Any) -> None:
        """Add a header item to every subsequent request envelope."""
        self._headers.append(item)

    async def call(
        self,
        action: str,
        request: Any,
        response: Any = None,
        *,
        timeout: Optional[float] = None,
    ) -> Any:
        """Send ``request`` as the body of one envelope and decode the reply.

        ``response`` is the destination for the body element: an XmlModel
        class, an XmlModel or RawXml instance filled in place, or None to
        discard it. Returns the populated destination, or None for a void
        response. Raises the decoded Fault when the endpoint reports one.
        """
        if timeout is None:
            return await self._call(action, request, response)
        try:
            return await asyncio.wait_for(self._call(action, request, response), timeout)
        except asyncio.TimeoutError as e:
            raise TransportError(f"soap: deadline exceeded after {timeout}s") from e

    async def _call(self, action: str, request: Any, response: Any) -> Any:
        destination = DISCARD if response is None else response

        envelope = Envelope(body=Body(content=request))
        if self._headers:
            envelope.header = Header(items=self._headers)
        payload = envelope.to_xml().encode("utf-8")

        resp = await self.http.post(payload, headers={
            "Content-Type": CONTENT_TYPE,
            "SOAPAction": action,
            "Connection": "close",
        })

        if not resp.content:
            raise EmptyBodyError()
        # some servers answer 401 with a non-XML page
        if resp.status_code == 401:
            raise UnauthorizedError()

        try:
            result = decode_envelope(resp.content, destination)
        except (SoapError, etree.LxmlError) as e:
            raise TransportError(
                f"soap: {resp.status_code} {resp.reason_phrase} ({resp.status_code})",
                details={"status": resp.status_code},
            ) from e

        fault = result.body.fault
        if fault is not None:
            fault.http_status = resp.status_code
            raise fault

        content = result.body.content
        if content is DISCARD or isinstance(content, type):
            return None
        return content

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncSoapClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


class SoapClient:
    """Sync wrapper around AsyncSoapClient. Runs the event loop internally."""

    def __init__(self, url: str, config: Optional[Config] = None, **kwargs: Any):
        self._async = AsyncSoapClient(url, config, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def url(self) -> str:
        return self._async.url

    @property
    def headers(self) -> list[Any]:
        return self._async.headers

    def add_header(self, item: Any) -> None:
        self._async.add_header(item)

    def call(self, action: str, request: Any, response: Any = None, *, timeout: Optional[float] = None) -> Any:
        return self._run(self._async.call(action, request, response, timeout=timeout))

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()

    def __enter__(self) -> "SoapClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
