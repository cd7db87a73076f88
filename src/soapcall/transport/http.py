"""
HTTP transport for SOAP calls.
"""

import logging
from typing import Optional

import httpx

from soapcall.config import Config
from soapcall.errors import TransportError

logger = logging.getLogger(__name__)

USER_AGENT = "soapcall/0.1.0"


class HttpClient:
    """POSTs envelopes to one endpoint.

    Safe to share between concurrent calls. Every request carries
    ``Connection: close``, so pooled keep-alive connections are never reused.
    """

    def __init__(self, url: str, config: Optional[Config] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        config = config or Config()
        self._url = url
        limits = httpx.Limits()
        if config.max_idle_conns_per_host > 0:
            limits = httpx.Limits(max_keepalive_connections=config.max_idle_conns_per_host)
        self._client = httpx.AsyncClient(
            auth=config.basic_auth.to_httpx() if config.basic_auth else None,
            verify=config.tls if config.tls is not None else True,
            limits=limits,
            headers={"User-Agent": USER_AGENT},
            # the caller's deadline is the only timeout
            timeout=None,
            transport=transport,
        )

    @property
    def url(self) -> str:
        return self._url

    async def post(self, content: bytes, headers: dict[str, str]) -> httpx.Response:
        """Send one request and read the full response body."""
        logger.debug("SOAP request: url=%s, action=%r, %d bytes", self._url, headers.get("SOAPAction"), len(content))
        try:
            resp = await self._client.post(self._url, content=content, headers=headers)
        except httpx.HTTPError as e:
            raise TransportError(f"soap: {str(e) or type(e).__name__}") from e
        logger.debug("SOAP response: status=%d, %d bytes", resp.status_code, len(resp.content))
        return resp

    async def close(self) -> None:
        await self._client.aclose()
