"""
HTTP basic authentication for SOAP endpoints.

Credentials only reach the transport as an ``Authorization: Basic`` header;
they are never part of the envelope.
"""

import httpx
from pydantic import BaseModel


class BasicAuth(BaseModel):
    username: str
    password: str

    def to_httpx(self) -> httpx.BasicAuth:
        return httpx.BasicAuth(self.username, self.password)
