"""
SOAP 1.1 envelope — Envelope, Header and Body.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from soapcall.models.fault import Fault
from soapcall.models.ns import BODY_TAG, ENVELOPE_NS, ENVELOPE_TAG, HEADER_TAG
from soapcall.transport.tokens import encode_value


class Header(BaseModel):
    """Opaque header items, written in order. Headers are never decoded."""
    items: list[Any] = Field(default_factory=list)


class Body(BaseModel):
    """Either a fault or the caller's content destination, never both after a decode."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    fault: Optional[Fault] = None
    content: Any = None


class Envelope(BaseModel):
    header: Optional[Header] = None
    body: Body = Field(default_factory=Body)

    def to_xml(self) -> str:
        parts = [f'<{ENVELOPE_TAG} xmlns="{ENVELOPE_NS}">']
        if self.header is not None and self.header.items:
            parts.append(f'<{HEADER_TAG} xmlns="{ENVELOPE_NS}">')
            parts.extend(encode_value(item) for item in self.header.items)
            parts.append(f"</{HEADER_TAG}>")
        parts.append(f'<{BODY_TAG} xmlns="{ENVELOPE_NS}">')
        if self.body.fault is not None:
            parts.append(encode_value(self.body.fault))
        elif self.body.content is not None:
            parts.append(encode_value(self.body.content))
        parts.append(f"</{BODY_TAG}></{ENVELOPE_TAG}>")
        return "".join(parts)

    @classmethod
    def from_xml(cls, data: bytes, content: Any) -> "Envelope":
        """Decode a response envelope, routing the body child into ``content``."""
        from soapcall.body import decode_envelope

        return decode_envelope(data, content)
