"""
Response decoding: the Body decoder state machine and the envelope walk
around it.

The body's first child decides what it is: a ``soap:Fault`` in the envelope
namespace becomes a Fault, anything else is decoded into the caller's
content destination. A second top-level child is rejected.
"""

import enum
from typing import Any

from soapcall.errors import ConfigurationError, ProtocolError
from soapcall.models.envelope import Body, Envelope
from soapcall.models.fault import Fault
from soapcall.models.ns import BODY_TAG, ENVELOPE_TAG, FAULT_NAME
from soapcall.transport.tokens import EndElement, StartElement, TokenStream, decode_into

MULTIPLE_ELEMENTS = "multiple elements inside body; not a compliant single-element document body"


class State(enum.Enum):
    SCANNING = "scanning"
    CONSUMED = "consumed"


class BodyDecoder:
    def __init__(self, body: Body):
        self.body = body
        self.state = State.SCANNING

    def decode(self, stream: TokenStream) -> Body:
        """Consume the children of an opened Body element through its end tag."""
        if self.body.content is None:
            raise ConfigurationError("content destination required")

        while True:
            token = stream.token()
            if token is None:
                break
            if isinstance(token, EndElement):
                # closes Body
                break
            if self.state is State.CONSUMED:
                raise ProtocolError(MULTIPLE_ELEMENTS)

            element = stream.read_element(token)
            if token.tag == FAULT_NAME:
                self.body.fault = Fault.from_element(element)
                self.body.content = None
            else:
                self.body.content = decode_into(element, self.body.content)
            self.state = State.CONSUMED
        return self.body


def decode_envelope(data: bytes, content: Any) -> Envelope:
    """Decode response bytes into an Envelope whose body targets ``content``.

    Envelope, Header and Body are matched by local name. The header is
    skipped, as are unknown siblings and any Body after the first.
    """
    stream = TokenStream(data)
    root = stream.token()
    if not isinstance(root, StartElement):
        raise ProtocolError("document has no root element")
    if root.name.localname != ENVELOPE_TAG:
        raise ProtocolError(f"expected element type <{ENVELOPE_TAG}> but have <{root.name.localname}>")

    envelope = Envelope(body=Body(content=content))
    body_seen = False
    while True:
        token = stream.token()
        if not isinstance(token, StartElement):
            break
        if token.name.localname == BODY_TAG and not body_seen:
            BodyDecoder(envelope.body).decode(stream)
            body_seen = True
        else:
            stream.read_element(token)
    return envelope
