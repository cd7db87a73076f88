"""
XML primitives: a pull token stream over raw bytes, sub-tree decoding into a
caller's destination, and value encoding.
"""

import copy
from io import BytesIO
from typing import Any, Iterator, Optional, Union

from lxml import etree
from pydantic_xml import BaseXmlModel

from soapcall.errors import ConfigurationError, ProtocolError
from soapcall.models.binding import from_tree, to_tree
from soapcall.models.fault import Fault


class StartElement:
    __slots__ = ("element",)

    def __init__(self, element: etree._Element):
        self.element = element

    @property
    def tag(self) -> str:
        return self.element.tag

    @property
    def name(self) -> etree.QName:
        return etree.QName(self.element)

    def __repr__(self) -> str:
        return f"StartElement({self.element.tag!r})"


class EndElement:
    __slots__ = ("element",)

    def __init__(self, element: etree._Element):
        self.element = element

    def __repr__(self) -> str:
        return f"EndElement({self.element.tag!r})"


Token = Union[StartElement, EndElement]


class RawXml:
    """Untyped XML content.

    As a request it is written verbatim. As a response destination it
    receives a detached copy of the body element.
    """

    __slots__ = ("element",)

    def __init__(self, source: Union[str, bytes, etree._Element, None] = None):
        if isinstance(source, str):
            source = source.encode("utf-8")
        if isinstance(source, bytes):
            source = etree.fromstring(source, parser=_parser())
        self.element: Optional[etree._Element] = source

    def to_xml(self, pretty: bool = False) -> str:
        if self.element is None:
            return ""
        return etree.tostring(self.element, encoding="unicode", pretty_print=pretty)

    def __repr__(self) -> str:
        tag = self.element.tag if self.element is not None else None
        return f"RawXml({tag!r})"


class _Discard:
    def __repr__(self) -> str:
        return "DISCARD"


# Destination that consumes a body element without keeping it.
DISCARD = _Discard()


def _parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True)


class TokenStream:
    """Pull reader of start/end element tokens over an XML document.

    Character data is not surfaced as tokens; it stays on the elements and is
    read when a complete sub-tree is decoded.
    """

    def __init__(self, data: bytes):
        self._events: Iterator[tuple[str, etree._Element]] = etree.iterparse(
            BytesIO(data), events=("start", "end"), resolve_entities=False, no_network=True,
        )

    def token(self) -> Optional[Token]:
        """Next token, or None at end of stream. Parser errors propagate unchanged."""
        try:
            event, element = next(self._events)
        except StopIteration:
            return None
        if event == "start":
            return StartElement(element)
        return EndElement(element)

    def read_element(self, start: StartElement) -> etree._Element:
        """Consume tokens through the end of ``start``'s element and return it complete."""
        depth = 1
        while depth:
            token = self.token()
            if token is None:
                raise ProtocolError(f"unexpected end of document inside <{start.name.localname}>")
            depth += 1 if isinstance(token, StartElement) else -1
        return start.element


def decode_into(element: etree._Element, destination: Any) -> Any:
    """Decode a complete element into ``destination`` and return the populated value.

    Model classes yield a new instance. Model instances and RawXml holders are
    filled in place and returned; a model instance keeps the fields the
    element does not carry.
    """
    if destination is DISCARD:
        return DISCARD
    if isinstance(destination, RawXml):
        detached = copy.deepcopy(element)
        etree.cleanup_namespaces(detached)
        destination.element = detached
        return destination
    if isinstance(destination, type) and issubclass(destination, BaseXmlModel):
        return from_tree(destination, element)
    if isinstance(destination, BaseXmlModel):
        decoded = from_tree(type(destination), element, into=destination)
        for name in decoded.model_fields_set:
            setattr(destination, name, getattr(decoded, name))
        return destination
    raise ConfigurationError(f"unsupported content destination: {destination!r}")


def encode_value(value: Any) -> str:
    if isinstance(value, RawXml):
        return value.to_xml()
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8")
    if isinstance(value, BaseXmlModel):
        value = to_tree(value)
    elif isinstance(value, Fault):
        value = value.to_element()
    if isinstance(value, etree._Element):
        return etree.tostring(value, encoding="unicode")
    raise ConfigurationError(f"cannot encode {type(value).__name__} as XML")
