"""
soapcall — SOAP 1.1 client for Python.

Wraps a request in a SOAP envelope, POSTs it over HTTP and decodes the
response body into a typed result, raising endpoint faults as exceptions.
"""

from pydantic_xml import attr, element

from soapcall.client import SoapClient, AsyncSoapClient
from soapcall.auth import BasicAuth
from soapcall.config import Config
from soapcall.errors import (
    SoapError,
    ConfigurationError,
    ProtocolError,
    TransportError,
    EmptyBodyError,
    UnauthorizedError,
)
from soapcall.models.binding import XmlModel
from soapcall.models.envelope import Envelope, Header, Body
from soapcall.models.fault import Fault, format_fault
from soapcall.models.ns import ENVELOPE_NS
from soapcall.transport.tokens import RawXml, DISCARD

__version__ = "0.1.0"
__all__ = [
    "SoapClient",
    "AsyncSoapClient",
    "BasicAuth",
    "Config",
    "SoapError",
    "ConfigurationError",
    "ProtocolError",
    "TransportError",
    "EmptyBodyError",
    "UnauthorizedError",
    "Fault",
    "format_fault",
    "XmlModel",
    "attr",
    "element",
    "Envelope",
    "Header",
    "Body",
    "ENVELOPE_NS",
    "RawXml",
    "DISCARD",
]
