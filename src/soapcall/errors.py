"""
soapcall error types.

Every failure of a call reaches the caller as a SoapError subclass. A Fault
returned by the remote endpoint is itself a SoapError (see models.fault).
"""

from typing import Any, Optional


class SoapError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ConfigurationError(SoapError):
    """The decoder was asked to decode without a content destination."""

    def __init__(self, message: str):
        super().__init__("configuration_error", message)


class ProtocolError(SoapError):
    """The envelope is well-formed XML but not a usable document body."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("protocol_error", message, details)


class TransportError(SoapError):
    def __init__(self, message: str, code: str = "transport_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class EmptyBodyError(TransportError):
    def __init__(self, message: str = "soap: body response is empty"):
        super().__init__(message, code="empty_body")


class UnauthorizedError(SoapError):
    def __init__(self, message: str = "soap: unauthorized"):
        super().__init__("unauthorized", message)
