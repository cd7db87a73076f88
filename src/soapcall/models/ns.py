"""Namespace and element names of the SOAP 1.1 envelope."""

ENVELOPE_NS = "http://schemas.xmlsoap.org/soap/envelope/"

ENVELOPE_TAG = "Envelope"
HEADER_TAG = "Header"
BODY_TAG = "Body"
FAULT_TAG = "Fault"

# Clark notation, as lxml reports qualified tags.
FAULT_NAME = f"{{{ENVELOPE_NS}}}{FAULT_TAG}"
