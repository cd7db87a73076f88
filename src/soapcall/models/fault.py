"""
SOAP Fault — the application-level error reported inside a response body.
"""

from typing import Optional

from lxml import etree

from soapcall.errors import SoapError
from soapcall.models.ns import ENVELOPE_NS, FAULT_NAME

NIL_FAULT = "soap: <nil>"

# Wire names of the fault children. SOAP 1.1 leaves them unqualified, so they
# are matched by local name only.
_FIELDS = {
    "faultcode": "code",
    "faultstring": "text",
    "faultactor": "actor",
    "detail": "detail",
}


def format_fault(fault: Optional["Fault"]) -> str:
    """Render a fault as ``soap: [code: ]text[ (detail)][ status]``."""
    if fault is None:
        return NIL_FAULT

    msg = fault.text
    if fault.code:
        msg = f"{fault.code}: {msg}"
    if fault.detail:
        msg += f" ({fault.detail})"
    if fault.http_status:
        msg += f" {fault.http_status}"
    return "soap: " + msg


class Fault(SoapError):
    """A decoded ``soap:Fault``.

    ``http_status`` is not part of the payload; the client stamps it from the
    response status line before raising the fault.
    ``code`` holds the faultcode rather than a taxonomy code.
    """

    def __init__(
        self,
        code: str = "",
        text: str = "",
        actor: str = "",
        detail: str = "",
        http_status: int = 0,
    ):
        super().__init__("fault", text)
        self.code = code
        self.text = text
        self.actor = actor
        self.detail = detail
        self.http_status = http_status

    def __str__(self) -> str:
        return format_fault(self)

    def __reduce__(self):
        return type(self), (self.code, self.text, self.actor, self.detail, self.http_status)

    def __repr__(self) -> str:
        return (
            f"Fault(code={self.code!r}, text={self.text!r}, actor={self.actor!r}, "
            f"detail={self.detail!r}, http_status={self.http_status!r})"
        )

    @classmethod
    def from_element(cls, element: etree._Element) -> "Fault":
        """Build a fault from a complete ``soap:Fault`` element, trimming every field."""
        values: dict[str, str] = {}
        for child in element:
            if not isinstance(child.tag, str):
                continue
            attr = _FIELDS.get(etree.QName(child).localname)
            if attr is not None:
                values[attr] = "".join(child.itertext()).strip()
        return cls(**values)

    def to_element(self) -> etree._Element:
        element = etree.Element(FAULT_NAME, nsmap={"soap": ENVELOPE_NS})
        for tag, attr in _FIELDS.items():
            value = getattr(self, attr)
            if value:
                etree.SubElement(element, tag).text = value
        return element
