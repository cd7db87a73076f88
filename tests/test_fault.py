"""Fault formatting and decoding."""

import pytest
from lxml import etree

from soapcall import Fault, SoapError, format_fault


@pytest.mark.parametrize("fault, want", [
    (None, "soap: <nil>"),
    (Fault(code="code", text="text", http_status=500), "soap: code: text 500"),
    (Fault(text="text", detail="detail"), "soap: text (detail)"),
    (Fault(code="code", text="text", detail="detail"), "soap: code: text (detail)"),
    (Fault(text="text", actor="http://actor"), "soap: text"),
])
def test_format_fault(fault, want):
    assert format_fault(fault) == want


def test_str_reflects_status_set_later():
    fault = Fault(text="fault text")
    assert str(fault) == "soap: fault text"
    fault.http_status = 500
    assert str(fault) == "soap: fault text 500"


def test_fault_is_raisable():
    with pytest.raises(SoapError) as exc_info:
        raise Fault(code="soap:Client", text="bad request", http_status=400)
    assert str(exc_info.value) == "soap: soap:Client: bad request 400"


def test_from_element_trims_and_flattens_detail():
    element = etree.fromstring(
        b'<soap:Fault xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">'
        b"<faultcode>  soap:Server\n</faultcode>"
        b"<faultstring>\n      fault text\n    </faultstring>"
        b"<faultactor> http://actor </faultactor>"
        b"<detail>\n  <err>boom</err>\n</detail>"
        b"<unknown>ignored</unknown>"
        b"</soap:Fault>"
    )
    fault = Fault.from_element(element)
    assert fault.code == "soap:Server"
    assert fault.text == "fault text"
    assert fault.actor == "http://actor"
    assert fault.detail == "boom"
    assert fault.http_status == 0


def test_to_element_omits_empty_fields():
    xml = etree.tostring(Fault(text="      fault text").to_element(), encoding="unicode")
    assert xml == (
        '<soap:Fault xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">'
        "<faultstring>      fault text</faultstring>"
        "</soap:Fault>"
    )
