"""
Payload models bound to XML with pydantic-xml.

Body content and header items are ``pydantic_xml.BaseXmlModel`` subclasses.
XmlModel adds one thing on top: decoding into an instance the caller already
filled keeps the fields the response leaves out.

    class Request(XmlModel, tag="Request", nsmap={"": "test:call"}):
        attr1: Optional[str] = element(default=None)
        version: Optional[str] = attr(default=None)
"""

from typing import Any, Optional, TypeVar

from lxml import etree
from pydantic import ValidationError, ValidationInfo, model_validator
from pydantic_xml import BaseXmlModel, ParsingError

from soapcall.errors import ProtocolError

ModelT = TypeVar("ModelT", bound=BaseXmlModel)

# Validation context key naming the instance a decode merges into.
_INTO = "soapcall_into"


class XmlModel(BaseXmlModel, __xml_abstract__=True):
    @model_validator(mode="before")
    @classmethod
    def merge_into_destination(cls, data: Any, info: ValidationInfo) -> Any:
        into = (info.context or {}).get(_INTO)
        if type(into) is cls and isinstance(data, dict):
            return {**{name: getattr(into, name) for name in cls.model_fields}, **data}
        return data


def to_tree(model: BaseXmlModel) -> etree._Element:
    return model.to_xml_tree(exclude_none=True)


def from_tree(cls: type[ModelT], element: etree._Element, into: Optional[ModelT] = None) -> ModelT:
    """Decode a complete element into ``cls``, checking the element name first.

    ``into`` is an existing instance whose values stand in for the fields
    the element does not carry.
    """
    want = etree.QName(cls.__xml_serializer__.element_name)
    have = etree.QName(element)
    if have.localname != want.localname:
        raise ProtocolError(f"expected element type <{want.localname}> but have <{have.localname}>")
    if have.namespace != want.namespace:
        raise ProtocolError(
            f"expected element <{want.localname}> in name space {want.namespace or 'none'} "
            f"but have {have.namespace or 'no name space'}"
        )
    try:
        return cls.from_xml_tree(element, context={_INTO: into} if into is not None else None)
    except (ParsingError, ValidationError) as exc:
        raise ProtocolError(f"cannot decode <{have.localname}>: {exc}") from exc
