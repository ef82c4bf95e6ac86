"""Object to XML fragment serializers.

Classes:
    XmlSerializer — protocol every serializer satisfies.
    ObjectSerializer — maps dataclasses, mappings and plain objects onto elements.
    ZeepSerializer — renders values through a zeep XSD element definition.
"""

from __future__ import annotations

import copy
import enum
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from lxml import etree
from zeep import exceptions as zeep_exceptions
from zeep import xsd

from soap_http_client.errors import InvalidArgumentError
from soap_http_client.utilities.functions.converters import object_to_dict, to_xml_text

_SCALAR_TYPES = (str, bytes, bool, int, float, Decimal, enum.Enum, datetime, date, time, UUID)


@runtime_checkable
class XmlSerializer(Protocol):
    """Converts an arbitrary object into an XML element."""

    def serialize(self, obj: Any) -> etree._Element: ...


class ObjectSerializer:
    """Serializes objects by their public fields.

    The root element is named after the object's class unless ``tag`` is
    given. Each public field becomes a child element in declaration order;
    nested objects recurse, sequences repeat the child element and None
    fields are left out.

    Args:
        namespace: Namespace URI applied to every generated element.
    """

    def __init__(self, namespace: str | None = None) -> None:
        self.namespace = namespace

    def serialize(self, obj: Any, tag: str | None = None) -> etree._Element:
        """Serialize ``obj`` into a detached element.

        Raises:
            InvalidArgumentError: obj is None, is unparseable XML text, or is a
                mapping without a ``tag``.
        """
        if obj is None:
            raise InvalidArgumentError("Cannot serialize None")
        if isinstance(obj, etree._Element):
            return obj
        if isinstance(obj, (str, bytes)) and tag is None:
            return self._parse(obj)
        if isinstance(obj, Mapping) and tag is None:
            raise InvalidArgumentError("Mappings need an explicit tag to be serialized")

        root = etree.Element(self._qname(tag or type(obj).__name__))
        self._fill(root, obj)
        return root

    @staticmethod
    def _parse(text: str | bytes) -> etree._Element:
        try:
            return etree.fromstring(text.encode("utf-8") if isinstance(text, str) else text)
        except etree.XMLSyntaxError as exc:
            raise InvalidArgumentError(f"Invalid XML fragment: {exc}") from exc

    def _qname(self, name: str) -> str | etree.QName:
        return etree.QName(self.namespace, name) if self.namespace else name

    def _fill(self, node: etree._Element, value: Any) -> None:
        """Write ``value`` into ``node`` as text or as child elements."""
        if isinstance(value, _SCALAR_TYPES):
            node.text = to_xml_text(value)
            return
        fields = object_to_dict(value)
        if fields is value:
            node.text = to_xml_text(value)
            return
        for name, field_value in fields.items():
            self._append(node, name, field_value)

    def _append(self, parent: etree._Element, name: str, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, (list, tuple, set, frozenset)):
            for item in value:
                self._append(parent, name, item)
            return

        child = etree.SubElement(parent, self._qname(name))
        if isinstance(value, etree._Element):
            child.append(copy.deepcopy(value))
        else:
            self._fill(child, value)


class ZeepSerializer:
    """Serializes values through a zeep XSD element definition.

    Mappings are passed to the element as keyword arguments; values already
    built by the element (``element(name="x")``) are rendered as they are.

    Args:
        element: zeep ``xsd.Element`` describing the fragment.
    """

    def __init__(self, element: xsd.Element) -> None:
        self.element = element

    def serialize(self, obj: Any) -> etree._Element:
        """Render ``obj`` into a detached element.

        Raises:
            InvalidArgumentError: obj is None, does not fit the element, or
                renders to nothing.
        """
        if obj is None:
            raise InvalidArgumentError("Cannot serialize None")
        if isinstance(obj, etree._Element):
            return obj

        container = etree.Element("container")
        try:
            value = self.element(**obj) if isinstance(obj, Mapping) else obj
            self.element.render(container, value)
        except (zeep_exceptions.Error, TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"Cannot render {type(obj).__name__} through the element: {exc}") from exc
        if len(container) == 0:
            raise InvalidArgumentError(f"Rendering {type(obj).__name__} produced no element")

        fragment = container[0]
        container.remove(fragment)
        return fragment


def ensure_fragment(obj: Any, serializer: XmlSerializer, role: str = "Body") -> etree._Element:
    """Return ``obj`` unchanged if it is an element, otherwise serialize it.

    Raises:
        InvalidArgumentError: obj is None.
    """
    if obj is None:
        raise InvalidArgumentError(f"{role} cannot be None")
    if isinstance(obj, etree._Element):
        return obj
    return serializer.serialize(obj)
