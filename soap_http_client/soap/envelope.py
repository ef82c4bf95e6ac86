"""SOAP envelope construction.

Functions:
    build_envelope — wrap header/body fragments in a namespaced Envelope tree.
    serialize_envelope — render an envelope tree to XML text.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable

from lxml import etree

from soap_http_client.errors import InvalidArgumentError

ENVELOPE_PREFIX = "soapenv"


def _collect(fragments: Iterable[etree._Element] | None, role: str) -> list[etree._Element]:
    """Materialize fragments into a list, rejecting anything that is not an element."""
    if fragments is None:
        return []
    collected = list(fragments)
    for fragment in collected:
        if not isinstance(fragment, etree._Element):
            raise InvalidArgumentError(
                f"{role} fragments must be XML elements, got {type(fragment).__name__}"
            )
    return collected


def build_envelope(
    namespace_uri: str,
    bodies: Iterable[etree._Element] | None,
    headers: Iterable[etree._Element] | None = None,
) -> etree._Element:
    """Build ``Envelope`` → optional ``Header`` → ``Body`` in ``namespace_uri``.

    Fragments are deep-copied into the tree in the order given, so the
    caller's elements keep their own parents.

    Raises:
        InvalidArgumentError: ``bodies`` is None or empty, or a fragment is not
            an XML element.
    """
    body_fragments = _collect(bodies, "Body")
    if not body_fragments:
        raise InvalidArgumentError("Bodies cannot be empty")
    header_fragments = _collect(headers, "Header")

    envelope = etree.Element(
        etree.QName(namespace_uri, "Envelope"),
        nsmap={ENVELOPE_PREFIX: namespace_uri},
    )

    # Header is omitted entirely when there is nothing to put in it
    if header_fragments:
        header = etree.SubElement(envelope, etree.QName(namespace_uri, "Header"))
        for fragment in header_fragments:
            header.append(copy.deepcopy(fragment))

    body = etree.SubElement(envelope, etree.QName(namespace_uri, "Body"))
    for fragment in body_fragments:
        body.append(copy.deepcopy(fragment))

    return envelope


def serialize_envelope(envelope: etree._Element) -> str:
    """Render the envelope as XML text without an XML declaration."""
    return etree.tostring(envelope, encoding="unicode")
