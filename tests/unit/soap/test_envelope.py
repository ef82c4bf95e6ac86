from collections.abc import Callable

import pytest
from lxml import etree

from soap_http_client.errors import InvalidArgumentError
from soap_http_client.soap.configuration import SOAP11_NAMESPACE, SOAP12_NAMESPACE
from soap_http_client.soap.envelope import build_envelope, serialize_envelope

Canonical = Callable[[str | bytes], str]


# ---------------------------------------------------------------------------
# build_envelope — structure
# ---------------------------------------------------------------------------

def test_envelope_without_header(fake_body: etree._Element, canonical: Canonical) -> None:
    envelope = build_envelope(SOAP11_NAMESPACE, [fake_body])
    expected = (
        '<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/">'
        "<soapenv:Body><FakeMethod/></soapenv:Body>"
        "</soapenv:Envelope>"
    )
    assert canonical(serialize_envelope(envelope)) == canonical(expected)


def test_envelope_with_header(fake_body: etree._Element, fake_header: etree._Element,
                              canonical: Canonical) -> None:
    envelope = build_envelope(SOAP11_NAMESPACE, [fake_body], [fake_header])
    expected = """
        <soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/">
            <soapenv:Header>
                <FakeHeader />
            </soapenv:Header>
            <soapenv:Body>
                <FakeMethod />
            </soapenv:Body>
        </soapenv:Envelope>"""
    assert canonical(serialize_envelope(envelope)) == canonical(expected.strip())


def test_envelope_uses_given_namespace(fake_body: etree._Element) -> None:
    envelope = build_envelope(SOAP12_NAMESPACE, [fake_body], [etree.Element("H")])
    assert envelope.tag == f"{{{SOAP12_NAMESPACE}}}Envelope"
    assert envelope.nsmap == {"soapenv": SOAP12_NAMESPACE}
    assert [child.tag for child in envelope] == [
        f"{{{SOAP12_NAMESPACE}}}Header",
        f"{{{SOAP12_NAMESPACE}}}Body",
    ]


def test_single_prefix_declaration(fake_body: etree._Element) -> None:
    text = serialize_envelope(build_envelope(SOAP11_NAMESPACE, [fake_body]))
    assert text.count("xmlns:soapenv=") == 1
    assert text.startswith("<soapenv:Envelope")


@pytest.mark.parametrize("headers", [None, [], ()])
def test_header_omitted_when_absent_or_empty(fake_body: etree._Element, headers: object) -> None:
    envelope = build_envelope(SOAP11_NAMESPACE, [fake_body], headers)  # type: ignore[arg-type]
    assert envelope.find(f"{{{SOAP11_NAMESPACE}}}Header") is None
    assert len(envelope.findall(f"{{{SOAP11_NAMESPACE}}}Body")) == 1


# ---------------------------------------------------------------------------
# build_envelope — ordering and ownership
# ---------------------------------------------------------------------------

def test_body_and_header_order_preserved() -> None:
    bodies = [etree.Element(name) for name in ("Zeta", "Alpha", "Alpha", "Mid")]
    headers = [etree.Element(name) for name in ("Second", "First")]
    envelope = build_envelope(SOAP11_NAMESPACE, bodies, headers)

    header, body = envelope
    assert [child.tag for child in header] == ["Second", "First"]
    assert [child.tag for child in body] == ["Zeta", "Alpha", "Alpha", "Mid"]


def test_namespaced_fragment_kept_intact() -> None:
    fragment = etree.fromstring('<m:GetPrice xmlns:m="urn:prices"><m:Item id="7">Apple</m:Item></m:GetPrice>')
    envelope = build_envelope(SOAP11_NAMESPACE, [fragment])
    body_child = envelope[0][0]
    assert body_child.tag == "{urn:prices}GetPrice"
    assert body_child[0].get("id") == "7"
    assert body_child[0].text == "Apple"


def test_caller_fragments_not_moved() -> None:
    parent = etree.Element("Owner")
    fragment = etree.SubElement(parent, "FakeMethod")
    build_envelope(SOAP11_NAMESPACE, [fragment])
    assert fragment.getparent() is parent


def test_generator_of_bodies_accepted() -> None:
    envelope = build_envelope(SOAP11_NAMESPACE, (etree.Element(f"B{i}") for i in range(3)))
    assert [child.tag for child in envelope[0]] == ["B0", "B1", "B2"]


# ---------------------------------------------------------------------------
# build_envelope — invalid arguments
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("namespace", [SOAP11_NAMESPACE, SOAP12_NAMESPACE])
def test_empty_bodies_rejected(namespace: str) -> None:
    with pytest.raises(InvalidArgumentError):
        build_envelope(namespace, [])


def test_none_bodies_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        build_envelope(SOAP11_NAMESPACE, None)


def test_non_element_fragment_rejected() -> None:
    with pytest.raises(InvalidArgumentError, match="Body fragments must be XML elements"):
        build_envelope(SOAP11_NAMESPACE, ["<FakeMethod/>"])  # type: ignore[list-item]


def test_non_element_header_rejected(fake_body: etree._Element) -> None:
    with pytest.raises(InvalidArgumentError, match="Header fragments"):
        build_envelope(SOAP11_NAMESPACE, [fake_body], [42])  # type: ignore[list-item]


# ---------------------------------------------------------------------------
# serialize_envelope
# ---------------------------------------------------------------------------

def test_serialize_has_no_declaration(fake_body: etree._Element) -> None:
    text = serialize_envelope(build_envelope(SOAP11_NAMESPACE, [fake_body]))
    assert not text.startswith("<?xml")
    assert etree.fromstring(text.encode("utf-8")).tag == f"{{{SOAP11_NAMESPACE}}}Envelope"


def test_serialize_keeps_non_ascii_text() -> None:
    fragment = etree.Element("Name")
    fragment.text = "Željko"
    text = serialize_envelope(build_envelope(SOAP11_NAMESPACE, [fragment]))
    assert "Željko" in text
