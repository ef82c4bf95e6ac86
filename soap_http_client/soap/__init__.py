"""SOAP envelope construction and request assembly."""

from soap_http_client.soap.configuration import ProtocolConfiguration, resolve
from soap_http_client.soap.envelope import build_envelope, serialize_envelope
from soap_http_client.soap.message import SoapMessageBuilder, SoapRequest, assemble
from soap_http_client.soap.serializer import ObjectSerializer, XmlSerializer, ZeepSerializer, ensure_fragment

__all__ = [
    "ProtocolConfiguration",
    "resolve",
    "build_envelope",
    "serialize_envelope",
    "SoapRequest",
    "SoapMessageBuilder",
    "assemble",
    "XmlSerializer",
    "ObjectSerializer",
    "ZeepSerializer",
    "ensure_fragment",
]
