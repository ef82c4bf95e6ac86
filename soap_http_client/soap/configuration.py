"""Per-version SOAP namespace and media type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from soap_http_client.enums import SoapVersion
from soap_http_client.errors import InvalidArgumentError

SOAP11_NAMESPACE = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP12_NAMESPACE = "http://www.w3.org/2003/05/soap-envelope"

SOAP11_MEDIA_TYPE = "text/xml"
SOAP12_MEDIA_TYPE = "application/soap+xml"


@dataclass(frozen=True, slots=True)
class ProtocolConfiguration:
    """Envelope namespace and HTTP media type for one SOAP version."""

    version: SoapVersion
    namespace_uri: str
    media_type: str


_CONFIGURATIONS: dict[SoapVersion, tuple[str, str]] = {
    SoapVersion.V1_1: (SOAP11_NAMESPACE, SOAP11_MEDIA_TYPE),
    SoapVersion.V2: (SOAP12_NAMESPACE, SOAP12_MEDIA_TYPE),
}


def coerce_version(version: Any) -> SoapVersion:
    """Return ``version`` as a SoapVersion member, accepting its string value."""
    if isinstance(version, SoapVersion):
        return version
    if isinstance(version, str) and SoapVersion.has_value(version):
        return SoapVersion(version)
    raise InvalidArgumentError(f"Unsupported SOAP version: {version!r}")


def resolve(version: SoapVersion | str) -> ProtocolConfiguration:
    """Return a fresh configuration for the given SOAP version.

    Raises:
        InvalidArgumentError: ``version`` is not a supported SOAP version.
    """
    member = coerce_version(version)
    namespace_uri, media_type = _CONFIGURATIONS[member]
    return ProtocolConfiguration(version=member, namespace_uri=namespace_uri, media_type=media_type)
