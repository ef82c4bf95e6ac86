"""SOAP request assembly.

Classes:
    SoapRequest — immutable POST ready for the transport.
    SoapMessageBuilder — mutable builder that collects fragments and builds a SoapRequest.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx
from lxml import etree

from soap_http_client.enums import SoapVersion
from soap_http_client.errors import InvalidArgumentError
from soap_http_client.soap.configuration import ProtocolConfiguration, resolve
from soap_http_client.soap.envelope import build_envelope, serialize_envelope

SOAP_CHARSET = "utf-8"
SOAP_ACTION_HEADER = "SOAPAction"
ACTION_PARAMETER = "action"


@dataclass(frozen=True, slots=True)
class SoapRequest:
    """A single SOAP POST: endpoint, envelope text and action metadata."""

    endpoint: httpx.URL
    envelope: str
    media_type: str
    version: SoapVersion
    action: str | None = None
    charset: str = SOAP_CHARSET

    @property
    def content(self) -> bytes:
        """Envelope text encoded with the request charset."""
        return self.envelope.encode(self.charset)

    @property
    def content_type(self) -> str:
        """Content-Type header value, with the action parameter on SOAP 1.2."""
        value = f"{self.media_type}; charset={self.charset}"
        if self.action is not None and self.version == SoapVersion.V2:
            value += f'; {ACTION_PARAMETER}="{self.action}"'
        return value

    @property
    def headers(self) -> dict[str, str]:
        """Request headers; SOAPAction is only sent for SOAP 1.1."""
        headers = {"Content-Type": self.content_type}
        if self.action is not None and self.version == SoapVersion.V1_1:
            headers[SOAP_ACTION_HEADER] = self.action
        return headers


def to_url(endpoint: str | httpx.URL | None) -> httpx.URL:
    """Validate and normalize an endpoint.

    Raises:
        InvalidArgumentError: endpoint is None, blank, or not a valid URL.
    """
    if endpoint is None:
        raise InvalidArgumentError("Endpoint cannot be None")
    if isinstance(endpoint, str) and not endpoint.strip():
        raise InvalidArgumentError("Endpoint cannot be blank")
    try:
        return httpx.URL(endpoint)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidArgumentError(f"Invalid endpoint {endpoint!r}: {exc}") from exc


def assemble(
    endpoint: str | httpx.URL,
    envelope_text: str,
    config: ProtocolConfiguration,
    action: str | None = None,
) -> SoapRequest:
    """Turn serialized envelope text into a SoapRequest for ``config``'s version."""
    return SoapRequest(
        endpoint=to_url(endpoint),
        envelope=envelope_text,
        media_type=config.media_type,
        version=config.version,
        action=action,
    )


@dataclass
class SoapMessageBuilder:
    """Collects endpoint, version, action and fragments, then builds a SoapRequest.

    Example:
        builder = SoapMessageBuilder(endpoint="https://example.com/soap")
        builder.bodies.append(etree.Element("GetData"))
        request = builder.build()
    """

    endpoint: str | httpx.URL | None = None
    version: SoapVersion = SoapVersion.V1_1
    action: str | None = None
    bodies: list[etree._Element] = field(default_factory=list)
    headers: list[etree._Element] = field(default_factory=list)

    def build(self) -> SoapRequest:
        """Build the request.

        Raises:
            InvalidArgumentError: endpoint is not set or no body was added.
        """
        if self.endpoint is None:
            raise InvalidArgumentError("endpoint property not set")
        if not self.bodies:
            raise InvalidArgumentError("bodies property cannot be empty")

        config = resolve(self.version)
        envelope = build_envelope(config.namespace_uri, self.bodies, self.headers)
        return assemble(self.endpoint, serialize_envelope(envelope), config, self.action)
