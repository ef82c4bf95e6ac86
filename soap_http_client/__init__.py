"""HTTP client for SOAP 1.1 and 1.2 web services."""

__version__ = "1.0.0"

from soap_http_client.client import SoapClient
from soap_http_client.enums import SoapVersion
from soap_http_client.errors import InvalidArgumentError, RequestCancelledError, SoapClientError
from soap_http_client.settings import ClientSettings
from soap_http_client.soap import (
    ObjectSerializer,
    ProtocolConfiguration,
    SoapMessageBuilder,
    SoapRequest,
    XmlSerializer,
    ZeepSerializer,
)
from soap_http_client.utilities.transport import HttpTransport

__all__ = [
    "SoapClient",
    "SoapVersion",
    "SoapClientError",
    "InvalidArgumentError",
    "RequestCancelledError",
    "ClientSettings",
    "ProtocolConfiguration",
    "SoapRequest",
    "SoapMessageBuilder",
    "XmlSerializer",
    "ObjectSerializer",
    "ZeepSerializer",
    "HttpTransport",
]
