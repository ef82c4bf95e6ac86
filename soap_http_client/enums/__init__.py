"""Public enum exports used across the library."""

from soap_http_client.enums.logging import LogLevel
from soap_http_client.enums.protocol import SoapVersion

__all__ = [
    "SoapVersion",
    "LogLevel",
]
