"""SOAP protocol version enum."""

from enum import StrEnum


class SoapVersion(StrEnum):
    """Supported SOAP protocol versions."""

    V1_1 = "1.1"
    V2 = "1.2"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Return True when the provided version value exists in enum members."""
        return value in cls._value2member_map_
