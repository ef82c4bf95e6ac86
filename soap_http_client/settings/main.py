"""Pydantic settings models for transport and logging configuration."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from soap_http_client.enums import LogLevel


class ClientSettings(BaseSettings):
    """Settings used when SoapClient builds its own HttpTransport."""

    model_config = SettingsConfigDict(populate_by_name=True)

    # Seconds applied to connect, read, write and pool acquisition
    timeout: float = Field(default=30.0, alias="SOAP_HTTP_TIMEOUT")

    # Advertise gzip/deflate and let httpx decode compressed responses
    decompress: bool = Field(default=True, alias="SOAP_HTTP_DECOMPRESS")

    follow_redirects: bool = Field(default=True, alias="SOAP_HTTP_FOLLOW_REDIRECTS")

    log_level: LogLevel = Field(default=LogLevel.INFO, alias="SOAP_HTTP_LOG_LEVEL")

    # Attach a stdout handler to the library logger
    log_to_console: bool = Field(default=False, alias="SOAP_HTTP_LOG_TO_CONSOLE")
