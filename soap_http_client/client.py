"""SOAP client facade.

Validates call arguments, builds the envelope for the requested SOAP version
and posts it through a shared HttpTransport. The HTTP response is returned
unmodified; status codes are not interpreted.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any

import httpx
from lxml import etree

from soap_http_client.enums import SoapVersion
from soap_http_client.errors import InvalidArgumentError
from soap_http_client.settings import ClientSettings
from soap_http_client.soap.configuration import resolve
from soap_http_client.soap.envelope import build_envelope, serialize_envelope
from soap_http_client.soap.message import SoapRequest, assemble, to_url
from soap_http_client.soap.serializer import ObjectSerializer, XmlSerializer, ensure_fragment
from soap_http_client.utilities.log import create_logger
from soap_http_client.utilities.transport import HttpTransport

logger = logging.getLogger(__name__)

Fragments = etree._Element | Iterable[etree._Element]


def _as_list(fragments: Any) -> list[Any] | None:
    """Wrap a single fragment in a list; leave sequences and None alone."""
    if fragments is None:
        return None
    if isinstance(fragments, (etree._Element, str, bytes, Mapping)) or not isinstance(fragments, Iterable):
        return [fragments]
    return list(fragments)


def _as_objects(objects: Any) -> list[Any] | None:
    """Only lists and tuples hold several objects; anything else is one object.

    Models and zeep values are iterable themselves, so iterability says nothing
    about whether a payload is a single object.
    """
    if objects is None:
        return None
    if isinstance(objects, (list, tuple)):
        return list(objects)
    return [objects]


class SoapClient:
    """Posts SOAP 1.1 / 1.2 envelopes over HTTP.

    The client owns one transport and reuses it for every call. A transport
    built from ``settings`` is closed together with the client; a transport
    passed in by the caller is left open.

    Args:
        transport: Transport to send requests through.
        settings: Used to build a transport when none is given.
        serializer: Converts non-element objects in the ``*_objects`` methods.
    """

    def __init__(
        self,
        transport: HttpTransport | None = None,
        settings: ClientSettings | None = None,
        serializer: XmlSerializer | None = None,
    ) -> None:
        self._owns_transport = transport is None
        self.settings = settings if settings else ClientSettings()
        self.transport = transport if transport is not None else HttpTransport.from_settings(self.settings)
        self.serializer: XmlSerializer = serializer if serializer is not None else ObjectSerializer()

        # Only a configured level overrides the application's own
        if self.settings.log_to_console:
            create_logger("soap_http_client", self.settings.log_level)
        elif "log_level" in self.settings.model_fields_set:
            logging.getLogger("soap_http_client").setLevel(self.settings.log_level)

    # --- Context management ---

    def __enter__(self) -> SoapClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> SoapClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def close(self) -> None:
        if self._owns_transport:
            self.transport.close()

    async def aclose(self) -> None:
        if self._owns_transport:
            await self.transport.aclose()

    # --- Request building ---

    def build_request(
        self,
        endpoint: str | httpx.URL,
        version: SoapVersion | str,
        bodies: Fragments,
        headers: Fragments | None = None,
        action: str | None = None,
    ) -> SoapRequest:
        """Validate arguments and build the SoapRequest without sending it.

        Raises:
            InvalidArgumentError: endpoint is None/blank, bodies is None or
                empty, a fragment is not an element, or version is unsupported.
        """
        url = to_url(endpoint)
        if bodies is None:
            raise InvalidArgumentError("Bodies cannot be None")
        body_list = _as_list(bodies)
        if not body_list:
            raise InvalidArgumentError("Bodies element cannot be empty")

        config = resolve(version)
        envelope = build_envelope(config.namespace_uri, body_list, _as_list(headers))
        request = assemble(url, serialize_envelope(envelope), config, action)
        logger.debug("Built SOAP %s request for %s (action=%s)", config.version, url, action)
        return request

    def _serialize_all(self, objects: Any, role: str) -> list[etree._Element] | None:
        items = _as_objects(objects)
        if items is None:
            return None
        return [ensure_fragment(item, self.serializer, role) for item in items]

    # --- Sync ---

    def post(
        self,
        endpoint: str | httpx.URL,
        version: SoapVersion | str,
        bodies: Fragments,
        headers: Fragments | None = None,
        action: str | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """POST a SOAP envelope built from element fragments.

        Args:
            endpoint: Service URL.
            version: SOAP version selecting namespace, media type and action placement.
            bodies: One element or a non-empty sequence of elements for ``Body``.
            headers: One element or a sequence of elements for ``Header``;
                ``Header`` is omitted when None or empty.
            action: SOAP action; a ``SOAPAction`` header on 1.1, a quoted
                ``action`` content-type parameter on 1.2.
            timeout: Per-call timeout overriding the transport default.

        Returns:
            The transport's response, whatever its status code.
        """
        request = self.build_request(endpoint, version, bodies, headers, action)
        return self.transport.send(request, timeout=timeout)

    def post_objects(
        self,
        endpoint: str | httpx.URL,
        version: SoapVersion | str,
        bodies: Any,
        headers: Any = None,
        action: str | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """POST arbitrary objects, serializing those that are not elements already.

        A single object or a list/tuple of objects is accepted for both bodies
        and headers. Any other value, iterable or not, is one object.

        Raises:
            InvalidArgumentError: a body object is None.
        """
        if bodies is None:
            raise InvalidArgumentError("Body cannot be None")
        return self.post(
            endpoint,
            version,
            self._serialize_all(bodies, "Body"),
            self._serialize_all(headers, "Header"),
            action,
            timeout,
        )

    # --- Async ---

    async def async_post(
        self,
        endpoint: str | httpx.URL,
        version: SoapVersion | str,
        bodies: Fragments,
        headers: Fragments | None = None,
        action: str | None = None,
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> httpx.Response:
        """Asynchronous ``post``.

        Raises:
            RequestCancelledError: ``cancel_event`` was set before the response arrived.
        """
        request = self.build_request(endpoint, version, bodies, headers, action)
        return await self.transport.async_send(request, timeout=timeout, cancel_event=cancel_event)

    async def async_post_objects(
        self,
        endpoint: str | httpx.URL,
        version: SoapVersion | str,
        bodies: Any,
        headers: Any = None,
        action: str | None = None,
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> httpx.Response:
        """Asynchronous ``post_objects``."""
        if bodies is None:
            raise InvalidArgumentError("Body cannot be None")
        return await self.async_post(
            endpoint,
            version,
            self._serialize_all(bodies, "Body"),
            self._serialize_all(headers, "Header"),
            action,
            timeout,
            cancel_event,
        )
