"""Shared httpx transport for SOAP requests, with error tracking.

Classes:
    ExceptionDescriptor — ordered log of RecordedError entries.
    HttpTransport — long-lived sync + async httpx clients that send SoapRequests.
"""


from __future__ import annotations

import asyncio
import logging
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

import httpx

from soap_http_client.errors import RequestCancelledError

if TYPE_CHECKING:
    from soap_http_client.soap.message import SoapRequest
    from soap_http_client.settings import ClientSettings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# RequestErrorType
# ---------------------------------------------------------------------------

class RequestErrorType(StrEnum):
    """Error type classification for HTTP request failures."""

    TIMEOUT = "timeout"
    CONNECT = "connect"
    BAD_STATUS = "bad_status_code"
    REDIRECT = "redirect"
    REQUEST = "request"
    CANCELLED = "cancelled"
    OTHER = "other"


# ---------------------------------------------------------------------------
# ExceptionDescriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RecordedError:
    """One failed or cancelled SOAP call."""

    error_type: RequestErrorType
    message: str
    url: str
    timestamp: datetime = field(default_factory=datetime.now)


class ExceptionDescriptor:
    """Ordered log of transport errors, newest last.

    Entries are kept in a list so errors recorded within the same clock tick
    are all retained.
    """

    def __init__(self) -> None:
        self.errors: list[RecordedError] = []

    def add_error(self, error_type: RequestErrorType, message: str, url: str | None = None) -> RecordedError:
        record = RecordedError(error_type, message, url or "")
        self.errors.append(record)
        return record

    def get_last_error(self) -> RecordedError | None:
        return self.errors[-1] if self.errors else None

    def has_errors_after(self, timestamp: datetime) -> bool:
        """Return True if any error was recorded at or after the given timestamp."""
        return any(record.timestamp >= timestamp for record in self.errors)


# ---------------------------------------------------------------------------
# HttpTransport
# ---------------------------------------------------------------------------

# Encodings httpx decodes without optional extras
_DECOMPRESS_ENCODINGS = "gzip, deflate"


class HttpTransport:
    """httpx-based sync + async transport with error tracking.

    One ``httpx.Client`` and one ``httpx.AsyncClient`` are created on first use
    and reused for every request, so the connection pools are shared by all
    callers. Responses are returned as received whatever their status code;
    httpx exceptions are recorded and re-raised unchanged. There are no retries.

    Args:
        timeout: Request timeout in seconds.
        decompress: Advertise gzip/deflate so httpx transparently decodes
            compressed responses. When False, ask the server for identity
            encoding.
        follow_redirects: Follow 3xx responses.
        client: Pre-built sync client to use instead of creating one.
        async_client: Pre-built async client to use instead of creating one.
    """

    def __init__(
        self,
        timeout: float = 30,
        decompress: bool = True,
        follow_redirects: bool = True,
        client: httpx.Client | None = None,
        async_client: httpx.AsyncClient | None = None,
    ) -> None:
        # Transport config
        self._timeout = timeout
        self._decompress = decompress
        self._follow_redirects = follow_redirects

        self._client = client
        self._async_client = async_client
        self._client_lock = threading.Lock()
        self._stats_lock = threading.Lock()

        # Per-instance error tracking
        self.exception_descriptor = ExceptionDescriptor()

        # Error counters
        self.request_count: int = 0
        self.timeout_err: int = 0
        self.connect_err: int = 0
        self.bad_status_code_err: int = 0
        self.redirect_err: int = 0
        self.request_err: int = 0
        self.cancelled_err: int = 0
        self.other_err: int = 0

        self.last_request_url: str | None = None
        self._last_request_time: datetime | None = None

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> HttpTransport:
        """Build a transport from ClientSettings."""
        return cls(
            timeout=settings.timeout,
            decompress=settings.decompress,
            follow_redirects=settings.follow_redirects,
        )

    @property
    def decompress(self) -> bool:
        return self._decompress

    # --- Client lifecycle ---

    def _build_client_kwargs(self) -> dict[str, Any]:
        """Build kwargs for httpx.Client / httpx.AsyncClient."""
        return {
            "timeout": self._timeout,
            "follow_redirects": self._follow_redirects,
            "headers": {"Accept-Encoding": _DECOMPRESS_ENCODINGS if self._decompress else "identity"},
        }

    def _get_client(self) -> httpx.Client:
        with self._client_lock:
            if self._client is None:
                self._client = httpx.Client(**self._build_client_kwargs())
            return self._client

    def _get_async_client(self) -> httpx.AsyncClient:
        with self._client_lock:
            if self._async_client is None:
                self._async_client = httpx.AsyncClient(**self._build_client_kwargs())
            return self._async_client

    def close(self) -> None:
        """Close the sync connection pool."""
        with self._client_lock:
            client, self._client = self._client, None
        if client is not None:
            client.close()

    async def aclose(self) -> None:
        """Close both connection pools."""
        with self._client_lock:
            async_client, self._async_client = self._async_client, None
        if async_client is not None:
            await async_client.aclose()
        self.close()

    # --- Sending ---

    def _build_request(self, client: httpx.Client | httpx.AsyncClient, request: SoapRequest,
                       timeout: float | None) -> httpx.Request:
        return client.build_request(
            "POST",
            request.endpoint,
            content=request.content,
            headers=request.headers,
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )

    def send(self, request: SoapRequest, timeout: float | None = None) -> httpx.Response:
        """Synchronous POST of a SoapRequest.

        Raises:
            httpx.HTTPError: network level failure, re-raised unchanged.
        """
        url = self._begin(request)
        client = self._get_client()
        try:
            start = time.monotonic()
            response = client.send(self._build_request(client, request, timeout))
        except Exception as exc:
            self._record_exception(exc, url)
            raise
        return self._finish(response, url, start)

    async def async_send(
        self,
        request: SoapRequest,
        timeout: float | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> httpx.Response:
        """Asynchronous POST of a SoapRequest.

        Cancelling the awaiting task propagates ``asyncio.CancelledError`` into
        the in-flight httpx call. Setting ``cancel_event`` aborts the send the
        same way but surfaces as RequestCancelledError.

        Raises:
            RequestCancelledError: cancel_event was set before the send completed.
            httpx.HTTPError: network level failure, re-raised unchanged.
        """
        url = self._begin(request)
        if cancel_event is not None and cancel_event.is_set():
            self._record_error(RequestErrorType.CANCELLED, "Cancelled before send", url)
            raise RequestCancelledError(f"POST {url} cancelled before it was sent")

        client = self._get_async_client()
        start = time.monotonic()
        send = client.send(self._build_request(client, request, timeout))
        try:
            if cancel_event is None:
                response = await send
            else:
                response = await self._race(send, cancel_event, url)
        except asyncio.CancelledError:
            self._record_error(RequestErrorType.CANCELLED, "Task cancelled", url)
            raise
        except RequestCancelledError:
            raise
        except Exception as exc:
            self._record_exception(exc, url)
            raise
        return self._finish(response, url, start)

    async def _race(self, send: Any, cancel_event: asyncio.Event, url: str) -> httpx.Response:
        """Await ``send`` unless ``cancel_event`` fires first."""
        send_task = asyncio.ensure_future(send)
        cancel_task = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait({send_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancel_task.cancel()
            if not send_task.done():
                send_task.cancel()

        if send_task.cancelled() or not send_task.done():
            try:
                await send_task
            except asyncio.CancelledError:
                # The caller cancelled us while the send was winding down
                current = asyncio.current_task()
                if current is not None and current.cancelling():
                    raise
            self._record_error(RequestErrorType.CANCELLED, "Cancel event set", url)
            raise RequestCancelledError(f"POST {url} cancelled")
        return send_task.result()

    # --- Bookkeeping ---

    def _begin(self, request: SoapRequest) -> str:
        url = str(request.endpoint)
        self._last_request_time = datetime.now()
        self.last_request_url = url
        return url

    def _finish(self, response: httpx.Response, url: str, start: float) -> httpx.Response:
        elapsed_ms = (time.monotonic() - start) * 1000
        with self._stats_lock:
            self.request_count += 1
        logger.debug("POST %s -> %s in %.0f ms", url, response.status_code, elapsed_ms)
        if not 200 <= response.status_code < 300:
            self._record_error(RequestErrorType.BAD_STATUS, f"HTTP {response.status_code}", url)
        return response

    def _record_exception(self, exc: Exception, url: str) -> None:
        error_type = self._classify_exception(exc)
        self._record_error(error_type, str(exc), url)

    def _record_error(self, error_type: RequestErrorType, message: str, url: str) -> None:
        """Record error in ExceptionDescriptor and increment local counter."""
        logger.warning("SOAP request to %s failed (%s): %s", url, error_type, message)
        with self._stats_lock:
            self.exception_descriptor.add_error(error_type, message, url)
            counter_name = f"{error_type}_err"
            if hasattr(self, counter_name):
                setattr(self, counter_name, getattr(self, counter_name) + 1)

    @staticmethod
    def _classify_exception(exc: Exception) -> RequestErrorType:
        """Classify an exception into a RequestErrorType."""
        if isinstance(exc, httpx.TimeoutException):
            return RequestErrorType.TIMEOUT
        if isinstance(exc, (httpx.ConnectError, httpx.ProxyError)):
            return RequestErrorType.CONNECT
        if isinstance(exc, httpx.TooManyRedirects):
            return RequestErrorType.REDIRECT
        if isinstance(exc, httpx.HTTPError):
            return RequestErrorType.REQUEST
        return RequestErrorType.OTHER

    # --- Error introspection ---

    def has_errors(self) -> bool:
        """True if any error occurred after the last request timestamp."""
        if self._last_request_time is None:
            return False
        return self.exception_descriptor.has_errors_after(self._last_request_time)

    def is_timeout(self) -> bool:
        """True if the last error is a timeout."""
        last = self.exception_descriptor.get_last_error()
        return last is not None and last.error_type == RequestErrorType.TIMEOUT

    def is_cancelled(self) -> bool:
        """True if the last error is a cancellation."""
        last = self.exception_descriptor.get_last_error()
        return last is not None and last.error_type == RequestErrorType.CANCELLED

    # --- Statistics ---

    def log_stats(self, logger: logging.Logger) -> dict[str, Any]:
        """Log and return request and error counters."""
        with self._stats_lock:
            error_breakdown: dict[str, int] = {}
            for error_type in RequestErrorType:
                val: int = getattr(self, f"{error_type}_err")
                if val > 0:
                    error_breakdown[str(error_type)] = val
            total_errors = sum(error_breakdown.values())
            error_rate = (total_errors / self.request_count * 100) if self.request_count > 0 else 0.0

            stats: dict[str, Any] = {
                "total_requests": self.request_count,
                "total_errors": total_errors,
                "error_rate_percent": round(error_rate, 2),
                "error_breakdown": error_breakdown,
            }
        logger.info("Request statistics: %s", stats)
        return stats
