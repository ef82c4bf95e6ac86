"""Exception hierarchy raised by the SOAP client."""


class SoapClientError(Exception):
    """Base class for every error raised by soap_http_client itself."""


class InvalidArgumentError(SoapClientError, ValueError):
    """A call was made with arguments no SOAP request can be built from.

    Raised synchronously, before any I/O is attempted.
    """


class RequestCancelledError(SoapClientError):
    """The cancel event fired before the transport completed the send."""
