# Exception classes with request attribute support

import socket


class RequestError(Exception):
    """Base class for request errors.

    Every error carries a ``kind`` tag naming its failure category and a
    human readable message.
    """

    kind = "request"

    def __init__(self, message="", *, request=None):
        super().__init__(message)
        self._request = request

    @property
    def request(self):
        if self._request is None:
            raise RuntimeError(
                "The request instance has not been set on this exception."
            )
        return self._request

    @property
    def message(self):
        return str(self)


class InvalidInput(RequestError):
    """The request cannot be sent as given."""

    kind = "invalid_input"


class SchemeError(InvalidInput):
    """URL scheme is neither http nor https."""
    pass


class AddressError(InvalidInput):
    """URL has no host component."""
    pass


class InvalidURL(InvalidInput):
    """URL could not be parsed."""
    pass


class InvalidHeader(InvalidInput):
    """Header name or value is not valid on the wire."""
    pass


class TransportError(RequestError):
    """Base class for transport errors."""
    pass


class TimeoutException(TransportError):
    """Base class for timeout exceptions."""
    pass


class AddressResolutionFailure(TransportError):
    """Host name lookup failed or returned no endpoint."""

    kind = "address_resolution"


class ConnectFailure(TransportError):
    """Error connecting to host."""

    kind = "connect"


class ConnectTimeout(TimeoutException, ConnectFailure):
    """Timeout during connection."""
    pass


class CodecFailure(TransportError):
    """Error while sending the request or receiving the response."""

    kind = "codec"


class WriteError(CodecFailure):
    """Error writing to connection."""
    pass


class ReadError(CodecFailure):
    """Error reading from connection."""
    pass


class WriteTimeout(TimeoutException, WriteError):
    """Timeout while writing request."""
    pass


class ReadTimeout(TimeoutException, ReadError):
    """Timeout while reading response."""
    pass


class LocalProtocolError(CodecFailure):
    """The request could not be serialized."""
    pass


class RemoteProtocolError(CodecFailure):
    """The server sent a malformed response."""
    pass


class TooManyRedirects(RequestError):
    """Too many redirects error."""

    kind = "too_many_redirects"

    def __init__(self, message="", *, url=None, request=None):
        super().__init__(message, request=request)
        self.url = url


class InvalidRedirectTarget(RequestError):
    """The Location header could not be turned into a URL."""

    kind = "invalid_redirect_target"

    def __init__(self, message="", *, location=None, request=None):
        super().__init__(message, request=request)
        self.location = location


class StreamError(RequestError):
    """Stream error."""

    kind = "stream"


class StreamConsumed(StreamError):
    """Stream consumed error."""

    def __init__(self, message=None, *, request=None):
        if message is None:
            message = (
                "Attempted to send a request body that has already been "
                "streamed. Iterable request content can only be sent once."
            )
        super().__init__(message, request=request)


class StreamClosed(StreamError):
    """Stream closed error."""

    def __init__(self, message=None, *, request=None):
        if message is None:
            message = "Attempted to read from a response body that has been closed."
        super().__init__(message, request=request)


def _convert_os_error(exc, default, timeout, message=None):
    """Translate a socket level error into the matching request error."""
    msg = message or str(exc) or exc.__class__.__name__
    if isinstance(exc, socket.timeout):
        return timeout(msg)
    return default(msg)
