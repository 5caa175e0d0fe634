# Client facade and the redirect-following engine

import enum

from ._codec import HTTP11Codec
from ._compat import _logger, codes
from ._config import ClientConfig
from ._dispatch import ConnectionDispatcher
from ._exceptions import (
    InvalidRedirectTarget,
    InvalidURL,
    RequestError,
    TooManyRedirects,
)
from ._request import Request
from ._resolver import SystemResolver
from ._transports import SocketWriter, TCPTransport

# Statuses rewritten to GET (HEAD stays HEAD)
REDIRECT_TO_GET = frozenset({codes.MOVED_PERMANENTLY, codes.FOUND, codes.SEE_OTHER})
# Statuses that keep the method, followed for safe methods only
REDIRECT_KEEP_METHOD = frozenset({codes.TEMPORARY_REDIRECT, codes.PERMANENT_REDIRECT})


class _State(enum.Enum):
    PENDING = "pending"
    AWAITING_RESPONSE = "awaiting_response"
    REDIRECTING = "redirecting"
    DONE = "done"
    FAILED = "failed"


def _is_visible_ascii(value):
    return all(char == "\t" or " " <= char <= "~" for char in value)


class RedirectEngine:
    """Runs one logical call: send, inspect the response, follow or return.

    An engine serves a single call. Transport and codec errors end the call
    at once; following a redirect is the only repetition, bounded by
    ``config.redirection_limit``.
    """

    def __init__(self, config, dispatcher, codec):
        self.config = config
        self.dispatcher = dispatcher
        self.codec = codec
        self.state = _State.PENDING
        self.attempts = 0

    def request(self, request):
        if self.state is not _State.PENDING:
            raise RuntimeError("A RedirectEngine runs a single call")
        original_method = request.method
        request = self._prepare(request)
        history = []
        try:
            while True:
                self.state = _State.AWAITING_RESPONSE
                response = self._send(request)
                self.attempts += 1

                next_request = self._build_redirect_request(request, response, original_method)
                if next_request is None:
                    self.state = _State.DONE
                    response.history = history
                    return response

                response.close()
                history.append(response)
                if self.attempts >= self.config.max_attempts:
                    raise TooManyRedirects(
                        f"The server requested too many redirects ({self.attempts}). "
                        f"The latest redirection target is {next_request.url}",
                        url=next_request.url,
                        request=next_request,
                    )
                self.state = _State.REDIRECTING
                request = self._prepare(next_request)
        except RequestError as exc:
            self.state = _State.FAILED
            if exc._request is None:
                exc._request = request
            raise
        except BaseException:
            self.state = _State.FAILED
            raise

    def _prepare(self, request):
        """Copy of ``request`` carrying the client's default headers."""
        prepared = Request(request.method, request.url, headers=request.headers, content=request.stream)
        user_agent = self.config.user_agent
        if user_agent is not None and "user-agent" not in prepared.headers:
            prepared.headers["User-Agent"] = user_agent
        # keep-alive is never requested
        prepared.headers["Connection"] = "close"
        return prepared

    def _send(self, request):
        url = request.url
        stream = self.dispatcher.dispatch(url, url.scheme, self.config.timeout)
        try:
            self.codec.encode(request, SocketWriter(stream))
            reader = stream.makefile("rb")
        finally:
            # the reader keeps the connection open until the body is done
            stream.close()
        try:
            response = self.codec.decode(reader, request)
        except BaseException:
            reader.close()
            raise

        _logger.info(
            f'HTTP Request: {request.method} {url} "{response.http_version} '
            f'{response.status_code} {response.reason_phrase}"'
        )
        return response

    def _build_redirect_request(self, request, response, original_method):
        """Build the next request, or return None when the response is final."""
        location = response.headers.get("location")
        if location is None:
            return None

        status_code = response.status_code
        if status_code in REDIRECT_TO_GET:
            method = "HEAD" if original_method == "HEAD" else "GET"
        elif status_code in REDIRECT_KEEP_METHOD and request.is_safe:
            method = request.method
        else:
            return None

        if not _is_visible_ascii(location):
            raise InvalidRedirectTarget(
                f"Invalid characters in Location header: {location!r}",
                location=location,
            )
        try:
            redirect_url = request.url.join(location)
        except InvalidURL as exc:
            raise InvalidRedirectTarget(
                f"Invalid URL in Location header raising error {exc}: {location}",
                location=location,
            ) from exc

        _logger.debug(f"Following {status_code} redirect from {request.url} to {redirect_url} as {method}")
        return Request(method, redirect_url, headers=request.headers)


class Client:
    """A minimal HTTP/1.1 client.

    Redirections are not followed by default; use set_redirection_limit to
    allow some. Each attempt opens its own connection and asks the server
    to close it.

        client = Client()
        client.set_redirection_limit(5)
        response = client.request(Request("GET", "http://example.com"))
    """

    def __init__(self, config=None, *, resolver=None, transport=None, codec=None):
        self._config = config if config is not None else ClientConfig()
        self._transport = transport if transport is not None else TCPTransport()
        self._codec = codec if codec is not None else HTTP11Codec()
        self._dispatcher = ConnectionDispatcher(
            resolver if resolver is not None else SystemResolver(), self._transport
        )
        self._is_closed = False

    @property
    def config(self):
        return self._config

    def set_global_timeout(self, timeout):
        """Set the timeout applied to connection, write and read."""
        self._config = self._config.replace(timeout=timeout)

    def set_user_agent(self, user_agent):
        """Set the default User-Agent header value."""
        self._config = self._config.replace(user_agent=user_agent)

    def set_redirection_limit(self, limit):
        """Set how many redirections a call may follow (0 disables following)."""
        self._config = self._config.replace(redirection_limit=limit)

    def request(self, request):
        """Send ``request``, following redirections within the limit."""
        if self._is_closed:
            raise RuntimeError("Cannot send a request, as the client has been closed.")
        engine = RedirectEngine(self._config, self._dispatcher, self._codec)
        return engine.request(request)

    def _method_request(self, method, url, headers=None, content=None):
        return self.request(Request(method, url, headers=headers, content=content))

    def get(self, url, *, headers=None):
        return self._method_request("GET", url, headers)

    def head(self, url, *, headers=None):
        return self._method_request("HEAD", url, headers)

    def options(self, url, *, headers=None):
        return self._method_request("OPTIONS", url, headers)

    def delete(self, url, *, headers=None):
        return self._method_request("DELETE", url, headers)

    def post(self, url, *, content=None, headers=None):
        return self._method_request("POST", url, headers, content)

    def put(self, url, *, content=None, headers=None):
        return self._method_request("PUT", url, headers, content)

    def patch(self, url, *, content=None, headers=None):
        return self._method_request("PATCH", url, headers, content)

    def close(self):
        """Close the client."""
        self._transport.close()
        self._is_closed = True

    @property
    def is_closed(self):
        return self._is_closed

    def __enter__(self):
        if self._is_closed:
            raise RuntimeError("Cannot open a client that has been closed")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return None

    def __repr__(self):
        return f"<Client {self._config!r}>"
