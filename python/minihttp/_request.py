# HTTP request value

import re

from ._exceptions import InvalidInput
from ._headers import Headers
from ._streams import ByteStream, IteratorByteStream, SyncByteStream
from ._urls import URL

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "TRACE"})

_METHOD_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def _encode_content(content):
    if content is None:
        return None
    if isinstance(content, SyncByteStream):
        return content
    if isinstance(content, str):
        return ByteStream(content.encode("utf-8"))
    if isinstance(content, (bytes, bytearray, memoryview)):
        return ByteStream(content)
    if hasattr(content, "__iter__"):
        return IteratorByteStream(content)
    raise TypeError(f"Unexpected type for 'content', {type(content).__name__!r}")


class Request:
    """An HTTP request: method, URL, headers and an optional body."""

    def __init__(self, method, url, *, headers=None, content=None):
        if isinstance(method, bytes):
            method = method.decode("ascii")
        if not isinstance(method, str) or not _METHOD_RE.match(method):
            raise InvalidInput(f"Invalid HTTP method: {method!r}")
        self.method = method.upper()
        self.url = url if isinstance(url, URL) else URL(url)
        self.headers = Headers(headers)
        self.stream = _encode_content(content)

    @property
    def is_safe(self):
        """True for methods defined to have no side effects."""
        return self.method in SAFE_METHODS

    def __repr__(self):
        return f"<Request({self.method!r}, '{self.url}')>"
