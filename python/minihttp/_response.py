# HTTP response value

from ._compat import codes, reason_phrase as _default_reason_phrase
from ._headers import Headers
from ._streams import ByteStream


class Response:
    """A received HTTP response.

    The body is read lazily from the connection it arrived on; ``read()``
    loads it into memory and releases the connection, ``close()`` releases
    it without reading.
    """

    def __init__(
        self,
        status_code,
        *,
        headers=None,
        content=None,
        stream=None,
        reason_phrase=None,
        http_version="HTTP/1.1",
        request=None,
    ):
        self.status_code = int(status_code)
        self.headers = Headers(headers)
        self.http_version = http_version
        self.request = request
        self.history = []
        self._reason_phrase = reason_phrase
        self._content = None
        if stream is None:
            stream = ByteStream(content or b"")
        self.stream = stream

    @property
    def reason_phrase(self):
        if self._reason_phrase is not None:
            return self._reason_phrase
        return _default_reason_phrase(self.status_code)

    @property
    def url(self):
        if self.request is None:
            return None
        return self.request.url

    @property
    def is_redirect(self):
        return (
            self.status_code
            in (
                codes.MOVED_PERMANENTLY,
                codes.FOUND,
                codes.SEE_OTHER,
                codes.TEMPORARY_REDIRECT,
                codes.PERMANENT_REDIRECT,
            )
            and "location" in self.headers
        )

    def read(self):
        """Read and return the whole body."""
        if self._content is None:
            self._content = b"".join(self.stream)
            self.close()
        return self._content

    @property
    def content(self):
        return self.read()

    @property
    def encoding(self):
        content_type = self.headers.get("content-type", "")
        for param in content_type.split(";")[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "charset" and value.strip():
                return value.strip().strip('"')
        return "utf-8"

    @property
    def text(self):
        try:
            return self.content.decode(self.encoding, errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

    def iter_bytes(self):
        if self._content is not None:
            if self._content:
                yield self._content
            return
        try:
            yield from self.stream
        finally:
            self.close()

    def close(self):
        self.stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return None

    def __repr__(self):
        return f"<Response [{self.status_code} {self.reason_phrase}]>"
