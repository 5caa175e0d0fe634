# URL value type over urllib.parse

from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from ._exceptions import InvalidURL

DEFAULT_PORTS = {"http": 80, "https": 443}

# Characters left as-is when escaping a joined path, query or fragment
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"


class URL:
    """An absolute URL.

    Only the pieces the client needs are exposed. ``port`` is the explicit
    port written in the URL, or ``None``.
    """

    def __init__(self, url):
        if isinstance(url, URL):
            url = str(url)
        if not isinstance(url, str):
            raise InvalidURL(f"Invalid type for url. Expected str or URL, got {type(url).__name__}")
        if not url.isascii() or any(ord(char) < 0x21 or ord(char) == 0x7F for char in url):
            raise InvalidURL(f"Invalid non-printable or non-ASCII character in URL: {url!r}")
        try:
            parts = urlsplit(url)
            # urlsplit defers port validation until access
            port = parts.port
        except ValueError as exc:
            raise InvalidURL(f"Invalid URL {url!r}: {exc}") from None
        if not parts.scheme:
            raise InvalidURL(f"Request URL is missing a scheme: {url!r}")
        self._parts = parts
        self._port = port

    @property
    def scheme(self):
        return self._parts.scheme.lower()

    @property
    def host(self):
        return self._parts.hostname

    @property
    def port(self):
        return self._port

    @property
    def path(self):
        return self._parts.path

    @property
    def query(self):
        return self._parts.query

    @property
    def fragment(self):
        return self._parts.fragment

    @property
    def authority(self):
        """Value of the Host header: host plus any non-default port."""
        host = self.host or ""
        if ":" in host:
            host = f"[{host}]"
        if self.port is not None and self.port != DEFAULT_PORTS.get(self.scheme):
            return f"{host}:{self.port}"
        return host

    @property
    def target(self):
        """Origin-form request target: path and query, never empty."""
        path = self.path or "/"
        if self.query:
            return f"{path}?{self.query}"
        return path

    def join(self, url):
        """Resolve a relative reference against this URL.

        Spaces and other characters a request target cannot carry are
        percent-encoded in the path, query and fragment of the result. The
        host is left untouched, so a malformed host still fails.
        """
        if isinstance(url, URL):
            url = str(url)
        try:
            parts = urlsplit(urljoin(str(self), url))
        except ValueError as exc:
            raise InvalidURL(f"Cannot join {url!r} onto {self}: {exc}") from None
        parts = parts._replace(
            path=quote(parts.path, safe=_PATH_SAFE),
            query=quote(parts.query, safe=_QUERY_SAFE),
            fragment=quote(parts.fragment, safe=_QUERY_SAFE),
        )
        return URL(urlunsplit(parts))

    def __str__(self):
        return urlunsplit(self._parts)

    def __repr__(self):
        return f"URL('{self}')"

    def __eq__(self, other):
        if isinstance(other, (str, URL)):
            return str(self) == str(other)
        return NotImplemented

    def __hash__(self):
        return hash(str(self))
