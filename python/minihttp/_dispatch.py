# Scheme-driven connection establishment

import enum
import itertools

from ._compat import _logger
from ._exceptions import (
    AddressError,
    AddressResolutionFailure,
    ConnectFailure,
    SchemeError,
)


class TransportKind(enum.Enum):
    PLAIN = "plain"
    SECURE = "secure"


# scheme -> (transport kind, default port)
SCHEMES = {
    "http": (TransportKind.PLAIN, 80),
    "https": (TransportKind.SECURE, 443),
}


def connect_first(candidates, opener):
    """Return the first stream ``opener`` manages to open.

    Candidates are tried in order. When all of them fail the error of the
    last one is raised; an empty sequence raises a ConnectFailure.
    """
    last_error = None
    for candidate in candidates:
        try:
            return opener(candidate)
        except ConnectFailure as exc:
            _logger.debug(f"Connection candidate {candidate} failed: {exc}")
            last_error = exc
    if last_error is not None:
        raise last_error
    raise ConnectFailure("No address to connect to")


class ConnectionDispatcher:
    """Opens one transport stream for a URL, plain or TLS by scheme."""

    def __init__(self, resolver, transport):
        self.resolver = resolver
        self.transport = transport

    def dispatch(self, url, scheme, timeout=None):
        try:
            kind, default_port = SCHEMES[scheme]
        except KeyError:
            raise SchemeError(f"Not supported URL scheme: {scheme}") from None
        host = url.host
        if not host:
            raise AddressError(f"No host provided in URL: {url}")
        port = url.port if url.port is not None else default_port

        try:
            candidates = iter(self.resolver.resolve(host, port))
            first = next(candidates, None)
        except AddressResolutionFailure:
            raise
        except OSError as exc:
            raise AddressResolutionFailure(
                f"Cannot resolve the address of {host}:{port}: {exc}"
            ) from exc
        if first is None:
            raise AddressResolutionFailure(f"No address found for {host}:{port}")
        candidates = itertools.chain([first], candidates)

        if kind is TransportKind.SECURE:
            def opener(endpoint):
                return self.transport.connect_secure(host, port, timeout, endpoint=endpoint)
        else:
            def opener(endpoint):
                return self.transport.connect(endpoint, timeout)

        return connect_first(candidates, opener)
