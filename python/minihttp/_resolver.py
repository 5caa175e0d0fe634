# Host name resolution

import socket
from typing import NamedTuple

from ._exceptions import AddressResolutionFailure


class Endpoint(NamedTuple):
    """One connectable address, as returned by getaddrinfo."""

    family: int
    socktype: int
    proto: int
    sockaddr: tuple


class AddressResolver:
    """Maps a host and port to candidate endpoints, in preference order.

    Subclass and implement resolve to plug in another lookup mechanism.
    """

    def resolve(self, host, port):
        raise NotImplementedError("Subclasses must implement resolve()")


class SystemResolver(AddressResolver):
    """Resolve through the operating system's getaddrinfo."""

    def __init__(self, family=socket.AF_UNSPEC):
        self.family = family

    def resolve(self, host, port):
        try:
            infos = socket.getaddrinfo(
                host, port, self.family, socket.SOCK_STREAM, socket.IPPROTO_TCP
            )
        except (OSError, UnicodeError) as exc:
            raise AddressResolutionFailure(
                f"Cannot resolve the address of {host}:{port}: {exc}"
            ) from exc
        return (
            Endpoint(family, socktype, proto, sockaddr)
            for family, socktype, proto, _canonname, sockaddr in infos
        )

    def __repr__(self):
        return f"<SystemResolver family={self.family!r}>"
