"""Pytest configuration and offline network fakes for minihttp tests."""

import io
import socket

import pytest

from minihttp import URL, AddressResolver, BaseTransport, Client, ConnectFailure, Endpoint, Headers


def http_response(status, headers=None, body=b"", reason="Reason"):
    """Serialize a canned response with a Content-Length body."""
    lines = [f"HTTP/1.1 {status} {reason}"]
    for name, value in (headers or {}).items():
        lines.append(f"{name}: {value}")
    lines.append(f"Content-Length: {len(body)}")
    return ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1") + body


class RecordedRequest:
    def __init__(self, raw):
        head, _, body = raw.partition(b"\r\n\r\n")
        request_line, *header_lines = head.decode("latin-1").split("\r\n")
        self.method, self.target, self.version = request_line.split(" ")
        self.headers = Headers()
        for line in header_lines:
            name, _, value = line.partition(":")
            self.headers.add(name, value)
        self.body = body
        self.raw = raw

    def __repr__(self):
        return f"<RecordedRequest {self.method} {self.target}>"


class FakeServer:
    """Answers requests from canned responses keyed by Host and target."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def route(self, url, status=200, headers=None, body=b"", raw=None):
        url = URL(url)
        self.routes[(url.authority, url.target)] = raw if raw is not None else http_response(
            status, headers, body
        )

    def redirect(self, url, location, status=301):
        self.route(url, status, {"Location": location})

    def respond(self, raw):
        request = RecordedRequest(raw)
        self.requests.append(request)
        key = (request.headers.get("host"), request.target)
        return self.routes.get(key, http_response(404, body=b"not found", reason="Not Found"))


class FakeSocket:
    def __init__(self, server):
        self.server = server
        self.sent = b""
        self.closed = False
        self.reader = None

    def sendall(self, data):
        self.sent += data

    def makefile(self, mode):
        self.reader = io.BytesIO(self.server.respond(self.sent))
        return self.reader

    def close(self):
        self.closed = True


class FakeResolver(AddressResolver):
    """Resolves every host to the configured addresses (default 10.0.0.1)."""

    def __init__(self, addresses=None):
        self.addresses = addresses or {}
        self.lookups = []

    def resolve(self, host, port):
        self.lookups.append((host, port))
        return (
            Endpoint(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP, (address, port))
            for address in self.addresses.get(host, ["10.0.0.1"])
        )


class FakeTransport(BaseTransport):
    """Hands out FakeSockets and records every connection attempt."""

    def __init__(self, server, unreachable=()):
        self.server = server
        self.unreachable = set(unreachable)
        self.connects = []
        self.sockets = []

    def _open(self, endpoint):
        address = endpoint.sockaddr[0]
        if address in self.unreachable:
            raise ConnectFailure(f"Failed to connect to {address}:{endpoint.sockaddr[1]}")
        sock = FakeSocket(self.server)
        self.sockets.append(sock)
        return sock

    def connect(self, endpoint, timeout=None):
        self.connects.append(("plain", endpoint.sockaddr, timeout))
        return self._open(endpoint)

    def connect_secure(self, host, port, timeout=None, endpoint=None):
        self.connects.append(("secure", host, port, endpoint.sockaddr, timeout))
        return self._open(endpoint)


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def transport(server):
    return FakeTransport(server)


@pytest.fixture
def client(resolver, transport):
    return Client(resolver=resolver, transport=transport)
