# Transport base classes and implementations

import socket

from ._compat import create_ssl_context
from ._exceptions import ConnectFailure, ConnectTimeout, _convert_os_error


class BaseTransport:
    """Base class for transport implementations.

    A transport opens one connected stream per call; it never pools.
    Subclass and implement connect and connect_secure to create custom
    transports.
    """

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return None

    def close(self):
        pass

    def connect(self, endpoint, timeout=None):
        """Open a plain TCP stream to ``endpoint``."""
        raise NotImplementedError("Subclasses must implement connect()")

    def connect_secure(self, host, port, timeout=None, endpoint=None):
        """Open a TLS session to ``host``.

        The TCP leg goes to ``endpoint`` when given, else to host:port.
        """
        raise NotImplementedError("Subclasses must implement connect_secure()")


class TCPTransport(BaseTransport):
    """Blocking sockets, with TLS from the ``ssl`` module.

    The timeout given to connect is kept on the socket, so it also bounds
    every later read and write.
    """

    def __init__(self, *, verify=True, cert=None, trust_env=True, ssl_context=None):
        self._verify = verify
        self._cert = cert
        self._trust_env = trust_env
        self._ssl_context = ssl_context

    @property
    def ssl_context(self):
        # Built on first TLS use so plain HTTP never touches certificate stores
        if self._ssl_context is None:
            self._ssl_context = create_ssl_context(
                cert=self._cert, verify=self._verify, trust_env=self._trust_env
            )
        return self._ssl_context

    def connect(self, endpoint, timeout=None):
        sock = socket.socket(endpoint.family, endpoint.socktype, endpoint.proto)
        try:
            sock.settimeout(timeout)
            sock.connect(endpoint.sockaddr)
        except OSError as exc:
            sock.close()
            raise _convert_os_error(
                exc,
                ConnectFailure,
                ConnectTimeout,
                f"Failed to connect to {endpoint.sockaddr[0]}:{endpoint.sockaddr[1]}: {exc}",
            ) from exc
        except BaseException:
            sock.close()
            raise
        return sock

    def connect_secure(self, host, port, timeout=None, endpoint=None):
        if endpoint is not None:
            sock = self.connect(endpoint, timeout)
        else:
            try:
                sock = socket.create_connection((host, port), timeout)
            except OSError as exc:
                raise _convert_os_error(
                    exc, ConnectFailure, ConnectTimeout, f"Failed to connect to {host}:{port}: {exc}"
                ) from exc
        try:
            return self.ssl_context.wrap_socket(sock, server_hostname=host)
        except OSError as exc:
            sock.close()
            raise _convert_os_error(
                exc, ConnectFailure, ConnectTimeout, f"TLS handshake with {host}:{port} failed: {exc}"
            ) from exc

    def __repr__(self):
        return f"<TCPTransport verify={self._verify!r}>"


class SocketWriter:
    """Minimal file-like writer that sends every write in full."""

    def __init__(self, sock):
        self._sock = sock

    def write(self, data):
        self._sock.sendall(data)
        return len(data)

    def flush(self):
        pass
