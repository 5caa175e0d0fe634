# Request and response body streams

from ._exceptions import (
    ReadError,
    ReadTimeout,
    RemoteProtocolError,
    StreamClosed,
    StreamConsumed,
    _convert_os_error,
)

MAX_LINE_SIZE = 64 * 1024
CHUNK_SIZE = 64 * 1024


def read_line(reader, limit=MAX_LINE_SIZE):
    """Read one CRLF (or bare LF) terminated line, without the terminator."""
    line = reader.readline(limit + 1)
    if not line:
        raise RemoteProtocolError("Server disconnected without sending a complete message")
    if len(line) > limit:
        raise RemoteProtocolError(f"Line exceeds the maximum size of {limit} bytes")
    if not line.endswith(b"\n"):
        raise RemoteProtocolError("Connection closed in the middle of a line")
    return line.rstrip(b"\r\n")


class SyncByteStream:
    """Base class for request body streams.

    ``content_length`` is the body size when known up front, else ``None``
    (the body is then sent with chunked transfer coding).
    """

    content_length = None

    def __iter__(self):
        raise NotImplementedError("Subclasses must implement __iter__()")

    def close(self):
        pass


class ByteStream(SyncByteStream):
    """In-memory body; can be sent any number of times."""

    def __init__(self, data=b""):
        self._data = bytes(data)
        self.content_length = len(self._data)

    def __iter__(self):
        if self._data:
            yield self._data

    def read(self):
        """Read all bytes."""
        return self._data

    def __repr__(self):
        return f"<ByteStream [{len(self._data)} bytes]>"


class IteratorByteStream(SyncByteStream):
    """Body produced by an iterable of bytes chunks.

    The iterable is consumed on the first send; sending it again raises
    StreamConsumed.
    """

    def __init__(self, iterable):
        self._iterable = iterable
        self._consumed = False

    def __iter__(self):
        if self._consumed:
            raise StreamConsumed()
        self._consumed = True
        for chunk in self._iterable:
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            yield bytes(chunk)

    def __repr__(self):
        return "<IteratorByteStream>"


class ResponseByteStream:
    """Body of a received response, read lazily from the connection.

    The underlying reader is closed as soon as the body has been read to
    its end, or when ``close()`` is called.
    """

    def __init__(self, reader):
        self._reader = reader
        self._closed = False
        self._finished = False

    def _read(self, size):
        raise NotImplementedError("Subclasses must implement _read()")

    def read_chunk(self, size=CHUNK_SIZE):
        if self._finished:
            return b""
        if self._closed:
            raise StreamClosed()
        try:
            chunk = self._read(size)
        except OSError as exc:
            self.close()
            raise _convert_os_error(exc, ReadError, ReadTimeout) from exc
        except RemoteProtocolError:
            self.close()
            raise
        if not chunk:
            self._finished = True
            self.close()
        return chunk

    def __iter__(self):
        while True:
            chunk = self.read_chunk()
            if not chunk:
                break
            yield chunk

    def read(self):
        return b"".join(self)

    @property
    def closed(self):
        return self._closed

    def close(self):
        if not self._closed:
            self._closed = True
            self._reader.close()


class ContentLengthStream(ResponseByteStream):
    def __init__(self, reader, length):
        super().__init__(reader)
        self._remaining = length

    def _read(self, size):
        if self._remaining == 0:
            return b""
        data = self._reader.read1(min(size, self._remaining))
        if not data:
            raise RemoteProtocolError(
                f"Server closed the connection with {self._remaining} bytes "
                f"of the body still outstanding"
            )
        self._remaining -= len(data)
        return data


class ChunkedStream(ResponseByteStream):
    def __init__(self, reader):
        super().__init__(reader)
        self._chunk_left = 0

    def _read_chunk_size(self):
        line = read_line(self._reader)
        size_token = line.split(b";", 1)[0].strip()
        try:
            size = int(size_token, 16)
        except ValueError:
            raise RemoteProtocolError(f"Invalid chunk size: {line!r}") from None
        if size < 0:
            raise RemoteProtocolError(f"Invalid chunk size: {line!r}")
        return size

    def _read(self, size):
        if self._chunk_left == 0:
            self._chunk_left = self._read_chunk_size()
            if self._chunk_left == 0:
                # trailer section ends with an empty line
                while read_line(self._reader):
                    pass
                return b""
        data = self._reader.read1(min(size, self._chunk_left))
        if not data:
            raise RemoteProtocolError("Server closed the connection in the middle of a chunk")
        self._chunk_left -= len(data)
        if self._chunk_left == 0 and read_line(self._reader):
            raise RemoteProtocolError("Missing CRLF after chunk data")
        return data


class UntilCloseStream(ResponseByteStream):
    def _read(self, size):
        return self._reader.read1(size)
