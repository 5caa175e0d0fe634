# HTTP/1.1 wire codec

from ._compat import _logger, codes
from ._exceptions import (
    InvalidHeader,
    LocalProtocolError,
    ReadError,
    ReadTimeout,
    RemoteProtocolError,
    WriteError,
    WriteTimeout,
    _convert_os_error,
)
from ._headers import Headers
from ._response import Response
from ._streams import ChunkedStream, ContentLengthStream, UntilCloseStream, read_line

# Owned by the codec: derived from the URL and the body, never copied
FRAMING_HEADERS = frozenset({"host", "content-length", "transfer-encoding"})
# Methods whose empty body is still announced with Content-Length: 0
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
MAX_HEADER_COUNT = 100


class Codec:
    """Converts requests to wire bytes and wire bytes to responses.

    Subclass and implement encode and decode to speak another framing.
    """

    def encode(self, request, writer):
        raise NotImplementedError("Subclasses must implement encode()")

    def decode(self, reader, request=None):
        raise NotImplementedError("Subclasses must implement decode()")


class HTTP11Codec(Codec):
    """HTTP/1.1 message framing over buffered binary file objects."""

    def encode(self, request, writer):
        head = self._encode_head(request)
        stream = request.stream
        try:
            writer.write(head)
            if stream is not None:
                if stream.content_length is None:
                    for chunk in stream:
                        if chunk:
                            writer.write(b"%x\r\n%s\r\n" % (len(chunk), chunk))
                    writer.write(b"0\r\n\r\n")
                else:
                    for chunk in stream:
                        writer.write(chunk)
            writer.flush()
        except OSError as exc:
            raise _convert_os_error(exc, WriteError, WriteTimeout) from exc

    def _encode_head(self, request):
        url = request.url
        lines = [
            f"{request.method} {url.target} HTTP/1.1",
            f"Host: {url.authority}",
        ]
        for name, value in request.headers.items():
            if name.lower() in FRAMING_HEADERS:
                _logger.debug(f"Ignoring {name} header set on the request; the codec computes it")
                continue
            lines.append(f"{name}: {value}")

        stream = request.stream
        if stream is None:
            if request.method in BODY_METHODS:
                lines.append("Content-Length: 0")
        elif stream.content_length is None:
            lines.append("Transfer-Encoding: chunked")
        else:
            lines.append(f"Content-Length: {stream.content_length}")

        try:
            return ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1")
        except UnicodeEncodeError as exc:
            raise LocalProtocolError(f"Request head cannot be encoded: {exc}") from exc

    def decode(self, reader, request=None):
        try:
            while True:
                http_version, status_code, reason = self._read_status_line(reader)
                headers = self._read_headers(reader)
                # interim responses (100 Continue, 103 Early Hints) are skipped
                if not (100 <= status_code < 200) or status_code == codes.SWITCHING_PROTOCOLS:
                    break
        except OSError as exc:
            raise _convert_os_error(exc, ReadError, ReadTimeout) from exc

        stream = self._body_stream(reader, status_code, headers, request)
        return Response(
            status_code,
            headers=headers,
            stream=stream,
            reason_phrase=reason,
            http_version=http_version,
            request=request,
        )

    def _read_status_line(self, reader):
        line = read_line(reader)
        parts = line.split(b" ", 2)
        if len(parts) < 2 or not parts[0].startswith(b"HTTP/"):
            raise RemoteProtocolError(f"Invalid status line: {line!r}")
        status = parts[1]
        if len(status) != 3 or not status.isdigit():
            raise RemoteProtocolError(f"Invalid status code in status line: {line!r}")
        reason = parts[2].decode("latin-1") if len(parts) == 3 else ""
        return parts[0].decode("ascii", errors="replace"), int(status), reason

    def _read_headers(self, reader):
        headers = Headers()
        while True:
            line = read_line(reader)
            if not line:
                return headers
            if len(headers) >= MAX_HEADER_COUNT:
                raise RemoteProtocolError(f"Response has more than {MAX_HEADER_COUNT} header fields")
            name, sep, value = line.partition(b":")
            if not sep or name != name.strip():
                raise RemoteProtocolError(f"Invalid header line: {line!r}")
            try:
                headers.add(name, value)
            except InvalidHeader as exc:
                raise RemoteProtocolError(str(exc)) from exc

    def _body_stream(self, reader, status_code, headers, request):
        no_body = (
            (request is not None and request.method == "HEAD")
            or 100 <= status_code < 200
            or status_code in (codes.NO_CONTENT, codes.NOT_MODIFIED)
        )
        if no_body:
            return ContentLengthStream(reader, 0)

        transfer_encoding = headers.get_list("transfer-encoding")
        if transfer_encoding:
            codings = [
                coding.strip().lower()
                for value in transfer_encoding
                for coding in value.split(",")
            ]
            if codings[-1] == "chunked":
                return ChunkedStream(reader)
            _logger.debug(f"Transfer-Encoding {codings} without chunked, reading until close")
            return UntilCloseStream(reader)

        content_length = headers.get_list("content-length")
        if content_length:
            lengths = {
                length.strip() for value in content_length for length in value.split(",")
            }
            if len(lengths) != 1:
                raise RemoteProtocolError(f"Conflicting Content-Length values: {sorted(lengths)}")
            length = lengths.pop()
            if not length.isdigit():
                raise RemoteProtocolError(f"Invalid Content-Length: {length!r}")
            return ContentLengthStream(reader, int(length))

        return UntilCloseStream(reader)
