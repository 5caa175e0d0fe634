"""
minihttp - a minimal HTTP/1.1 client with bounded redirect following
"""

from ._api import delete, get, head, options, patch, post, put, request
from ._client import Client, RedirectEngine
from ._codec import Codec, HTTP11Codec
from ._compat import codes, create_ssl_context
from ._config import ClientConfig
from ._dispatch import ConnectionDispatcher, TransportKind
from ._exceptions import (
    AddressError,
    AddressResolutionFailure,
    CodecFailure,
    ConnectFailure,
    ConnectTimeout,
    InvalidHeader,
    InvalidInput,
    InvalidRedirectTarget,
    InvalidURL,
    LocalProtocolError,
    ReadError,
    ReadTimeout,
    RemoteProtocolError,
    RequestError,
    SchemeError,
    StreamClosed,
    StreamConsumed,
    StreamError,
    TimeoutException,
    TooManyRedirects,
    TransportError,
    WriteError,
    WriteTimeout,
)
from ._headers import Headers
from ._request import Request
from ._resolver import AddressResolver, Endpoint, SystemResolver
from ._response import Response
from ._streams import ByteStream, IteratorByteStream, SyncByteStream
from ._transports import BaseTransport, TCPTransport
from ._urls import URL

__version__ = "0.1.0"

__all__ = [
    "get",
    "head",
    "options",
    "delete",
    "post",
    "put",
    "patch",
    "request",
    "Client",
    "ClientConfig",
    "RedirectEngine",
    "ConnectionDispatcher",
    "TransportKind",
    "Codec",
    "HTTP11Codec",
    "AddressResolver",
    "SystemResolver",
    "Endpoint",
    "BaseTransport",
    "TCPTransport",
    "Request",
    "Response",
    "Headers",
    "URL",
    "ByteStream",
    "IteratorByteStream",
    "SyncByteStream",
    "codes",
    "create_ssl_context",
    "RequestError",
    "InvalidInput",
    "SchemeError",
    "AddressError",
    "InvalidURL",
    "InvalidHeader",
    "TransportError",
    "TimeoutException",
    "AddressResolutionFailure",
    "ConnectFailure",
    "ConnectTimeout",
    "CodecFailure",
    "WriteError",
    "ReadError",
    "WriteTimeout",
    "ReadTimeout",
    "LocalProtocolError",
    "RemoteProtocolError",
    "TooManyRedirects",
    "InvalidRedirectTarget",
    "StreamError",
    "StreamConsumed",
    "StreamClosed",
]
