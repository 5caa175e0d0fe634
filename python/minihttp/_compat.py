# Compatibility utilities, status codes, and helpers

import logging as _logging
import os
import ssl
from http import HTTPStatus
from pathlib import Path

# Library logger; handlers are left to the application
_logger = _logging.getLogger("minihttp")


# Status codes with flexible access patterns: codes.FOUND == 302,
# codes(302).phrase == "Found"
codes = HTTPStatus


def reason_phrase(status_code):
    """Return the standard reason phrase for a status code, or ''."""
    try:
        return codes(status_code).phrase
    except ValueError:
        return ""


def _load_ca_locations(context, location):
    path = Path(location)
    if path.is_dir():
        context.load_verify_locations(capath=str(path))
    elif path.is_file():
        context.load_verify_locations(cafile=str(path))
    else:
        raise IOError(f"Could not find a suitable TLS CA certificate bundle, invalid path: {location}")


def create_ssl_context(cert=None, verify=True, trust_env=True):
    """Build the ``ssl.SSLContext`` used by ``TCPTransport``.

    ``verify`` is ``True``, ``False`` (no certificate or hostname checks) or
    the path of a CA file or directory. ``cert`` is a client certificate
    path or a ``(certfile, keyfile[, password])`` tuple. With ``trust_env``,
    ``SSL_CERT_FILE``/``SSL_CERT_DIR`` add CA locations and ``SSLKEYLOGFILE``
    turns on key logging.
    """
    context = ssl.create_default_context()
    if verify is False:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    elif verify is not True:
        _load_ca_locations(context, verify)

    if isinstance(cert, tuple):
        certfile, keyfile, *password = cert
        context.load_cert_chain(str(certfile), str(keyfile), *password)
    elif cert is not None:
        context.load_cert_chain(str(cert))

    if trust_env:
        if os.environ.get("SSL_CERT_FILE"):
            context.load_verify_locations(cafile=os.environ["SSL_CERT_FILE"])
        if os.environ.get("SSL_CERT_DIR"):
            context.load_verify_locations(capath=os.environ["SSL_CERT_DIR"])
        if os.environ.get("SSLKEYLOGFILE"):
            context.keylog_filename = os.environ["SSLKEYLOGFILE"]
    return context
