# Top-level API functions backed by a throwaway Client

from ._client import Client
from ._config import ClientConfig
from ._request import Request


def request(
    method,
    url,
    *,
    headers=None,
    content=None,
    timeout=None,
    user_agent=None,
    redirection_limit=0,
):
    """Send a single request with a one-off client."""
    config = ClientConfig(
        timeout=timeout, user_agent=user_agent, redirection_limit=redirection_limit
    )
    with Client(config) as client:
        return client.request(Request(method, url, headers=headers, content=content))


def get(url, **kwargs):
    """Send a GET request."""
    return request("GET", url, **kwargs)


def head(url, **kwargs):
    """Send a HEAD request."""
    return request("HEAD", url, **kwargs)


def options(url, **kwargs):
    """Send an OPTIONS request."""
    return request("OPTIONS", url, **kwargs)


def delete(url, **kwargs):
    """Send a DELETE request."""
    return request("DELETE", url, **kwargs)


def post(url, **kwargs):
    """Send a POST request."""
    return request("POST", url, **kwargs)


def put(url, **kwargs):
    """Send a PUT request."""
    return request("PUT", url, **kwargs)


def patch(url, **kwargs):
    """Send a PATCH request."""
    return request("PATCH", url, **kwargs)
