# Immutable per-client settings

import datetime
import math
import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import dotenv_values

from ._headers import normalize_header_value

DEFAULT_REDIRECTION_LIMIT = 0

ENV_TIMEOUT = "MINIHTTP_TIMEOUT"
ENV_USER_AGENT = "MINIHTTP_USER_AGENT"
ENV_REDIRECTION_LIMIT = "MINIHTTP_REDIRECTION_LIMIT"


def _normalize_timeout(timeout):
    if timeout is None:
        return None
    if isinstance(timeout, datetime.timedelta):
        timeout = timeout.total_seconds()
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise TypeError(f"Timeout must be a number of seconds or a timedelta, got {timeout!r}")
    if not math.isfinite(timeout):
        raise ValueError(f"Timeout must be a finite number of seconds, got {timeout!r}")
    if timeout <= 0:
        raise ValueError(f"Timeout must be positive, got {timeout!r}")
    return float(timeout)


@dataclass(frozen=True)
class ClientConfig:
    """Settings shared by every attempt of every call made by a client.

    timeout: seconds (or a ``timedelta``) applied to connect, write and
        read; ``None`` blocks indefinitely.
    user_agent: default ``User-Agent`` sent when a request has none.
    redirection_limit: how many ``Location`` redirections to follow;
        ``0`` returns the first response as-is.
    """

    timeout: Optional[float] = None
    user_agent: Optional[str] = None
    redirection_limit: int = DEFAULT_REDIRECTION_LIMIT

    def __post_init__(self):
        object.__setattr__(self, "timeout", _normalize_timeout(self.timeout))
        if self.user_agent is not None:
            object.__setattr__(self, "user_agent", normalize_header_value(self.user_agent))
        limit = self.redirection_limit
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise TypeError(f"Redirection limit must be an integer, got {limit!r}")
        if limit < 0:
            raise ValueError(f"Redirection limit must not be negative, got {limit}")

    @property
    def max_attempts(self):
        return self.redirection_limit + 1

    def replace(self, **changes):
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ=None, env_file=None):
        """Build a config from ``MINIHTTP_*`` variables.

        Values from ``env_file`` (a dotenv file) are read first and
        overridden by ``environ``, which defaults to ``os.environ``.
        """
        values = {}
        if env_file is not None:
            values.update(
                {key: value for key, value in dotenv_values(env_file).items() if value is not None}
            )
        values.update(os.environ if environ is None else environ)

        kwargs = {}
        timeout = values.get(ENV_TIMEOUT, "").strip()
        if timeout:
            try:
                kwargs["timeout"] = _normalize_timeout(float(timeout))
            except ValueError:
                raise ValueError(f"{ENV_TIMEOUT} must be a positive number of seconds, got {timeout!r}") from None
        user_agent = values.get(ENV_USER_AGENT)
        if user_agent:
            kwargs["user_agent"] = user_agent
        limit = values.get(ENV_REDIRECTION_LIMIT, "").strip()
        if limit:
            try:
                kwargs["redirection_limit"] = int(limit)
            except ValueError:
                raise ValueError(f"{ENV_REDIRECTION_LIMIT} must be an integer, got {limit!r}") from None
        return cls(**kwargs)
