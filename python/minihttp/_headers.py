# Case-insensitive, ordered header collection

import re

from ._exceptions import InvalidHeader

# RFC 9110 token characters
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_FORBIDDEN_VALUE_CHARS = ("\r", "\n", "\x00")


def _normalize_name(name):
    if isinstance(name, bytes):
        name = name.decode("latin-1")
    if not isinstance(name, str) or not _TOKEN_RE.match(name):
        raise InvalidHeader(f"Invalid header name: {name!r}")
    return name


def normalize_header_value(value):
    """Validate a header value and return it as text.

    Surrounding whitespace is stripped; CR, LF and NUL are rejected.
    """
    if isinstance(value, bytes):
        value = value.decode("latin-1")
    if not isinstance(value, str):
        raise InvalidHeader(f"Header value must be str or bytes, got {type(value).__name__}")
    if any(char in value for char in _FORBIDDEN_VALUE_CHARS):
        raise InvalidHeader(f"Invalid header value: {value!r}")
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        raise InvalidHeader(f"Header value is not latin-1 encodable: {value!r}") from None
    return value.strip(" \t")


class Headers:
    """HTTP headers as an ordered multi-map with case-insensitive names.

    ``headers[name] = value`` and :meth:`set` replace every existing field
    with that name; the replacement keeps the position of the first one.
    :meth:`add` appends another field, which is how repeated response
    fields are kept.
    """

    def __init__(self, headers=None):
        self._items = []
        if headers is None:
            return
        if isinstance(headers, Headers):
            self._items = list(headers._items)
        elif hasattr(headers, "items"):
            for name, value in headers.items():
                self.set(name, value)
        else:
            for name, value in headers:
                self.set(name, value)

    def set(self, name, value):
        name = _normalize_name(name)
        value = normalize_header_value(value)
        lowered = name.lower()
        position = None
        kept = []
        for index, (existing, existing_value) in enumerate(self._items):
            if existing.lower() == lowered:
                if position is None:
                    position = len(kept)
                continue
            kept.append((existing, existing_value))
        if position is None:
            kept.append((name, value))
        else:
            kept.insert(position, (name, value))
        self._items = kept

    def add(self, name, value):
        self._items.append((_normalize_name(name), normalize_header_value(value)))

    def get(self, name, default=None):
        lowered = name.lower()
        for existing, value in self._items:
            if existing.lower() == lowered:
                return value
        return default

    def get_list(self, name):
        lowered = name.lower()
        return [value for existing, value in self._items if existing.lower() == lowered]

    def setdefault(self, name, value):
        current = self.get(name)
        if current is None:
            self.set(name, value)
            return self.get(name)
        return current

    def update(self, other):
        for name, value in Headers(other).items():
            self.set(name, value)

    def copy(self):
        return Headers(self)

    def keys(self):
        return [name for name, _ in self._items]

    def values(self):
        return [value for _, value in self._items]

    def items(self):
        return list(self._items)

    def __getitem__(self, name):
        value = self.get(name)
        if value is None:
            raise KeyError(name)
        return value

    def __setitem__(self, name, value):
        self.set(name, value)

    def __delitem__(self, name):
        lowered = name.lower()
        remaining = [item for item in self._items if item[0].lower() != lowered]
        if len(remaining) == len(self._items):
            raise KeyError(name)
        self._items = remaining

    def __contains__(self, name):
        if not isinstance(name, str):
            return False
        return self.get(name) is not None

    def __iter__(self):
        return iter(self.keys())

    def __len__(self):
        return len(self._items)

    def __eq__(self, other):
        try:
            other = Headers(other)
        except (InvalidHeader, TypeError, ValueError):
            return False
        mine = sorted((name.lower(), value) for name, value in self._items)
        theirs = sorted((name.lower(), value) for name, value in other._items)
        return mine == theirs

    def __repr__(self):
        return f"Headers({self._items!r})"
