# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Case-insensitive header collection.

HTTP header field names are case-insensitive (RFC 9110), but callers and tests compare
headers by the exact names they set. HttpHeaders keeps both: lookups ignore case while
iteration and ``to_json`` report names exactly as last set, in insertion order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any


def _coerce_header_items(headers: Any) -> list[tuple[object, object]]:
    """
    Best-effort coercion of "dict-like" header containers into a list of pairs.

    Accepts:
    - plain dicts and other Mappings
    - httpx.Headers
    - email.message.Message / HTTPMessage-like types (support `.items()`)
    - iterable-of-pairs (e.g. list[tuple[str, str]])
    """
    if not headers:
        return []
    if isinstance(headers, HttpHeaders):
        return list(headers.items())
    items = getattr(headers, "items", None)
    if callable(items):
        return list(items())
    return [(key, value) for key, value in headers]


class HttpHeaders(MutableMapping[str, str]):
    """Ordered header mapping with case-insensitive lookup."""

    def __init__(self, raw: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None):
        self._entries: dict[str, tuple[str, str]] = {}
        for key, value in _coerce_header_items(raw):
            if key is None:
                continue
            self.set(str(key), value)

    def set(self, name: str, value: Any) -> None:
        """Set a header, replacing any existing value regardless of case."""
        name = str(name).strip()
        if not name:
            raise ValueError("Header name must not be empty")
        self._entries[name.lower()] = (name, "" if value is None else str(value))

    def get(self, name: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return a header value using case-insensitive matching."""
        entry = self._entries.get(str(name).lower())
        return default if entry is None else entry[1]

    def contains(self, name: str) -> bool:
        return str(name).lower() in self._entries

    def remove(self, name: str) -> bool:
        """Delete a header; returns whether it was present."""
        return self._entries.pop(str(name).lower(), None) is not None

    def to_json(self) -> dict[str, str]:
        """Plain dict of header names (exact case as last set) to values."""
        return {name: value for name, value in self._entries.values()}

    def raw_headers(self) -> list[tuple[str, str]]:
        return list(self._entries.values())

    def copy(self) -> HttpHeaders:
        return HttpHeaders(self.raw_headers())

    def __getitem__(self, name: str) -> str:
        entry = self._entries.get(str(name).lower())
        if entry is None:
            raise KeyError(name)
        return entry[1]

    def __setitem__(self, name: str, value: str) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        if not self.remove(name):
            raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)

    def __iter__(self) -> Iterator[str]:
        return iter([name for name, _ in self._entries.values()])

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HttpHeaders):
            return {k: v for k, (_, v) in self._entries.items()} == {k: v for k, (_, v) in other._entries.items()}
        if isinstance(other, Mapping):
            return self == HttpHeaders(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"HttpHeaders({self.to_json()!r})"


__all__ = ["HttpHeaders"]
