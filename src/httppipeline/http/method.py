# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP verbs understood by the pipeline."""

from __future__ import annotations

from enum import Enum

from ..errors import PolicyError


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"

    @classmethod
    def coerce(cls, value: HttpMethod | str | None) -> HttpMethod:
        """Accept an enum member or a verb in any case."""
        if isinstance(value, HttpMethod):
            return value
        name = str(value or "").strip().upper()
        if not name:
            raise PolicyError("HTTP method is required")
        try:
            return cls(name)
        except ValueError:
            raise PolicyError(f"Unsupported HTTP method: {value!r}") from None

    def __str__(self) -> str:
        return self.value
