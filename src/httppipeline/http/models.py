# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response models passed through the pipeline."""

from __future__ import annotations

import asyncio
import codecs
import json
from abc import ABC, abstractmethod
from collections.abc import AsyncIterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Union

from ..errors import PolicyError, ProtocolError
from .headers import HttpHeaders
from .method import HttpMethod

RequestBody = Union[str, bytes, AsyncIterable[bytes], None]
ResponseBody = Union[str, bytes, None]


@dataclass(eq=False)
class HttpRequest:
    """
    Mutable description of one outbound call.

    Policies rewrite fields in place; the same instance travels the whole chain and ends
    up as ``response.request``. Per-call policy state belongs in ``context``.
    ``timeout`` and ``allow_redirects`` left as ``None`` defer to the transport settings.
    """

    method: HttpMethod | str
    url: str
    headers: HttpHeaders | Mapping[str, Any] | None = None
    body: RequestBody = None
    timeout: float | None = None
    allow_redirects: bool | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.method = HttpMethod.coerce(self.method)
        if not self.url or not str(self.url).strip():
            raise PolicyError("HTTP request url is required")
        self.url = str(self.url)
        if not isinstance(self.headers, HttpHeaders):
            self.headers = HttpHeaders(self.headers)

    @property
    def has_replayable_body(self) -> bool:
        return self.body is None or isinstance(self.body, (str, bytes))

    def clone(self) -> HttpRequest:
        """Copy with independent headers and context; the body is shared."""
        return replace(self, headers=self.headers.copy(), context=dict(self.context))


def _charset_from_content_type(content_type: str | None) -> str | None:
    if not content_type:
        return None
    for param in content_type.split(";")[1:]:
        key, _, value = param.partition("=")
        if key.strip().lower() == "charset":
            charset = value.strip().strip('"').strip("'")
            if not charset:
                return None
            try:
                return codecs.lookup(charset).name
            except LookupError:
                return None
    return None


class HttpResponse(ABC):
    """
    Response bound to the request that produced it.

    The body is read from the transport lazily, at most once; ``body``, ``text_body``
    and ``json_body`` cache their results so repeated calls return identical values.

    A response whose body is never read may still hold a pooled connection: close it,
    or use it as ``async with response:``. Reading the body releases it as well.
    """

    def __init__(
        self,
        request: HttpRequest,
        status_code: int,
        headers: HttpHeaders | Mapping[str, Any] | None = None,
        *,
        meta: dict[str, Any] | None = None,
    ):
        self.request = request
        self.status_code = status_code
        self.headers = headers if isinstance(headers, HttpHeaders) else HttpHeaders(headers)
        self.meta: dict[str, Any] = dict(meta or {})
        self._body_lock = asyncio.Lock()
        self._body_loaded = False
        self._body: bytes | None = None
        self._text: str | None = None
        self._text_loaded = False
        self._json: Any = None
        self._json_loaded = False

    @abstractmethod
    async def _read_body(self) -> bytes | None:
        """Read the raw body from the underlying source. Called at most once."""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    @property
    def encoding(self) -> str:
        return _charset_from_content_type(self.headers.get("Content-Type")) or "utf-8"

    async def body(self) -> bytes | None:
        async with self._body_lock:
            if not self._body_loaded:
                self._body = await self._read_body()
                self._body_loaded = True
        return self._body

    async def text_body(self) -> str | None:
        if not self._text_loaded:
            raw = await self.body()
            if raw is not None:
                self._text = raw.decode(self.encoding, errors="replace")
            self._text_loaded = True
        return self._text

    async def json_body(self) -> Any:
        if not self._json_loaded:
            text = await self.text_body()
            if text is None or not text.strip():
                raise ProtocolError("Response body is empty; expected JSON", request=self.request)
            try:
                self._json = json.loads(text)
            except ValueError as exc:
                raise ProtocolError(f"Response body is not valid JSON: {exc}", request=self.request) from exc
            self._json_loaded = True
        return self._json

    async def close(self) -> None:  # pragma: no cover - nothing to release by default
        return None

    async def __aenter__(self) -> HttpResponse:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.close()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.status_code} {self.request.method} {self.request.url}>"


class InMemoryHttpResponse(HttpResponse):
    """Response whose body is already held in memory (fakes, stubs, synthesized responses)."""

    def __init__(
        self,
        request: HttpRequest,
        status_code: int,
        headers: HttpHeaders | Mapping[str, Any] | None = None,
        body: ResponseBody = None,
        *,
        meta: dict[str, Any] | None = None,
    ):
        super().__init__(request, status_code, headers, meta=meta)
        self._source = body
        if isinstance(body, str):
            # Keep the caller's text as-is rather than round-tripping through bytes.
            self._text = body
            self._text_loaded = True

    async def _read_body(self) -> bytes | None:
        if self._source is None:
            return None
        if isinstance(self._source, str):
            return self._source.encode(self.encoding, errors="replace")
        return bytes(self._source)


__all__ = ["HttpRequest", "HttpResponse", "InMemoryHttpResponse", "RequestBody", "ResponseBody"]
