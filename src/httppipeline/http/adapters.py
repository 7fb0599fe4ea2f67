# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory transports for tests and offline use."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable

from .client import HttpClient
from .models import HttpRequest, HttpResponse, InMemoryHttpResponse

ResponseHandler = Callable[[HttpRequest], "HttpResponse | Awaitable[HttpResponse]"]
StubbedResponse = tuple[int, dict[str, str], "str | bytes | None"]


class FakeHttpClient(HttpClient):
    """
    Transport that hands every request to a callable.

    The handler may be a plain function or a coroutine function; either way it receives
    the request exactly as the innermost policy left it.
    """

    def __init__(self, handler: ResponseHandler):
        self._handler = handler
        self.requests: list[HttpRequest] = []

    async def send_request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        result = self._handler(request)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def aclose(self) -> None:
        return None


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests.

    Responses are registered per URL as (status, headers, body) and materialized per call,
    so each response is bound to the request that asked for it.
    """

    def __init__(self, responses: dict[str, StubbedResponse] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []

    def add(self, url: str, status_code: int = 200, headers: dict[str, str] | None = None, body: str | bytes | None = None) -> None:
        self._responses[url] = (status_code, dict(headers or {}), body)

    async def send_request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if request.url in self._responses:
            status_code, headers, body = self._responses[request.url]
            return InMemoryHttpResponse(request, status_code, headers, body)
        return InMemoryHttpResponse(request, 404, {}, "No stubbed response configured")

    async def aclose(self) -> None:
        return None
