# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx
import pytest

from httppipeline.errors import PolicyError, ProtocolError
from httppipeline.http.headers import HttpHeaders
from httppipeline.http.method import HttpMethod
from httppipeline.http.models import HttpRequest, HttpResponse, InMemoryHttpResponse


class CountingResponse(HttpResponse):
    def __init__(self, request, raw):
        super().__init__(request, 200, {"Content-Type": "text/plain; charset=latin-1"})
        self._raw = raw
        self.reads = 0

    async def _read_body(self):
        self.reads += 1
        return self._raw


@pytest.mark.parametrize("set_name,get_name", [("Content-Type", "content-type"), ("x-custom", "X-CUSTOM"), ("ETag", "ETag")])
def test_headers_set_get_ignores_case(set_name, get_name):
    headers = HttpHeaders()
    headers.set(set_name, "value")
    assert headers.get(get_name) == "value"
    assert get_name in headers


def test_headers_overwrite_keeps_position_and_latest_case():
    headers = HttpHeaders({"Accept": "*/*", "x-trace": "1"})
    headers.set("ACCEPT", "text/html")
    assert headers.to_json() == {"ACCEPT": "text/html", "x-trace": "1"}
    assert list(headers) == ["ACCEPT", "x-trace"]
    assert len(headers) == 2


def test_headers_get_missing_returns_none():
    headers = HttpHeaders()
    assert headers.get("missing") is None
    assert headers.get("missing", "fallback") == "fallback"
    with pytest.raises(KeyError):
        headers["missing"]


def test_headers_remove_and_delete():
    headers = HttpHeaders([("A", "1"), ("B", None)])
    assert headers.get("b") == ""
    assert headers.remove("a") is True
    assert headers.remove("a") is False
    del headers["B"]
    assert headers.to_json() == {}
    with pytest.raises(KeyError):
        del headers["B"]


def test_headers_accept_httpx_headers_and_compare_case_insensitively():
    headers = HttpHeaders(httpx.Headers({"Content-Length": "5"}))
    assert headers.get("CONTENT-LENGTH") == "5"
    assert headers == {"content-length": "5"}
    assert headers == HttpHeaders({"CONTENT-LENGTH": "5"})
    copy = headers.copy()
    copy.set("X", "1")
    assert "X" not in headers


def test_headers_reject_empty_names():
    with pytest.raises(ValueError):
        HttpHeaders().set("  ", "value")


def test_http_method_coerce():
    assert HttpMethod.coerce("post") is HttpMethod.POST
    assert HttpMethod.coerce(HttpMethod.HEAD) is HttpMethod.HEAD
    assert str(HttpMethod.PATCH) == "PATCH"
    with pytest.raises(PolicyError):
        HttpMethod.coerce("FETCH")
    with pytest.raises(PolicyError):
        HttpMethod.coerce(None)


def test_request_defaults_and_coercion():
    request = HttpRequest(method="get", url="http://example", headers={"X-Test": "1"})
    assert request.method is HttpMethod.GET
    assert isinstance(request.headers, HttpHeaders)
    assert request.headers.to_json() == {"X-Test": "1"}
    assert request.body is None
    assert request.context == {}

    bare = HttpRequest(method=HttpMethod.DELETE, url="http://example")
    assert bare.headers.to_json() == {}


def test_request_requires_url_and_method():
    with pytest.raises(PolicyError):
        HttpRequest(method="GET", url="")
    with pytest.raises(PolicyError):
        HttpRequest(method="", url="http://example")


def test_request_clone_has_independent_headers():
    request = HttpRequest(method="POST", url="http://example", headers={"A": "1"}, body=b"payload")
    clone = request.clone()
    clone.headers.set("B", "2")
    assert request.headers.to_json() == {"A": "1"}
    assert clone.body is request.body
    assert clone is not request


def test_request_replayable_body():
    async def stream():
        yield b"chunk"

    assert HttpRequest(method="POST", url="http://example", body="text").has_replayable_body
    assert not HttpRequest(method="POST", url="http://example", body=stream()).has_replayable_body


@pytest.mark.asyncio
async def test_text_body_is_read_once_and_cached():
    response = CountingResponse(HttpRequest(method="GET", url="http://example"), "café".encode("latin-1"))

    first = await response.text_body()
    second = await response.text_body()

    assert first == "café"
    assert first is second
    assert response.reads == 1
    assert await response.body() == "café".encode("latin-1")
    assert response.reads == 1


@pytest.mark.asyncio
async def test_in_memory_response_bodies():
    request = HttpRequest(method="GET", url="http://example")

    text_response = InMemoryHttpResponse(request, 200, {}, "hello")
    assert await text_response.text_body() == "hello"
    assert await text_response.body() == b"hello"

    bytes_response = InMemoryHttpResponse(request, 200, {"Content-Type": "application/json"}, b'{"a": [1, 2]}')
    assert await bytes_response.json_body() == {"a": [1, 2]}
    assert await bytes_response.json_body() is await bytes_response.json_body()

    empty = InMemoryHttpResponse(request, 204)
    assert await empty.text_body() is None
    assert await empty.body() is None


@pytest.mark.asyncio
async def test_json_body_rejects_malformed_payloads():
    request = HttpRequest(method="GET", url="http://example")
    with pytest.raises(ProtocolError):
        await InMemoryHttpResponse(request, 200, {}, "{not json").json_body()
    with pytest.raises(ProtocolError):
        await InMemoryHttpResponse(request, 200, {}, "").json_body()


def test_response_ok_and_encoding():
    request = HttpRequest(method="GET", url="http://example")
    assert InMemoryHttpResponse(request, 302).ok is True
    assert InMemoryHttpResponse(request, 404).ok is False
    assert InMemoryHttpResponse(request, 200, {"content-type": 'text/html; charset="UTF-8"'}).encoding == "utf-8"
    assert InMemoryHttpResponse(request, 200, {"content-type": "text/html; charset=bogus"}).encoding == "utf-8"
    assert InMemoryHttpResponse(request, 200).encoding == "utf-8"
