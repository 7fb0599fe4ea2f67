# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import httpx

from ..config import PipelineSettings, load_pipeline_settings
from ..errors import TransportError
from .client import HttpClient
from .headers import HttpHeaders
from .models import HttpRequest, HttpResponse


def _response_headers(response: httpx.Response) -> HttpHeaders:
    """Headers in wire case; repeated fields (e.g. Set-Cookie) are joined with ", "."""
    merged: dict[str, tuple[str, list[str]]] = {}
    encoding = response.headers.encoding
    for raw_name, raw_value in response.headers.raw:
        name = raw_name.decode(encoding)
        merged.setdefault(name.lower(), (name, []))[1].append(raw_value.decode(encoding))
    return HttpHeaders([(name, ", ".join(values)) for name, values in merged.values()])


class HttpxResponse(HttpResponse):
    """
    Response streaming its body from an open httpx response.

    The connection stays checked out of the pool until the body is read or the response
    is closed. Header names keep the case sent by the server.
    """

    def __init__(self, request: HttpRequest, response: httpx.Response, *, max_body_bytes: int):
        super().__init__(request, response.status_code, _response_headers(response))
        self._response = response
        self._max_body_bytes = max_body_bytes
        self.meta["url"] = str(response.url)
        self.meta["http_version"] = response.http_version

    async def _read_body(self) -> bytes | None:
        content = bytearray()
        truncated = False
        try:
            async for chunk in self._response.aiter_bytes():
                if not chunk:
                    continue
                remaining = self._max_body_bytes - len(content)
                if remaining <= 0:
                    truncated = True
                    break
                if len(chunk) > remaining:
                    content.extend(chunk[:remaining])
                    truncated = True
                    break
                content.extend(chunk)
        except httpx.HTTPError as exc:
            raise TransportError.from_exception(exc, self.request) from exc
        finally:
            await self._response.aclose()

        self.meta.update(
            {
                "body_truncated": truncated,
                "body_bytes_read": len(content),
                "body_bytes_limit": self._max_body_bytes,
            }
        )
        return bytes(content)

    async def close(self) -> None:
        await self._response.aclose()


class HttpxClient(HttpClient):
    """Asynchronous httpx client wrapper."""

    def __init__(
        self,
        settings: PipelineSettings | None = None,
        client: httpx.AsyncClient | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or load_pipeline_settings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
            transport=transport,
        )

    async def send_request(self, request: HttpRequest) -> HttpResponse:
        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = 16 * 1024 * 1024

        outbound = self._client.build_request(
            str(request.method),
            request.url,
            headers=request.headers.raw_headers(),
            content=request.body,
            timeout=request.timeout if request.timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )
        try:
            response = await self._client.send(
                outbound,
                stream=True,
                follow_redirects=request.allow_redirects if request.allow_redirects is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.HTTPError as exc:
            raise TransportError.from_exception(exc, request) from exc

        return HttpxResponse(request, response, max_body_bytes=max_body_bytes)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpxClient:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()
