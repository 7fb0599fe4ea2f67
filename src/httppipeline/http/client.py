# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and factory."""

from typing import Protocol

from ..config import PipelineSettings, load_pipeline_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """Minimal protocol for the transport at the end of a pipeline."""

    async def send_request(self, request: HttpRequest) -> HttpResponse: ...

    async def aclose(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_http_client(settings: PipelineSettings | None = None) -> HttpClient:
    """Factory for the default httpx-backed transport."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_pipeline_settings())
