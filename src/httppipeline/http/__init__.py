# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP model and transport exports."""

from .adapters import FakeHttpClient, StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import HttpHeaders
from .httpx_client import HttpxClient, HttpxResponse
from .method import HttpMethod
from .models import HttpRequest, HttpResponse, InMemoryHttpResponse

__all__ = [
    "FakeHttpClient",
    "HttpClient",
    "HttpHeaders",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "HttpxResponse",
    "InMemoryHttpResponse",
    "StubHttpClient",
    "create_default_http_client",
]
