# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authorization header policies."""

from __future__ import annotations

import base64
import inspect
from collections.abc import Awaitable, Callable
from typing import Union

from ..errors import PolicyError
from ..http.models import HttpRequest, HttpResponse
from ..pipeline.pipeline import HttpPipelineOptions
from ..pipeline.policy import BaseRequestPolicy, RequestPolicy, RequestPolicyFactory

AUTHORIZATION_HEADER = "Authorization"

TokenProvider = Callable[[], Union[str, Awaitable[str]]]


class AuthorizationPolicy(BaseRequestPolicy):
    """Sets the Authorization header from a fixed value or a provider evaluated per call."""

    def __init__(self, next_policy: RequestPolicy, options: HttpPipelineOptions, scheme: str, credential: str | TokenProvider):
        super().__init__(next_policy, options)
        self._scheme = scheme
        self._credential = credential

    async def _resolve_credential(self, request: HttpRequest) -> str:
        if not callable(self._credential):
            return self._credential
        value = self._credential()
        if inspect.isawaitable(value):
            value = await value
        if not value:
            raise PolicyError(f"{self._scheme} credential provider returned an empty value", request=request)
        return str(value)

    async def send(self, request: HttpRequest) -> HttpResponse:
        credential = await self._resolve_credential(request)
        request.headers.set(AUTHORIZATION_HEADER, f"{self._scheme} {credential}")
        return await self.next_policy.send(request)


def bearer_token_policy(token: str | TokenProvider) -> RequestPolicyFactory:
    """Authorize with ``Bearer <token>``; ``token`` may be a (sync or async) callable."""
    if not token:
        raise PolicyError("bearer_token_policy requires a token")

    def factory(next_policy: RequestPolicy, options: HttpPipelineOptions) -> RequestPolicy:
        return AuthorizationPolicy(next_policy, options, "Bearer", token)

    return factory


def basic_auth_policy(username: str, password: str) -> RequestPolicyFactory:
    if not username:
        raise PolicyError("basic_auth_policy requires a username")
    encoded = base64.b64encode(f"{username}:{password or ''}".encode()).decode("ascii")

    def factory(next_policy: RequestPolicy, options: HttpPipelineOptions) -> RequestPolicy:
        return AuthorizationPolicy(next_policy, options, "Basic", encoded)

    return factory
