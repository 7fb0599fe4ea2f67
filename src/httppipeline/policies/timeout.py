# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-call deadline policy."""

from __future__ import annotations

import asyncio

from ..errors import ErrorCategory, TransportError
from ..http.models import HttpRequest, HttpResponse
from ..pipeline.pipeline import HttpPipelineOptions
from ..pipeline.policy import BaseRequestPolicy, RequestPolicy, RequestPolicyFactory


class TimeoutPolicy(BaseRequestPolicy):
    """
    Bounds the rest of the chain with ``request.timeout`` (or the policy default).

    The deadline covers everything up to the response headers; body reads are bounded by
    the transport's own timeout.
    """

    def __init__(self, next_policy: RequestPolicy, options: HttpPipelineOptions, default_timeout: float | None):
        super().__init__(next_policy, options)
        self._default_timeout = default_timeout

    async def send(self, request: HttpRequest) -> HttpResponse:
        timeout = request.timeout if request.timeout is not None else self._default_timeout
        if timeout is None or timeout <= 0:
            return await self.next_policy.send(request)
        try:
            return await asyncio.wait_for(self.next_policy.send(request), timeout)
        except asyncio.TimeoutError as exc:
            raise TransportError(
                f"Request timed out after {timeout:g}s",
                category=ErrorCategory.TIMEOUT,
                request=request,
            ) from exc


def timeout_policy(default_timeout: float | None = None) -> RequestPolicyFactory:
    def factory(next_policy: RequestPolicy, options: HttpPipelineOptions) -> RequestPolicy:
        timeout = default_timeout if default_timeout is not None else options.settings.timeout
        return TimeoutPolicy(next_policy, options, timeout)

    return factory
