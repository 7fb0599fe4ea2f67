# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Client request id policy."""

from __future__ import annotations

import uuid

from ..http.models import HttpRequest, HttpResponse
from ..pipeline.pipeline import HttpPipelineOptions
from ..pipeline.policy import BaseRequestPolicy, RequestPolicy, RequestPolicyFactory

REQUEST_ID_HEADER = "x-client-request-id"


class RequestIdPolicy(BaseRequestPolicy):
    def __init__(self, next_policy: RequestPolicy, options: HttpPipelineOptions, header_name: str):
        super().__init__(next_policy, options)
        self._header_name = header_name

    async def send(self, request: HttpRequest) -> HttpResponse:
        request_id = request.headers.get(self._header_name)
        if not request_id:
            request_id = str(uuid.uuid4())
            request.headers.set(self._header_name, request_id)
        request.context["request_id"] = request_id
        return await self.next_policy.send(request)


def request_id_policy(header_name: str = REQUEST_ID_HEADER) -> RequestPolicyFactory:
    def factory(next_policy: RequestPolicy, options: HttpPipelineOptions) -> RequestPolicy:
        return RequestIdPolicy(next_policy, options, header_name)

    return factory
