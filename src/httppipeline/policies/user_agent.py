# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""User-Agent tagging policy."""

from __future__ import annotations

from ..http.models import HttpRequest, HttpResponse
from ..pipeline.pipeline import HttpPipelineOptions
from ..pipeline.policy import BaseRequestPolicy, RequestPolicy, RequestPolicyFactory

USER_AGENT_HEADER = "User-Agent"


class UserAgentPolicy(BaseRequestPolicy):
    def __init__(self, next_policy: RequestPolicy, options: HttpPipelineOptions, user_agent: str, header_name: str):
        super().__init__(next_policy, options)
        self._user_agent = user_agent
        self._header_name = header_name

    async def send(self, request: HttpRequest) -> HttpResponse:
        if not request.headers.get(self._header_name):
            request.headers.set(self._header_name, self._user_agent)
        return await self.next_policy.send(request)


def user_agent_policy(user_agent: str | None = None, header_name: str = USER_AGENT_HEADER) -> RequestPolicyFactory:
    """Set ``header_name`` on requests that do not already carry one.

    Without an explicit value, the pipeline settings' user agent is used.
    """

    def factory(next_policy: RequestPolicy, options: HttpPipelineOptions) -> RequestPolicy:
        return UserAgentPolicy(next_policy, options, user_agent or options.settings.user_agent, header_name)

    return factory
