# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request policy contract.

A policy wraps the next link of the chain and implements a single ``send`` coroutine.
Request-phase work happens before awaiting ``next_policy.send``, response-phase work
after it, so request mutations run outermost-first and response mutations run
innermost-first. A policy may also short-circuit (return a response without forwarding)
or catch and transform errors raised further down the chain.

Policies are built once per pipeline and shared by every concurrent ``send``: they must
not keep per-request state on ``self``. Use locals or ``request.context`` instead.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..http.models import HttpRequest, HttpResponse

if TYPE_CHECKING:
    from .pipeline import HttpPipelineOptions


@runtime_checkable
class RequestPolicy(Protocol):
    """A link of the pipeline: receives a request, returns its response."""

    async def send(self, request: HttpRequest) -> HttpResponse: ...


RequestPolicyFactory = Callable[[RequestPolicy, "HttpPipelineOptions"], RequestPolicy]


class BaseRequestPolicy(ABC):
    """
    Convenience base holding the next policy and the pipeline options.

    Subclasses are valid factories themselves: ``HttpPipeline([MyPolicy], options)``
    calls ``MyPolicy(next_policy, options)``.
    """

    def __init__(self, next_policy: RequestPolicy, options: HttpPipelineOptions):
        self._next_policy = next_policy
        self._options = options

    @property
    def next_policy(self) -> RequestPolicy:
        return self._next_policy

    @property
    def options(self) -> HttpPipelineOptions:
        return self._options

    @abstractmethod
    async def send(self, request: HttpRequest) -> HttpResponse:
        """Process ``request``, normally by awaiting ``self.next_policy.send(request)``."""


__all__ = ["BaseRequestPolicy", "RequestPolicy", "RequestPolicyFactory"]
