# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pipeline construction and the default pipeline assembly."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..config import PipelineSettings, load_pipeline_settings
from ..errors import PolicyError, ProtocolError
from ..http.client import HttpClient, create_default_http_client
from ..http.headers import HttpHeaders
from ..http.models import HttpRequest, HttpResponse
from ..log import get_logger
from .policy import RequestPolicy, RequestPolicyFactory

logger = get_logger(__name__)


@dataclass(frozen=True)
class HttpPipelineOptions:
    """Per-pipeline configuration handed to every policy factory."""

    http_client: HttpClient
    settings: PipelineSettings = field(default_factory=load_pipeline_settings)
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        if self.http_client is None:
            raise PolicyError("HttpPipelineOptions.http_client is required")


class TransportPolicy:
    """Terminal link: hands the request to the transport and checks what comes back."""

    def __init__(self, http_client: HttpClient):
        self._http_client = http_client

    async def send(self, request: HttpRequest) -> HttpResponse:
        if not isinstance(request.headers, HttpHeaders):
            raise PolicyError("Request headers must be HttpHeaders by the time they reach the transport", request=request)
        if not isinstance(request.url, str) or not request.url.strip():
            raise PolicyError("Request url must be set by the time it reaches the transport", request=request)
        response = await self._http_client.send_request(request)
        if not isinstance(response, HttpResponse):
            raise ProtocolError(
                f"Transport returned {type(response).__name__}, expected HttpResponse",
                request=request,
            )
        if response.request is not request:
            raise ProtocolError("Transport returned a response bound to a different request", request=request)
        return response


class HttpPipeline:
    """
    An immutable chain of policies terminating at a transport.

    Factories are applied from the last to the first, each receiving the chain built so
    far, so ``policy_factories[0]`` produces the outermost policy and the last factory the
    one closest to the transport.
    """

    def __init__(self, policy_factories: Sequence[RequestPolicyFactory], options: HttpPipelineOptions):
        if not isinstance(options, HttpPipelineOptions):
            raise PolicyError("HttpPipeline requires HttpPipelineOptions")
        self._policy_factories: tuple[RequestPolicyFactory, ...] = tuple(policy_factories)
        self._options = options

        head: RequestPolicy = TransportPolicy(options.http_client)
        for factory in reversed(self._policy_factories):
            policy = factory(head, options)
            if not callable(getattr(policy, "send", None)):
                raise PolicyError(f"Policy factory {factory!r} returned {type(policy).__name__} without a send method")
            head = policy
        self._head = head
        logger.debug("Built pipeline with %d policies over %s", len(self._policy_factories), type(options.http_client).__name__)

    @property
    def policy_factories(self) -> tuple[RequestPolicyFactory, ...]:
        return self._policy_factories

    @property
    def options(self) -> HttpPipelineOptions:
        return self._options

    async def send(self, request: HttpRequest) -> HttpResponse:
        return await self._head.send(request)

    async def aclose(self) -> None:
        close = getattr(self._options.http_client, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> HttpPipeline:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


def create_default_http_pipeline(
    options: HttpPipelineOptions | None = None,
    *,
    settings: PipelineSettings | None = None,
) -> HttpPipeline:
    """
    Build a pipeline with the standard policies over the default httpx transport.

    Order, outermost first: request id, user agent, retry, timeout, logging. Retries
    wrap the timeout so each attempt gets its own deadline, and logging sits innermost
    so every attempt is logged.

    Pass either ``options`` or ``settings``; with ``options`` the settings come from
    ``options.settings``.
    """
    from ..policies import (
        RetryConfig,
        exponential_retry_policy,
        logging_policy,
        request_id_policy,
        timeout_policy,
        user_agent_policy,
    )

    if options is not None and settings is not None:
        raise PolicyError("Pass settings through HttpPipelineOptions when options are given")
    if options is None:
        settings = settings or load_pipeline_settings()
        options = HttpPipelineOptions(http_client=create_default_http_client(settings), settings=settings)
    settings = options.settings

    return HttpPipeline(
        [
            request_id_policy(),
            user_agent_policy(settings.user_agent),
            exponential_retry_policy(RetryConfig.from_settings(settings)),
            timeout_policy(settings.timeout),
            logging_policy(options.logger),
        ],
        options,
    )


__all__ = ["HttpPipeline", "HttpPipelineOptions", "TransportPolicy", "create_default_http_pipeline"]
