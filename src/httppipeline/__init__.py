# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
httppipeline package entrypoint.

Outbound HTTP calls travel through an ordered chain of request policies that ends at a
swappable transport. Policies add cross-cutting behaviour (user agent, request ids,
auth, retries, timeouts, logging) without touching call sites.
"""

from .config import DEFAULT_USER_AGENT, PipelineSettings, load_pipeline_settings
from .errors import ErrorCategory, PipelineError, PolicyError, ProtocolError, TransportError
from .http import (
    FakeHttpClient,
    HttpClient,
    HttpHeaders,
    HttpMethod,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    InMemoryHttpResponse,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .pipeline import (
    BaseRequestPolicy,
    HttpPipeline,
    HttpPipelineOptions,
    RequestPolicy,
    RequestPolicyFactory,
    create_default_http_pipeline,
)
from .policies import (
    RetryConfig,
    basic_auth_policy,
    bearer_token_policy,
    exponential_retry_policy,
    logging_policy,
    request_id_policy,
    timeout_policy,
    user_agent_policy,
)
from .version import __version__

__all__ = [
    "DEFAULT_USER_AGENT",
    "BaseRequestPolicy",
    "ErrorCategory",
    "FakeHttpClient",
    "HttpClient",
    "HttpHeaders",
    "HttpMethod",
    "HttpPipeline",
    "HttpPipelineOptions",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "InMemoryHttpResponse",
    "PipelineError",
    "PipelineSettings",
    "PolicyError",
    "ProtocolError",
    "RequestPolicy",
    "RequestPolicyFactory",
    "RetryConfig",
    "StubHttpClient",
    "TransportError",
    "basic_auth_policy",
    "bearer_token_policy",
    "create_default_http_client",
    "create_default_http_pipeline",
    "exponential_retry_policy",
    "load_pipeline_settings",
    "logging_policy",
    "request_id_policy",
    "setup_logging",
    "timeout_policy",
    "user_agent_policy",
    "__version__",
]
