# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bundled request policies."""

from .credentials import AuthorizationPolicy, basic_auth_policy, bearer_token_policy
from .logging import DEFAULT_REDACTED_HEADERS, LoggingPolicy, logging_policy, redact_headers, redact_url
from .request_id import REQUEST_ID_HEADER, RequestIdPolicy, request_id_policy
from .retry import DEFAULT_RETRY_STATUSES, ExponentialRetryPolicy, RetryConfig, exponential_retry_policy
from .timeout import TimeoutPolicy, timeout_policy
from .user_agent import USER_AGENT_HEADER, UserAgentPolicy, user_agent_policy

__all__ = [
    "DEFAULT_REDACTED_HEADERS",
    "DEFAULT_RETRY_STATUSES",
    "REQUEST_ID_HEADER",
    "USER_AGENT_HEADER",
    "AuthorizationPolicy",
    "ExponentialRetryPolicy",
    "LoggingPolicy",
    "RequestIdPolicy",
    "RetryConfig",
    "TimeoutPolicy",
    "UserAgentPolicy",
    "basic_auth_policy",
    "bearer_token_policy",
    "exponential_retry_policy",
    "logging_policy",
    "redact_headers",
    "redact_url",
    "request_id_policy",
    "timeout_policy",
    "user_agent_policy",
]
