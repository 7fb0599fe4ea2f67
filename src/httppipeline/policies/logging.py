# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request/response logging policy with header and URL redaction."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from urllib.parse import urlsplit, urlunsplit

from ..errors import PipelineError
from ..http.headers import HttpHeaders
from ..http.models import HttpRequest, HttpResponse
from ..pipeline.pipeline import HttpPipelineOptions
from ..pipeline.policy import BaseRequestPolicy, RequestPolicy, RequestPolicyFactory

REDACTED = "REDACTED"

DEFAULT_REDACTED_HEADERS = frozenset(
    {
        "authorization",
        "proxy-authorization",
        "cookie",
        "set-cookie",
        "x-api-key",
    }
)


def redact_headers(headers: HttpHeaders, redacted: Iterable[str] = DEFAULT_REDACTED_HEADERS) -> dict[str, str]:
    """Copy of ``headers`` with sensitive values replaced."""
    names = {name.lower() for name in redacted}
    return {name: REDACTED if name.lower() in names else value for name, value in headers.items()}


def redact_url(url: str) -> str:
    """Strip userinfo credentials from a URL."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if "@" not in parts.netloc:
        return url
    host = parts.netloc.rsplit("@", 1)[1]
    return urlunsplit((parts.scheme, f"{REDACTED}@{host}", parts.path, parts.query, parts.fragment))


class LoggingPolicy(BaseRequestPolicy):
    def __init__(self, next_policy: RequestPolicy, options: HttpPipelineOptions, logger: logging.Logger, redacted_headers: frozenset[str]):
        super().__init__(next_policy, options)
        self._logger = logger
        self._redacted_headers = redacted_headers

    async def send(self, request: HttpRequest) -> HttpResponse:
        url = redact_url(request.url)
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug("--> %s %s headers=%s", request.method, url, redact_headers(request.headers, self._redacted_headers))

        started = time.perf_counter()
        try:
            response = await self.next_policy.send(request)
        except PipelineError as exc:
            elapsed_ms = (time.perf_counter() - started) * 1000
            self._logger.warning("<-- %s %s failed after %.1fms: %s (%s)", request.method, url, elapsed_ms, exc, exc.category.value)
            raise
        except Exception as exc:
            elapsed_ms = (time.perf_counter() - started) * 1000
            self._logger.warning("<-- %s %s failed after %.1fms: %s", request.method, url, elapsed_ms, type(exc).__name__)
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        self._logger.info("<-- %d %s %s (%.1fms)", response.status_code, request.method, url, elapsed_ms)
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug("<-- headers=%s", redact_headers(response.headers, self._redacted_headers))
        return response


def logging_policy(
    logger: logging.Logger | None = None,
    redacted_headers: Iterable[str] = DEFAULT_REDACTED_HEADERS,
) -> RequestPolicyFactory:
    """Log each request and its outcome; falls back to the pipeline's logger, then this module's."""
    redacted = frozenset(name.lower() for name in redacted_headers)

    def factory(next_policy: RequestPolicy, options: HttpPipelineOptions) -> RequestPolicy:
        effective = logger or options.logger or logging.getLogger(__name__)
        return LoggingPolicy(next_policy, options, effective, redacted)

    return factory
