# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exponential backoff retry policy."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from ..config import PipelineSettings
from ..errors import TransportError
from ..http.models import HttpRequest, HttpResponse
from ..pipeline.pipeline import HttpPipelineOptions
from ..pipeline.policy import BaseRequestPolicy, RequestPolicy, RequestPolicyFactory

logger = logging.getLogger(__name__)

DEFAULT_RETRY_STATUSES = frozenset({408, 429, 500, 502, 503, 504})


@dataclass(frozen=True)
class RetryConfig:
    """Retry schedule shared by every call through one pipeline."""

    max_attempts: int = 4
    backoff_factor: float = 2.0
    initial_delay: float = 0.5
    max_delay: float = 30.0
    retry_statuses: frozenset[int] = DEFAULT_RETRY_STATUSES

    @classmethod
    def from_settings(cls, settings: PipelineSettings) -> RetryConfig:
        """Build a retry config from the shared PipelineSettings."""
        return cls(
            max_attempts=max(1, settings.max_retries + 1),
            backoff_factor=settings.backoff_factor,
            initial_delay=settings.initial_delay,
            max_delay=settings.max_delay,
        )

    def delay_for(self, retry_number: int) -> float:
        """Delay before retry ``retry_number`` (0-based)."""
        delay = self.initial_delay * (self.backoff_factor**retry_number)
        return max(0.0, min(delay, self.max_delay))


def _retry_after_seconds(response: HttpResponse) -> float | None:
    value = response.headers.get("Retry-After")
    if not value:
        return None
    value = value.strip()
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())


class ExponentialRetryPolicy(BaseRequestPolicy):
    """
    Retries transport failures and retryable status codes.

    Requests with a streaming body are sent once, since the stream cannot be replayed.
    The retry count lives in ``request.context`` and ``response.meta``, never on the policy.
    """

    def __init__(self, next_policy: RequestPolicy, options: HttpPipelineOptions, config: RetryConfig):
        super().__init__(next_policy, options)
        self._config = config

    @property
    def config(self) -> RetryConfig:
        return self._config

    async def send(self, request: HttpRequest) -> HttpResponse:
        cfg = self._config
        max_attempts = cfg.max_attempts if request.has_replayable_body else 1
        attempt = 0

        while True:
            request.context["retry_count"] = attempt
            try:
                response = await self.next_policy.send(request)
            except TransportError as exc:
                attempt += 1
                if attempt >= max_attempts:
                    raise
                delay = cfg.delay_for(attempt - 1)
                logger.info("Retrying %s %s after %s (attempt %d/%d, sleeping %.2fs)", request.method, request.url, exc.category.value, attempt + 1, max_attempts, delay)
                await asyncio.sleep(delay)
                continue

            if response.status_code not in cfg.retry_statuses:
                if attempt:
                    response.meta["retry_count"] = attempt
                return response

            if attempt + 1 >= max_attempts:
                response.meta["retry_count"] = attempt
                response.meta["retry_exhausted"] = True
                return response

            attempt += 1
            retry_after = _retry_after_seconds(response)
            delay = min(retry_after, cfg.max_delay) if retry_after is not None else cfg.delay_for(attempt - 1)
            logger.info("Retrying %s %s after status %d (attempt %d/%d, sleeping %.2fs)", request.method, request.url, response.status_code, attempt + 1, max_attempts, delay)
            await response.close()
            await asyncio.sleep(delay)


def exponential_retry_policy(config: RetryConfig | None = None) -> RequestPolicyFactory:
    """Retry factory; without ``config`` the schedule comes from the pipeline settings."""

    def factory(next_policy: RequestPolicy, options: HttpPipelineOptions) -> RequestPolicy:
        return ExponentialRetryPolicy(next_policy, options, config or RetryConfig.from_settings(options.settings))

    return factory
