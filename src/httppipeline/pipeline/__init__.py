# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Policy chain exports."""

from .pipeline import HttpPipeline, HttpPipelineOptions, TransportPolicy, create_default_http_pipeline
from .policy import BaseRequestPolicy, RequestPolicy, RequestPolicyFactory

__all__ = [
    "BaseRequestPolicy",
    "HttpPipeline",
    "HttpPipelineOptions",
    "RequestPolicy",
    "RequestPolicyFactory",
    "TransportPolicy",
    "create_default_http_pipeline",
]
