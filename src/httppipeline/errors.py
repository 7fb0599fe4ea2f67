# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .http.models import HttpRequest


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    SSL_ERROR = "SSL_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    POLICY_ERROR = "POLICY_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class PipelineError(Exception):
    """Base class for every error raised by the pipeline and its bundled policies."""

    default_category = ErrorCategory.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        request: HttpRequest | None = None,
    ):
        super().__init__(message)
        self.category = category or self.default_category
        self.request = request


class TransportError(PipelineError):
    """Network-level failure raised by a transport (DNS, connect, TLS, timeout)."""

    @classmethod
    def from_exception(cls, exc: BaseException, request: HttpRequest | None = None) -> TransportError:
        return cls(str(exc) or type(exc).__name__, category=categorize_exception(exc), request=request)


class PolicyError(PipelineError):
    """Raised deliberately by a policy or by pipeline construction on bad configuration."""

    default_category = ErrorCategory.POLICY_ERROR


class ProtocolError(PipelineError):
    """Unexpected response shape from the transport, or an undecodable body."""

    default_category = ErrorCategory.PROTOCOL_ERROR


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    import asyncio
    import socket
    import ssl as ssl_module

    import httpx

    if isinstance(exc, PipelineError):
        return exc.category

    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    cause: Any = exc.__cause__ or exc.__context__
    if isinstance(exc, httpx.ConnectError) and cause is not None and cause is not exc:
        nested = categorize_exception(cause)
        if nested in (ErrorCategory.SSL_ERROR, ErrorCategory.DNS_ERROR):
            return nested

    if isinstance(exc, (httpx.RemoteProtocolError, httpx.LocalProtocolError, httpx.DecodingError)):
        return ErrorCategory.PROTOCOL_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "ErrorCategory",
    "PipelineError",
    "PolicyError",
    "ProtocolError",
    "TransportError",
    "categorize_exception",
]
