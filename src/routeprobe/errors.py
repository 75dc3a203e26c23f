# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class HarnessError(Exception):
    """Raised when the harness itself cannot run (bad configuration, bad endpoint table)."""


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


_DNS_MARKERS = ("name or service not known", "nodename nor servname", "getaddrinfo failed", "name resolution")


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, httpx.ConnectError):
        # httpx wraps resolver failures in ConnectError; the cause or message tells them apart.
        cause = exc.__cause__ or exc.__context__
        if isinstance(cause, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR
        if isinstance(cause, ssl_module.SSLError):
            return ErrorCategory.SSL_ERROR
        message = str(exc).lower()
        if any(marker in message for marker in _DNS_MARKERS):
            return ErrorCategory.DNS_ERROR
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, TimeoutError)):
        return ErrorCategory.TIMEOUT if isinstance(exc, TimeoutError) else ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def categorize_error_type(error_type: str | None) -> ErrorCategory:
    """Best-effort category for a response that only carries the exception class name."""
    if not error_type:
        return ErrorCategory.UNKNOWN_ERROR
    name = error_type.lower()
    if "timeout" in name:
        return ErrorCategory.TIMEOUT
    if "ssl" in name or "certificate" in name:
        return ErrorCategory.SSL_ERROR
    if "gaierror" in name or "herror" in name:
        return ErrorCategory.DNS_ERROR
    if "connect" in name or "network" in name or "protocol" in name or "proxy" in name:
        return ErrorCategory.CONNECTION_ERROR
    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "timed out waiting for a response",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "connection failed",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "request could not be completed",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "request could not be completed")


__all__ = [
    "ErrorCategory",
    "HarnessError",
    "categorize_error_type",
    "categorize_exception",
    "error_category_to_reason",
]
