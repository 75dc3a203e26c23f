# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across routeprobe."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..config import HttpSettings
from ..errors import ErrorCategory

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None
    allow_redirects: bool = False


@dataclass
class HttpResponse:
    """
    Normalized HTTP response.

    `ok` means an HTTP response was received, whatever its status. Transport
    failures have `ok=False`, no status code, and carry the error details.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    url: str | None = None
    elapsed_ms: float | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory | None = None
    meta: dict[str, Any] = field(default_factory=dict)


@dataclass
class RetryConfig:
    """Retry policy for transport failures derived from HttpSettings."""

    max_attempts: int = 1
    backoff_factor: float = 2.0
    initial_delay: float = 0.5

    @classmethod
    def from_settings(cls, settings: HttpSettings) -> RetryConfig:
        """Build a retry config from the shared HttpSettings."""
        return cls(
            max_attempts=max(1, settings.max_retries),
            backoff_factor=settings.backoff_factor,
            initial_delay=max(0.0, settings.initial_delay),
        )
