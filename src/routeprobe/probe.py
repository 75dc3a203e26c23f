# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-endpoint HTTP probe."""

from __future__ import annotations

import json
import logging
from urllib.parse import urlsplit

from .config import DEFAULT_API_PREFIX, HttpSettings, load_http_settings
from .errors import HarnessError, categorize_error_type
from .http.client import HttpClient, create_default_http_client
from .http.models import HttpRequest, RetryConfig
from .http.retry import send_with_retries
from .models import ProbeResult, ProbeSpec

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


def normalize_base_url(base_url: str) -> str:
    """Validate that `base_url` is an http(s) origin and strip any trailing slash."""
    raw = str(base_url or "").strip()
    parts = urlsplit(raw)
    if parts.scheme not in {"http", "https"} or not parts.hostname:
        raise HarnessError(f"Target must be an http(s) origin such as http://localhost:5000, got {base_url!r}")
    if parts.query or parts.fragment:
        raise HarnessError(f"Target origin must not carry a query or fragment: {base_url!r}")
    try:
        parts.port
    except ValueError:
        raise HarnessError(f"Target origin has an invalid port: {base_url!r}") from None
    return raw.rstrip("/")


class HttpProbe:
    """Executes ProbeSpecs against a target and classifies the outcome."""

    def __init__(
        self,
        http_client: HttpClient | None = None,
        settings: HttpSettings | None = None,
        *,
        api_prefix: str = DEFAULT_API_PREFIX,
    ):
        self.settings = settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.retry_config = RetryConfig.from_settings(self.settings)
        self.api_prefix = api_prefix

    def build_request(self, spec: ProbeSpec, base_url: str) -> HttpRequest:
        if self.api_prefix and not spec.path.startswith(self.api_prefix):
            raise HarnessError(f"{spec} is outside the versioned prefix {self.api_prefix}")
        body = json.dumps(dict(spec.body)) if spec.body is not None else None
        return HttpRequest(
            url=f"{normalize_base_url(base_url)}{spec.path}",
            method=spec.method.value,
            headers=dict(JSON_HEADERS),
            body=body,
            timeout=self.settings.timeout,
            allow_redirects=self.settings.allow_redirects,
        )

    def execute(self, spec: ProbeSpec, base_url: str, *, group: str | None = None) -> ProbeResult:
        """
        Send one request and turn whatever happens into a ProbeResult.

        Transport failures, timeouts and client exceptions become a result with
        status 0; only a malformed ProbeSpec or target raises (HarnessError).
        """
        request = self.build_request(spec, base_url)
        response = send_with_retries(self.http_client, request, retry_config=self.retry_config)

        if response.status_code is not None:
            logger.debug("%s -> %s", spec, response.status_code)
            return ProbeResult.from_status(spec, response.status_code, group=group, elapsed_ms=response.elapsed_ms)

        category = response.error_category or categorize_error_type(response.error_type)
        logger.warning("%s failed: %s (%s)", spec, response.error_message or "no response", category.value)
        return ProbeResult.failure(
            spec,
            group=group,
            error_category=category,
            error_message=response.error_message,
            elapsed_ms=response.elapsed_ms,
        )


__all__ = ["HttpProbe", "normalize_base_url"]
