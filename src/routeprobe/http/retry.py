# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry helper for HttpClient implementations."""

from __future__ import annotations

import logging
import time
from dataclasses import replace

from ..config import load_http_settings
from ..errors import categorize_error_type, categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse, RetryConfig

logger = logging.getLogger(__name__)


def build_default_retry_config() -> RetryConfig:
    """Create a RetryConfig from environment-backed HttpSettings."""
    return RetryConfig.from_settings(load_http_settings())


def send_with_retries(
    client: HttpClient,
    request: HttpRequest,
    *,
    retry_config: RetryConfig | None = None,
) -> HttpResponse:
    """
    Execute a request, retrying transport failures with exponential backoff.

    Exceptions raised by the client are converted into failed responses, so
    this never raises for network problems. Any HTTP response, whatever its
    status, is returned immediately and never retried.
    """
    cfg = retry_config or build_default_retry_config()

    attempt = 0
    delay = cfg.initial_delay
    response = HttpResponse(ok=False, error_message="no attempt made")
    while attempt < cfg.max_attempts:
        try:
            response = client.request(request)
        except Exception as exc:  # noqa: BLE001
            response = HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                error_category=categorize_exception(exc),
            )

        if response.ok or response.status_code is not None:
            if attempt:
                return replace(response, meta={**response.meta, "retry_count": attempt})
            return response

        attempt += 1
        if attempt >= cfg.max_attempts:
            break
        logger.info("Retrying %s %s after transport failure (attempt %d/%d)", request.method, request.url, attempt + 1, cfg.max_attempts)
        time.sleep(delay)
        delay *= cfg.backoff_factor

    # The client may hand back a shared response object; annotate a copy.
    meta = {"retry_count": max(0, attempt - 1), **response.meta}
    if cfg.max_attempts > 1:
        meta["retry_exhausted"] = True
    return replace(
        response,
        error_category=response.error_category or categorize_error_type(response.error_type),
        meta=meta,
    )
