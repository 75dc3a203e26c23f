# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

# Route checks only need the status line; bodies are kept short for diagnostics.
MAX_BODY_BYTES = 64 * 1024


def _read_body(resp: httpx.Response) -> tuple[str, dict[str, Any]]:
    """Best-effort body read; a broken body never invalidates the status already received."""
    content = bytearray()
    meta: dict[str, Any] = {"body_truncated": False}
    try:
        for chunk in resp.iter_bytes():
            remaining = MAX_BODY_BYTES - len(content)
            if len(chunk) > remaining:
                content.extend(chunk[:remaining])
                meta["body_truncated"] = True
                break
            content.extend(chunk)
    except Exception as exc:  # noqa: BLE001
        meta["body_error"] = f"{type(exc).__name__}: {exc}"

    encoding = resp.encoding or "utf-8"
    try:
        text = bytes(content).decode(encoding, errors="replace")
    except LookupError:
        text = bytes(content).decode("utf-8", errors="replace")
    return text, meta


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        started = time.monotonic()
        response: HttpResponse | None = None
        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                timeout=timeout,
                follow_redirects=request.allow_redirects,
            ) as resp:
                response = HttpResponse(
                    ok=True,
                    status_code=resp.status_code,
                    headers=dict(resp.headers),
                    url=str(resp.url),
                )
                response.text, response.meta = _read_body(resp)
                if "body_error" in response.meta:
                    logger.debug("%s %s -> %s, body read failed: %s", request.method, request.url, resp.status_code, response.meta["body_error"])
        except Exception as exc:  # noqa: BLE001
            if response is None:
                logger.debug("%s %s failed: %s", request.method, request.url, exc)
                return HttpResponse(
                    ok=False,
                    url=request.url,
                    elapsed_ms=(time.monotonic() - started) * 1000.0,
                    error_message=str(exc) or type(exc).__name__,
                    error_type=type(exc).__name__,
                    error_category=categorize_exception(exc),
                )
            # Status line already received; closing the stream failed.
            response.meta.setdefault("body_error", f"{type(exc).__name__}: {exc}")

        response.elapsed_ms = (time.monotonic() - started) * 1000.0
        return response

    def close(self) -> None:
        self._client.close()
