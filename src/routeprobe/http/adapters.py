# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

from collections.abc import Callable

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests and dry runs.

    Responses are keyed by full URL. Unmatched URLs get `default` (a response
    or a callable taking the request); without a default they look like a
    refused connection.
    """

    def __init__(
        self,
        responses: dict[str, HttpResponse] | None = None,
        default: HttpResponse | Callable[[HttpRequest], HttpResponse] | None = None,
    ):
        self._responses = dict(responses or {})
        self._default = default
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse) -> None:
        self._responses[url] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if request.url in self._responses:
            return self._responses[request.url]
        if callable(self._default):
            return self._default(request)
        if self._default is not None:
            return self._default
        return HttpResponse(ok=False, url=request.url, error_message="No stubbed response configured", error_type="ConnectError")

    def close(self) -> None:
        self.closed = True
