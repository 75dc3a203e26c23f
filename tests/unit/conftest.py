# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from routeprobe.config import HarnessSettings, HttpSettings
from routeprobe.http import HttpResponse, StubHttpClient

BASE_URL = "http://localhost:5000"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "ROUTEPROBE_BASE_URL",
        "ROUTEPROBE_API_PREFIX",
        "ROUTEPROBE_SAMPLE_ID",
        "ROUTEPROBE_CONCURRENCY",
        "ROUTEPROBE_HTTP_TIMEOUT",
        "ROUTEPROBE_HTTP_RETRIES",
        "ROUTEPROBE_HTTP_BACKOFF",
        "ROUTEPROBE_HTTP_INITIAL_DELAY",
        "ROUTEPROBE_HTTP_REDIRECTS",
        "ROUTEPROBE_HTTP_VERIFY_SSL",
        "ROUTEPROBE_USER_AGENT",
        "ROUTEPROBE_LOGIN_EMAIL",
        "ROUTEPROBE_LOGIN_PASSWORD",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def http_settings():
    return HttpSettings(timeout=2.0, max_retries=1, initial_delay=0.0)


@pytest.fixture
def harness_settings():
    return HarnessSettings(base_url=BASE_URL)


@pytest.fixture
def make_stub_client():
    """Build a StubHttpClient answering `default_status` except for the paths in `overrides`."""

    def _make(overrides: dict[str, int] | None = None, default_status: int | None = 200) -> StubHttpClient:
        responses = {f"{BASE_URL}{path}": HttpResponse(ok=True, status_code=status) for path, status in (overrides or {}).items()}
        default = (lambda request: HttpResponse(ok=True, status_code=default_status)) if default_status is not None else None
        return StubHttpClient(responses, default=default)

    return _make
