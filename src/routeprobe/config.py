# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for routeprobe."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"routeprobe/{__version__}"
DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_API_PREFIX = "/api/v2/"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 10.0
    max_retries: int = 1
    backoff_factor: float = 2.0
    initial_delay: float = 0.5
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = False
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("ROUTEPROBE_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            max_retries=_int_env("ROUTEPROBE_HTTP_RETRIES", cls.max_retries),
            backoff_factor=_float_env("ROUTEPROBE_HTTP_BACKOFF", cls.backoff_factor),
            initial_delay=_float_env("ROUTEPROBE_HTTP_INITIAL_DELAY", cls.initial_delay),
            user_agent=os.getenv("ROUTEPROBE_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("ROUTEPROBE_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("ROUTEPROBE_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


@dataclass
class HarnessSettings:
    """Target and endpoint-table defaults for a verification run."""

    base_url: str = DEFAULT_BASE_URL
    api_prefix: str = DEFAULT_API_PREFIX
    sample_id: str = "1"
    login_email: str = "test@example.com"
    login_password: str = "test"
    concurrency: int = 1

    @classmethod
    def from_env(cls) -> "HarnessSettings":
        """Create settings from environment variables (evaluated at call time)."""
        concurrency = _int_env("ROUTEPROBE_CONCURRENCY", cls.concurrency)
        return cls(
            base_url=_str_env("ROUTEPROBE_BASE_URL", cls.base_url),
            api_prefix=_str_env("ROUTEPROBE_API_PREFIX", cls.api_prefix),
            sample_id=_str_env("ROUTEPROBE_SAMPLE_ID", cls.sample_id),
            login_email=_str_env("ROUTEPROBE_LOGIN_EMAIL", cls.login_email),
            login_password=os.getenv("ROUTEPROBE_LOGIN_PASSWORD", cls.login_password),
            concurrency=concurrency if concurrency > 0 else cls.concurrency,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_harness_settings() -> HarnessSettings:
    """Load harness settings from environment with sensible defaults."""
    return HarnessSettings.from_env()
