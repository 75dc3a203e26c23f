# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
routeprobe package entrypoint.

A wiring check for a domain-partitioned REST API migration: every v2 route
of each domain module (auth, properties, applications, payments, leases,
admin) is probed once and reported as responding (any status below 500) or
not. HTTP behavior is abstracted behind an injectable client interface, and
domain objects are modeled with typed dataclasses.
"""

from .catalog import DOMAIN_ORDER, build_domain_groups, select_groups
from .config import HarnessSettings, HttpSettings, load_harness_settings, load_http_settings
from .errors import ErrorCategory, HarnessError
from .groups import run_group
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    RetryConfig,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import DomainGroup, HttpMethod, ProbeResult, ProbeSpec, ReportSummary, RunReport
from .probe import HttpProbe
from .report import BufferReportWriter, StreamReportWriter, render_report
from .runtime import RunController, RunState
from .version import __version__

__all__ = [
    "DOMAIN_ORDER",
    "BufferReportWriter",
    "DomainGroup",
    "ErrorCategory",
    "HarnessError",
    "HarnessSettings",
    "HttpClient",
    "HttpMethod",
    "HttpProbe",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "ProbeResult",
    "ProbeSpec",
    "ReportSummary",
    "RetryConfig",
    "RunController",
    "RunReport",
    "RunState",
    "StreamReportWriter",
    "StubHttpClient",
    "build_domain_groups",
    "create_default_http_client",
    "load_harness_settings",
    "load_http_settings",
    "render_report",
    "run_group",
    "select_groups",
    "setup_logging",
    "__version__",
]
