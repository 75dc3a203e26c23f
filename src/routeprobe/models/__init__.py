# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for routeprobe."""

from ..http.models import Headers, HttpRequest, HttpResponse, RetryConfig
from .probe import TRANSPORT_FAILURE_STATUS, DomainGroup, HttpMethod, ProbeResult, ProbeSpec, is_passing_status
from .report import ReportSummary, RunReport

__all__ = [
    "TRANSPORT_FAILURE_STATUS",
    "DomainGroup",
    "Headers",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "ProbeResult",
    "ProbeSpec",
    "ReportSummary",
    "RetryConfig",
    "RunReport",
    "is_passing_status",
]
