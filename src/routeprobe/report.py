# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Report rendering and output sinks."""

from __future__ import annotations

import json
import sys
from typing import Protocol, TextIO

from .errors import error_category_to_reason
from .models import ProbeResult, RunReport

PASS_ICON = "✅"
FAIL_ICON = "❌"
METHOD_WIDTH = 6
PATH_WIDTH = 40


class ReportWriter(Protocol):
    """Sink for user-facing report text."""

    def write(self, text: str = "") -> None: ...


class StreamReportWriter:
    """Writes lines to a text stream (stdout unless told otherwise)."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    def write(self, text: str = "") -> None:
        stream = self._stream or sys.stdout
        stream.write(text + "\n")
        stream.flush()


class BufferReportWriter:
    """Collects lines in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def write(self, text: str = "") -> None:
        self.lines.extend(text.split("\n"))

    def getvalue(self) -> str:
        return "\n".join(self.lines)


def render_result(result: ProbeResult) -> str:
    icon = PASS_ICON if result.passed else FAIL_ICON
    line = f"{icon} {result.method.value.ljust(METHOD_WIDTH)} {result.path.ljust(PATH_WIDTH)} ({result.status_code})"
    if result.is_transport_failure:
        reason = error_category_to_reason(result.error_category)
        if reason:
            line = f"{line} {reason}"
    return line


def render_totals(report: RunReport) -> str:
    summary = report.summary()
    return f"Results: {summary.passed}/{summary.total} endpoints responding"


def render_report(report: RunReport) -> str:
    """One line per result in recorded order, then the totals line."""
    lines = [render_result(result) for result in report.results]
    lines.append("")
    lines.append(render_totals(report))
    return "\n".join(lines)


def render_json(report: RunReport) -> str:
    return json.dumps(report.to_dict(), indent=2, sort_keys=True, ensure_ascii=False)


__all__ = [
    "BufferReportWriter",
    "ReportWriter",
    "StreamReportWriter",
    "render_json",
    "render_report",
    "render_result",
    "render_totals",
]
