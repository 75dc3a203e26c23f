# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run controller: drives every domain group against a target and maps the outcome to an exit code."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from contextlib import suppress
from enum import Enum

from .catalog import build_domain_groups, select_groups
from .config import HarnessSettings, HttpSettings, load_harness_settings, load_http_settings
from .groups import run_group
from .http.client import HttpClient, create_default_http_client
from .models import DomainGroup, RunReport
from .probe import HttpProbe, normalize_base_url
from .report import ReportWriter, StreamReportWriter, render_json, render_report

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class RunState(str, Enum):
    STARTED = "STARTED"
    RUNNING = "RUNNING"
    AGGREGATING = "AGGREGATING"
    SUCCESS = "SUCCESS"
    PARTIAL_FAILURE = "PARTIAL_FAILURE"
    FATAL = "FATAL"


class RunController:
    """
    Outermost boundary of a verification run.

    Groups run in declared order and every probe is executed regardless of
    earlier failures. `run` never raises: orchestration errors are reported as
    a short diagnostic and exit code 1.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        http_settings: HttpSettings | None = None,
        settings: HarnessSettings | None = None,
        writer: ReportWriter | None = None,
        groups: Sequence[DomainGroup] | None = None,
        domains: Sequence[str] | None = None,
        output_format: str = "text",
    ):
        self.http_settings = http_settings or load_http_settings()
        self.settings = settings or load_harness_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.probe = HttpProbe(self.http_client, self.http_settings, api_prefix=self.settings.api_prefix)
        self.writer: ReportWriter = writer or StreamReportWriter()
        self.groups = tuple(groups) if groups is not None else None
        self.domains = list(domains) if domains else None
        self.output_format = output_format
        self.state: RunState | None = None
        self.report: RunReport | None = None

    @property
    def _text(self) -> bool:
        return self.output_format != "json"

    def _emit(self, text: str = "") -> None:
        if self._text:
            self.writer.write(text)

    def _resolve_groups(self) -> tuple[DomainGroup, ...]:
        groups = self.groups
        if groups is None:
            groups = build_domain_groups(
                self.settings.sample_id,
                login_email=self.settings.login_email,
                login_password=self.settings.login_password,
            )
        return select_groups(groups, self.domains)

    def run(self, target_base_url: str | None = None) -> int:
        base_url = target_base_url or self.settings.base_url
        self.state = RunState.STARTED
        self.report = RunReport(base_url=base_url)
        try:
            return self._run(base_url, self.report)
        except Exception as exc:  # noqa: BLE001
            self.state = RunState.FATAL
            logger.exception("Harness aborted: %s", exc)
            with suppress(Exception):
                self._write_fatal(base_url, exc)
            return EXIT_FAILURE

    def _run(self, base_url: str, report: RunReport) -> int:
        target = normalize_base_url(base_url)
        report.base_url = target
        groups = self._resolve_groups()

        self.state = RunState.RUNNING
        self._emit()
        self._emit("🧪 Testing Migration to Domain-Based Architecture")
        self._emit()
        self._emit(f"Testing: {target}")
        self._emit("---")
        self._emit()

        for group in groups:
            self._emit(f"📌 {group.title} Domain")
            results = run_group(group.name, group.specs, target, probe=self.probe, concurrency=self.settings.concurrency)
            report.extend(results)
            responding = sum(1 for r in results if r.passed)
            self._emit(f"   {responding}/{len(results)} responding")
            self._emit()

        self.state = RunState.AGGREGATING
        report.finalize()
        summary = report.summary()
        logger.info("Run finished: %d/%d endpoints responding", summary.passed, summary.total)

        if self._text:
            self._emit("---")
            self._emit()
            self._emit(render_report(report))
            self._emit()
            self._emit("---")
            self._emit()
            if summary.all_passed:
                self._emit("✨ All tests passed! Migration successful.")
            else:
                self._emit(f"⚠️  {summary.failed} endpoints need attention.")
        else:
            self.writer.write(render_json(report))

        if summary.all_passed:
            self.state = RunState.SUCCESS
            return EXIT_SUCCESS
        self.state = RunState.PARTIAL_FAILURE
        return EXIT_FAILURE

    def _write_fatal(self, base_url: str, exc: Exception) -> None:
        if self._text:
            self.writer.write(f"❌ Could not run harness: {exc}")
            self.writer.write()
            self.writer.write(f"Is the target up at {base_url}?")
        else:
            self.writer.write(json.dumps({"base_url": base_url, "error": str(exc), "fatal": True}, indent=2, sort_keys=True))

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> RunController:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["EXIT_FAILURE", "EXIT_SUCCESS", "RunController", "RunState"]
