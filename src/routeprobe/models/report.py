# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run report: the ordered, append-only collection of probe outcomes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..errors import HarnessError
from .probe import ProbeResult


@dataclass(frozen=True)
class ReportSummary:
    total: int
    passed: int

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def all_passed(self) -> bool:
        return self.passed == self.total


class RunReport:
    """
    Accumulates ProbeResults in execution order.

    Results are only added through `record`/`extend` and exposed as a tuple.
    Counts are always recomputed from the recorded results. Once finalized the
    report is read-only.
    """

    def __init__(self, base_url: str | None = None):
        self.base_url = base_url
        self._results: list[ProbeResult] = []
        self._finalized = False

    def __repr__(self) -> str:
        return f"RunReport(base_url={self.base_url!r}, results={len(self._results)}, finalized={self._finalized})"

    @property
    def results(self) -> tuple[ProbeResult, ...]:
        return tuple(self._results)

    @property
    def finalized(self) -> bool:
        return self._finalized

    def record(self, result: ProbeResult) -> None:
        if self._finalized:
            raise HarnessError("Cannot record results on a finalized report")
        self._results.append(result)

    def extend(self, results: Iterable[ProbeResult]) -> None:
        for result in results:
            self.record(result)

    def finalize(self) -> RunReport:
        self._finalized = True
        return self

    def summary(self) -> ReportSummary:
        return ReportSummary(total=len(self._results), passed=sum(1 for r in self._results if r.passed))

    @property
    def total(self) -> int:
        return len(self._results)

    @property
    def passed(self) -> int:
        return self.summary().passed

    @property
    def failures(self) -> list[ProbeResult]:
        return [r for r in self._results if not r.passed]

    def to_dict(self) -> dict[str, Any]:
        summary = self.summary()
        return {
            "base_url": self.base_url,
            "total": summary.total,
            "passed": summary.passed,
            "failed": summary.failed,
            "results": [r.to_dict() for r in self._results],
        }
