# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe description and outcome models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from ..errors import ErrorCategory, HarnessError

# Synthetic status for "no HTTP response obtained" (transport failure or timeout).
TRANSPORT_FAILURE_STATUS = 0


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @classmethod
    def parse(cls, value: str | HttpMethod) -> HttpMethod:
        if isinstance(value, HttpMethod):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise HarnessError(f"Unsupported HTTP method: {value!r}") from None

    @property
    def accepts_body(self) -> bool:
        return self in {HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH}


def is_passing_status(status_code: int) -> bool:
    """A route is wired when it produced any HTTP response below 500."""
    return status_code != TRANSPORT_FAILURE_STATUS and status_code < 500


@dataclass(frozen=True)
class ProbeSpec:
    """Immutable description of one endpoint check."""

    method: HttpMethod
    path: str
    body: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        method = HttpMethod.parse(self.method)
        object.__setattr__(self, "method", method)
        if not isinstance(self.path, str) or not self.path.startswith("/"):
            raise HarnessError(f"Probe path must be server-relative: {self.path!r}")
        if self.body is not None:
            if not method.accepts_body:
                raise HarnessError(f"{method.value} {self.path} cannot carry a request body")
            object.__setattr__(self, "body", MappingProxyType(dict(self.body)))

    @property
    def key(self) -> tuple[str, str]:
        return (self.method.value, self.path)

    def __str__(self) -> str:
        return f"{self.method.value} {self.path}"


@dataclass(frozen=True)
class ProbeResult:
    """
    Outcome of executing one ProbeSpec.

    `passed` is derived from `status_code` and cannot be set on its own.
    """

    method: HttpMethod
    path: str
    status_code: int
    group: str | None = None
    error_category: ErrorCategory | None = None
    error_message: str | None = None
    elapsed_ms: float | None = field(default=None, compare=False)

    @property
    def passed(self) -> bool:
        return is_passing_status(self.status_code)

    @property
    def is_transport_failure(self) -> bool:
        return self.status_code == TRANSPORT_FAILURE_STATUS

    @property
    def key(self) -> tuple[str, str]:
        return (self.method.value, self.path)

    @classmethod
    def from_status(cls, spec: ProbeSpec, status_code: int, *, group: str | None = None, elapsed_ms: float | None = None) -> ProbeResult:
        return cls(method=spec.method, path=spec.path, status_code=int(status_code), group=group, elapsed_ms=elapsed_ms)

    @classmethod
    def failure(
        cls,
        spec: ProbeSpec,
        *,
        group: str | None = None,
        error_category: ErrorCategory | None = ErrorCategory.UNKNOWN_ERROR,
        error_message: str | None = None,
        elapsed_ms: float | None = None,
    ) -> ProbeResult:
        return cls(
            method=spec.method,
            path=spec.path,
            status_code=TRANSPORT_FAILURE_STATUS,
            group=group,
            error_category=error_category,
            error_message=error_message,
            elapsed_ms=elapsed_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "group": self.group,
            "method": self.method.value,
            "path": self.path,
            "status_code": self.status_code,
            "passed": self.passed,
            "error_category": self.error_category.value if self.error_category else None,
            "error_message": self.error_message,
            "elapsed_ms": round(self.elapsed_ms, 1) if self.elapsed_ms is not None else None,
        }


@dataclass(frozen=True)
class DomainGroup:
    """Named, ordered collection of probes covering one API domain."""

    name: str
    title: str
    specs: tuple[ProbeSpec, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "specs", tuple(self.specs))

    def __len__(self) -> int:
        return len(self.specs)
