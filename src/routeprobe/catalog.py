# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Declarative table of the domain-partitioned v2 API surface.

Each domain module of the service mounts its routes under `/api/v2/<domain>`.
The table below is the contract being verified: one ordered group per domain,
one probe per route, executed and reported in exactly this order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .errors import HarnessError
from .models import DomainGroup, HttpMethod, ProbeSpec

DOMAIN_ORDER: tuple[str, ...] = ("auth", "properties", "applications", "payments", "leases", "admin")

# (domain, title, [(method, path template, needs login body)])
_ENDPOINT_TABLE: tuple[tuple[str, str, tuple[tuple[HttpMethod, str, bool], ...]], ...] = (
    (
        "auth",
        "Auth",
        (
            (HttpMethod.GET, "/api/v2/auth/me", False),
            (HttpMethod.POST, "/api/v2/auth/login", True),
            (HttpMethod.POST, "/api/v2/auth/logout", False),
        ),
    ),
    (
        "properties",
        "Properties",
        (
            (HttpMethod.GET, "/api/v2/properties", False),
            (HttpMethod.GET, "/api/v2/properties/{id}", False),
        ),
    ),
    (
        "applications",
        "Applications",
        (
            (HttpMethod.GET, "/api/v2/applications/{id}", False),
            (HttpMethod.GET, "/api/v2/applications/user/{id}", False),
            (HttpMethod.GET, "/api/v2/applications/property/{id}", False),
        ),
    ),
    (
        "payments",
        "Payments",
        (
            (HttpMethod.GET, "/api/v2/payments/{id}/receipt", False),
            (HttpMethod.GET, "/api/v2/payments/audit-logs", False),
        ),
    ),
    (
        "leases",
        "Leases",
        (
            (HttpMethod.GET, "/api/v2/leases/{id}/payment-history", False),
            (HttpMethod.GET, "/api/v2/leases/{id}/rent-payments", False),
        ),
    ),
    (
        "admin",
        "Admin",
        (
            (HttpMethod.GET, "/api/v2/admin/settings", False),
            (HttpMethod.GET, "/api/v2/admin/personas", False),
            (HttpMethod.GET, "/api/v2/admin/image-audit-logs", False),
        ),
    ),
)


def build_domain_groups(
    sample_id: str = "1",
    *,
    login_email: str = "test@example.com",
    login_password: str = "test",
) -> tuple[DomainGroup, ...]:
    """Materialize the endpoint table with path parameters and the login body filled in."""
    sample_id = str(sample_id).strip()
    if not sample_id or "/" in sample_id:
        raise HarnessError(f"Invalid sample id for path parameters: {sample_id!r}")

    groups: list[DomainGroup] = []
    for name, title, endpoints in _ENDPOINT_TABLE:
        specs = []
        for method, template, needs_login in endpoints:
            body = {"email": login_email, "password": login_password} if needs_login else None
            specs.append(ProbeSpec(method=method, path=template.replace("{id}", sample_id), body=body))
        groups.append(DomainGroup(name=name, title=title, specs=tuple(specs)))
    return tuple(groups)


def select_groups(groups: Sequence[DomainGroup], names: Iterable[str] | None) -> tuple[DomainGroup, ...]:
    """Return the named subset of `groups`, always in declared order."""
    if names is None:
        return tuple(groups)
    wanted = {str(name).strip().lower() for name in names if str(name).strip()}
    if not wanted:
        return tuple(groups)
    known = {group.name for group in groups}
    unknown = sorted(wanted - known)
    if unknown:
        raise HarnessError(f"Unknown domain(s): {', '.join(unknown)} (expected one of: {', '.join(g.name for g in groups)})")
    return tuple(group for group in groups if group.name in wanted)


def declared_sequence(groups: Sequence[DomainGroup]) -> list[tuple[str, str]]:
    """Flattened (method, path) order across all groups."""
    return [spec.key for group in groups for spec in group.specs]


__all__ = ["DOMAIN_ORDER", "build_domain_groups", "declared_sequence", "select_groups"]
