# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""routeprobe CLI."""

from __future__ import annotations

import argparse

from ..catalog import DOMAIN_ORDER
from ..config import HarnessSettings, HttpSettings, load_harness_settings, load_http_settings
from ..http import create_default_http_client
from ..log import setup_logging
from ..report import StreamReportWriter
from ..runtime import RunController


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Verify that every domain module of the v2 API is mounted and responding")
    parser.add_argument(
        "--base-url",
        default=None,
        help="Target origin (default: $ROUTEPROBE_BASE_URL or http://localhost:5000)",
    )
    parser.add_argument(
        "--domain",
        action="append",
        choices=DOMAIN_ORDER,
        help="Only run the named domain group (repeatable)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of the human-friendly report",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Per-probe timeout in seconds")
    parser.add_argument("--concurrency", type=int, default=None, help="Parallel probes per domain group")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for staging hosts with self-signed certificates)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: $ROUTEPROBE_LOG_LEVEL or WARNING)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    http_settings: HttpSettings = load_http_settings()
    settings: HarnessSettings = load_harness_settings()
    if args.ignore_ssl_errors:
        http_settings.verify_ssl = False
    if args.timeout is not None and args.timeout > 0:
        http_settings.timeout = args.timeout
    if args.concurrency is not None and args.concurrency > 0:
        settings.concurrency = args.concurrency
    if args.base_url:
        settings.base_url = args.base_url

    http_client = create_default_http_client(http_settings)
    with RunController(
        http_client,
        http_settings=http_settings,
        settings=settings,
        writer=StreamReportWriter(),
        domains=args.domain,
        output_format="json" if args.json else "text",
    ) as controller:
        return controller.run(settings.base_url)


if __name__ == "__main__":
    raise SystemExit(main())
