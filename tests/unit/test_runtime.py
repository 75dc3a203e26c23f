# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
import logging

from routeprobe.catalog import build_domain_groups, declared_sequence
from routeprobe.config import HarnessSettings
from routeprobe.http import StubHttpClient
from routeprobe.models import DomainGroup, ProbeSpec
from routeprobe.report import BufferReportWriter
from routeprobe.runtime import EXIT_FAILURE, EXIT_SUCCESS, RunController, RunState

BASE_URL = "http://localhost:5000"


def _controller(client, http_settings, harness_settings, **kwargs):
    writer = kwargs.pop("writer", None) or BufferReportWriter()
    controller = RunController(client, http_settings=http_settings, settings=harness_settings, writer=writer, **kwargs)
    return controller, writer


def test_all_endpoints_responding_exits_zero(make_stub_client, http_settings, harness_settings):
    controller, writer = _controller(make_stub_client(), http_settings, harness_settings)
    exit_code = controller.run(BASE_URL)

    assert exit_code == EXIT_SUCCESS
    assert controller.state == RunState.SUCCESS
    assert controller.report.summary().total == 15
    assert "Results: 15/15 endpoints responding" in writer.lines
    assert "✨ All tests passed! Migration successful." in writer.lines


def test_client_errors_count_as_responding(make_stub_client, http_settings, harness_settings):
    client = make_stub_client({"/api/v2/payments/1/receipt": 404})
    controller, writer = _controller(client, http_settings, harness_settings)

    assert controller.run(BASE_URL) == EXIT_SUCCESS
    receipt = [r for r in controller.report.results if r.path == "/api/v2/payments/1/receipt"][0]
    assert receipt.status_code == 404
    assert receipt.passed is True
    assert "Results: 15/15 endpoints responding" in writer.lines


def test_server_error_is_partial_failure(make_stub_client, http_settings, harness_settings):
    client = make_stub_client({"/api/v2/admin/settings": 500})
    controller, writer = _controller(client, http_settings, harness_settings)

    assert controller.run(BASE_URL) == EXIT_FAILURE
    assert controller.state == RunState.PARTIAL_FAILURE
    assert "Results: 14/15 endpoints responding" in writer.lines
    assert "⚠️  1 endpoints need attention." in writer.lines
    settings_line = [line for line in writer.lines if "/api/v2/admin/settings" in line][0]
    assert settings_line.startswith("❌") and settings_line.endswith("(500)")


def test_unreachable_target_reports_every_probe(make_stub_client, http_settings, harness_settings):
    client = make_stub_client(default_status=None)
    controller, writer = _controller(client, http_settings, harness_settings)

    exit_code = controller.run(BASE_URL)

    assert exit_code == EXIT_FAILURE
    assert controller.state == RunState.PARTIAL_FAILURE
    assert len(client.requests) == 15
    assert all(r.status_code == 0 and not r.passed for r in controller.report.results)
    assert "Results: 0/15 endpoints responding" in writer.lines


def test_report_order_matches_declaration(make_stub_client, http_settings, harness_settings):
    client = make_stub_client({"/api/v2/auth/me": 503, "/api/v2/leases/1/rent-payments": 500})
    controller, writer = _controller(client, http_settings, harness_settings)
    controller.run(BASE_URL)

    expected = declared_sequence(build_domain_groups())
    assert [r.key for r in controller.report.results] == expected
    assert [r.url.removeprefix(BASE_URL) for r in client.requests] == [path for _, path in expected]
    rendered = [line for line in writer.lines if line[:1] in {"✅", "❌"}]
    assert [line.split()[2] for line in rendered] == [path for _, path in expected]


def test_concurrent_run_keeps_declared_order(make_stub_client, http_settings):
    controller, _ = _controller(make_stub_client(), http_settings, HarnessSettings(base_url=BASE_URL, concurrency=4))
    assert controller.run() == EXIT_SUCCESS
    assert [r.key for r in controller.report.results] == declared_sequence(build_domain_groups())


def test_domain_headings_are_written(make_stub_client, http_settings, harness_settings):
    controller, writer = _controller(make_stub_client(), http_settings, harness_settings)
    controller.run(BASE_URL)
    headings = [line for line in writer.lines if line.startswith("📌")]
    assert headings == [
        "📌 Auth Domain",
        "📌 Properties Domain",
        "📌 Applications Domain",
        "📌 Payments Domain",
        "📌 Leases Domain",
        "📌 Admin Domain",
    ]
    assert f"Testing: {BASE_URL}" in writer.lines


def test_uses_configured_base_url_by_default(make_stub_client, http_settings, harness_settings):
    client = make_stub_client()
    controller, _ = _controller(client, http_settings, harness_settings)
    controller.run()
    assert client.requests[0].url == f"{BASE_URL}/api/v2/auth/me"


def test_malformed_target_is_fatal(make_stub_client, http_settings, harness_settings):
    client = make_stub_client()
    controller, writer = _controller(client, http_settings, harness_settings)

    assert controller.run("not a url") == EXIT_FAILURE
    assert controller.state == RunState.FATAL
    assert client.requests == []
    assert writer.lines[0].startswith("❌ Could not run harness:")
    assert "Is the target up at not a url?" in writer.lines


def test_orchestration_errors_never_escape(http_settings, harness_settings):
    class BrokenClient:
        def request(self, request):
            raise AssertionError("unreachable")

        def close(self):
            return None

    def broken_execute(*args, **kwargs):
        raise RuntimeError("boom")

    controller, writer = _controller(BrokenClient(), http_settings, harness_settings)
    controller.probe.execute = broken_execute

    assert controller.run(BASE_URL) == EXIT_FAILURE
    assert controller.state == RunState.FATAL
    assert any("boom" in line for line in writer.lines)


def test_custom_groups_and_bad_prefix_are_fatal(make_stub_client, http_settings, harness_settings):
    groups = [DomainGroup("legacy", "Legacy", (ProbeSpec("GET", "/api/properties"),))]
    controller, _ = _controller(make_stub_client(), http_settings, harness_settings, groups=groups)
    assert controller.run(BASE_URL) == EXIT_FAILURE
    assert controller.state == RunState.FATAL


def test_json_output(make_stub_client, http_settings, harness_settings):
    client = make_stub_client({"/api/v2/admin/settings": 500})
    controller, writer = _controller(client, http_settings, harness_settings, output_format="json")

    assert controller.run(BASE_URL) == EXIT_FAILURE
    payload = json.loads(writer.getvalue())
    assert payload["base_url"] == BASE_URL
    assert (payload["total"], payload["passed"]) == (15, 14)


def test_context_manager_closes_client(make_stub_client, http_settings, harness_settings):
    client = make_stub_client()
    with RunController(client, http_settings=http_settings, settings=harness_settings, writer=BufferReportWriter()) as controller:
        controller.run(BASE_URL)
    assert isinstance(client, StubHttpClient)
    assert client.closed is True


def test_fatal_errors_are_logged_with_traceback(make_stub_client, http_settings, harness_settings, caplog):
    controller, _ = _controller(make_stub_client(), http_settings, harness_settings)
    with caplog.at_level(logging.ERROR, logger="routeprobe.runtime"):
        assert controller.run("ftp://nowhere") == EXIT_FAILURE
    records = [r for r in caplog.records if r.name == "routeprobe.runtime"]
    assert records and records[0].exc_info is not None
    assert "Harness aborted" in records[0].getMessage()


def test_unknown_domain_uses_fatal_diagnostic(make_stub_client, http_settings, harness_settings):
    client = make_stub_client()
    controller, writer = _controller(client, http_settings, harness_settings, domains=["billing"])

    assert controller.run(BASE_URL) == EXIT_FAILURE
    assert controller.state == RunState.FATAL
    assert client.requests == []
    assert writer.lines[0].startswith("❌ Could not run harness:")
    assert f"Is the target up at {BASE_URL}?" in writer.lines


def test_domains_select_subset_in_declared_order(make_stub_client, http_settings, harness_settings):
    controller, _ = _controller(make_stub_client(), http_settings, harness_settings, domains=["leases", "auth"])
    assert controller.run(BASE_URL) == EXIT_SUCCESS
    assert [r.group for r in controller.report.results] == ["auth"] * 3 + ["leases"] * 2


def test_invalid_sample_id_uses_fatal_diagnostic(make_stub_client, http_settings):
    settings = HarnessSettings(base_url=BASE_URL, sample_id="a/b")
    controller, writer = _controller(make_stub_client(), http_settings, settings)
    assert controller.run() == EXIT_FAILURE
    assert controller.state == RunState.FATAL
    assert f"Is the target up at {BASE_URL}?" in writer.lines
