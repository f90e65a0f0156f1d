"""Tests for the status screen and one-shot result table."""

import io

from rich.console import Console

from healthwatch.reporter import ConsoleReporter, print_check_results, render_report


def _console():
    return Console(file=io.StringIO(), force_terminal=False, width=120)


class TestRenderReport:
    def test_lines(self, check_factory) -> None:
        checks = [
            check_factory(domain="a.example", fail_count=0),
            check_factory(domain="b.example", port="81", path="/", fail_count=3),
        ]
        assert render_report(checks, 1700000000) == [
            " 1700000000 Checking health",
            "",
            "  1) http://a.example:8080/health is healthy",
            "  2) http://b.example:81/ is unhealthy",
        ]

    def test_no_checks(self) -> None:
        assert render_report([], 5) == [" 5 Checking health", ""]


class TestConsoleReporter:
    def test_show_prints_every_check(self, check_factory) -> None:
        console = _console()
        reporter = ConsoleReporter(console)
        reporter.show([check_factory(), check_factory(domain="down", fail_count=2)], 42)

        out = console.file.getvalue()
        assert "42 Checking health" in out
        assert "1) http://localhost:8080/health is healthy" in out
        assert "2) http://down:8080/health is unhealthy" in out

    def test_show_repaints(self, check_factory) -> None:
        console = _console()
        reporter = ConsoleReporter(console)
        reporter.show([check_factory()], 1)
        reporter.show([check_factory()], 2)
        # non-terminal consoles skip the clear, both frames stay in the buffer
        out = console.file.getvalue()
        assert out.count("Checking health") == 2


class TestPrintCheckResults:
    def test_table(self, check_factory) -> None:
        console = _console()
        print_check_results([
            (check_factory(domain="up"), True),
            (check_factory(domain="down"), False),
        ], console)
        out = console.file.getvalue()
        assert "http://up:8080/health" in out
        assert "http://down:8080/health" in out
        assert "OK" in out
        assert "FAIL" in out
