# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

"""
Smoke tests for the built-in reporters.
"""

from __future__ import annotations as _future_annotations

from typing import Any
from xml.etree import ElementTree

import asyncio
import json
import pathlib

import pytest

from lynx.model import FullResult, RunStatus, Suite, Test, TestError, TestResult, TestStatus
from lynx.reporting import (
    DotReporter,
    EmptyReporter,
    GitHubReporter,
    HtmlReporter,
    JSONReporter,
    JUnitReporter,
    LineReporter,
    ListReporter,
    Reporter,
)

from .util import make_config, make_suite

PASSED = TestResult(TestStatus.PASSED, duration=0.012)
FAILED = TestResult(TestStatus.FAILED, errors=[TestError(message="expected 1 to be 2")])
SKIPPED = TestResult(TestStatus.SKIPPED)


def replay(reporter: Reporter, *results: TestResult) -> None:
    """Send a run of len(results) tests through the reporter."""

    suite, tests = make_suite(
        *[("", "test_a.py", [f"case {i}"], i + 1, 1) for i in range(len(results))],
    )
    status = RunStatus.PASSED if all(r.ok for r in results) else RunStatus.FAILED

    async def scenario() -> None:
        await reporter.on_begin(make_config(), suite)
        for test, result in zip(tests, results, strict=True):
            await reporter.on_test_begin(test, TestResult())
            await reporter.on_test_end(test, result)
        await reporter.on_end(FullResult(status))

    asyncio.run(scenario())


class TestConsoleReporters:
    """
    Tests for reporters that print progress to the console.
    """

    def test_dot(self, capsys: pytest.CaptureFixture[str]) -> None:
        """One character per test, then the totals."""

        replay(DotReporter(), PASSED, FAILED, SKIPPED)

        out = capsys.readouterr().out
        assert "Running 3 tests" in out
        assert "·F°" in out
        assert "1 failed" in out
        assert "1 passed" in out
        assert "1 skipped" in out
        assert "expected 1 to be 2" in out

    def test_list(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A line for each finished test."""

        replay(ListReporter(), PASSED, FAILED)

        out = capsys.readouterr().out
        assert "  ok test_a.py:1:1 › case 0 (12ms)\n" in out
        assert "  x test_a.py:2:1 › case 1\n" in out

    def test_line_shows_failures(self, capsys: pytest.CaptureFixture[str]) -> None:
        """By default the failure is printed when it happens."""

        replay(LineReporter(), FAILED)

        out = capsys.readouterr().out
        assert "[1/1] test_a.py:1:1 › case 0" in out
        assert "expected 1 to be 2" in out

    def test_line_omit_failures(self, capsys: pytest.CaptureFixture[str]) -> None:
        """With omit_failures only the failing test titles are listed."""

        replay(LineReporter({"omit_failures": True}), FAILED, PASSED)

        out = capsys.readouterr().out
        assert "expected 1 to be 2" not in out
        assert "1 failed" in out
        assert "    test_a.py:1:1 › case 0" in out

    def test_github(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Failures become ::error workflow commands."""

        replay(GitHubReporter(), PASSED, FAILED)

        out = capsys.readouterr().out
        assert "::group::Annotations\n" in out
        assert "::error file=test_a.py,line=2,col=1,title=" in out
        assert out.rstrip().endswith("Total Issues: 1")

    def test_github_has_no_colour_codes(
        self,
        capsys: pytest.CaptureFixture[str],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Workflow logs get plain text even when colour is forced on."""

        monkeypatch.setenv("CLINT_FORCE_COLOR", "1")
        reporter = GitHubReporter()

        async def scenario() -> None:
            await reporter.on_error(TestError(message="worker crashed"))

        asyncio.run(scenario())
        replay(reporter, PASSED, FAILED, SKIPPED)

        out = capsys.readouterr().out
        assert "worker crashed" in out
        assert "1 failed" in out
        assert "\x1b[" not in out

    def test_total_counted_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The line reporter counts the suite at the start, not for every test."""

        calls = []
        all_tests = Suite.all_tests

        def counting(suite: Suite) -> list[Test]:
            calls.append(suite)
            return all_tests(suite)

        monkeypatch.setattr(Suite, "all_tests", counting)
        reporter = LineReporter()

        replay(reporter, PASSED, PASSED, PASSED)

        assert reporter.total == 3
        assert len(calls) == 1

    @pytest.mark.parametrize(
        "reporter",
        [DotReporter(), LineReporter(), ListReporter(), GitHubReporter()],
    )
    def test_prints_to_stdio(self, reporter: Reporter) -> None:
        """The console reporters say they print."""

        assert reporter.prints_to_stdio()


class TestFileReporters:
    """
    Tests for reporters that write files.
    """

    def test_json_to_file(self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
        """The report is written to output_file and nothing is printed."""

        output = tmp_path / "out" / "report.json"
        reporter = JSONReporter({"output_file": str(output)})

        replay(reporter, PASSED, FAILED)

        assert capsys.readouterr().out == ""
        assert not reporter.prints_to_stdio()

        report: dict[str, Any] = json.loads(output.read_text(encoding="utf-8"))
        assert report["status"] == "failed"
        assert [t["titles"] for t in report["tests"]] == [["case 0"], ["case 1"]]
        assert report["tests"][1]["results"][0]["errors"] == ["expected 1 to be 2"]
        assert report["tests"][0]["file"] == "test_a.py"

    def test_json_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Without output_file the report goes to stdout."""

        reporter = JSONReporter()

        replay(reporter, PASSED)

        assert reporter.prints_to_stdio()
        assert json.loads(capsys.readouterr().out)["status"] == "passed"

    def test_junit(self, tmp_path: pathlib.Path) -> None:
        """One testsuite per file with counts of failures and skips."""

        output = tmp_path / "junit.xml"

        replay(JUnitReporter({"output_file": output}), PASSED, FAILED, SKIPPED)

        root = ElementTree.parse(output).getroot()
        suite = root.find("testsuite")
        assert suite is not None
        assert suite.get("name") == "test_a.py"
        assert suite.get("tests") == "3"
        assert suite.get("failures") == "1"
        assert suite.get("skipped") == "1"

        failure = root.find(".//failure")
        assert failure is not None
        assert failure.get("message") == "expected 1 to be 2"

    def test_html(self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
        """The page is written to output_folder and never printed."""

        reporter = HtmlReporter({"output_folder": str(tmp_path)})

        replay(reporter, PASSED, FAILED)

        assert not reporter.prints_to_stdio()
        assert capsys.readouterr().out == ""

        page = (tmp_path / "index.html").read_text(encoding="utf-8")
        assert "2 tests: 1 passed, 1 failed, 0 skipped" in page
        assert "expected 1 to be 2" in page

    def test_null(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The null reporter does nothing."""

        reporter = EmptyReporter()

        replay(reporter, PASSED, FAILED)

        assert not reporter.prints_to_stdio()
        assert capsys.readouterr().out == ""
