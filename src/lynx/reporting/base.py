# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

"""
Shared pieces for the console reporters.

Holds the error and title formatting used by every reporter, plus a base
class that tallies results and prints the end-of-run summary.
"""

from __future__ import annotations as _future_annotations

from collections.abc import Mapping
from typing import Any, NamedTuple

import os
import pathlib
import shutil
import sys
import textwrap

from clint.textui import colored  # type: ignore[import-untyped]

from lynx.model import (
    FullConfig,
    FullResult,
    Location,
    Suite,
    Test,
    TestError,
    TestResult,
    TestStatus,
)

from .abc import Reporter


class ErrorDetails(NamedTuple):
    message: str
    location: Location | None


def relative_path(config: FullConfig, file: pathlib.Path | str) -> str:
    return os.path.relpath(file, config.root_dir)


def format_location(config: FullConfig, location: Location) -> str:
    return f"{relative_path(config, location.file)}:{location.line}:{location.column}"


def pluralise(count: int, word: str) -> str:
    return f"{count} {word if count == 1 else word + 's'}"


def reporter_options(reporter: str, options: Any) -> Mapping[str, Any]:
    """
    Check that a built-in reporter was given a table of options.

    Raises ValueError naming the reporter for any other value, which the
    resolver reports as a failure to load that reporter.
    """

    if options is None:
        return {}

    if not isinstance(options, Mapping):
        raise ValueError(
            f"{reporter} options must be a table, not {type(options).__name__}",
        )

    return options


def paint(colour: str, content: str, highlight: bool) -> str:
    return str(getattr(colored, colour)(content)) if highlight else content


def format_error(config: FullConfig, error: TestError, highlight: bool) -> ErrorDetails:
    """
    Render an error for the console.

    The stack is preferred as it normally repeats the message; errors
    carrying neither fall back to the thrown value. With `highlight`
    the first line is coloured.
    """

    text = error.stack or error.message or error.value or ""
    lines = text.splitlines() or [""]

    if error.location:
        lines.append("")
        lines.append(f"    at {format_location(config, error.location)}")

    if highlight:
        lines[0] = str(colored.red(lines[0]))

    return ErrorDetails("\n".join(lines), error.location)


def format_test_title(config: FullConfig, test: Test) -> str:
    """Title of a test as `[project] › file:line:col › describe › name`."""

    _, project, _, *titles = test.title_path()
    project_title = f"[{project}] › " if project else ""
    return f"{project_title}{format_location(config, test.location)} › {' › '.join(titles)}"


def terminal_header(content: str) -> str:
    """
    A bold separator line, sized to the terminal.

    Recalculated on each call in case the terminal changes size.
    Capped at 80 characters wide.
    """
    width = shutil.get_terminal_size()[0]

    trailing_dash_count = max(min(80, width) - 6 - len(content), 4)
    return (
        "\n"
        + str(colored.white(f"{'=' * 4} {content} {'=' * trailing_dash_count}", bold=True))
        + "\n"
    )


def color_by_status(content: str, status: TestStatus) -> colored.ColoredString:
    mapping = {
        TestStatus.PASSED: "GREEN",
        TestStatus.FAILED: "RED",
        TestStatus.TIMED_OUT: "RED",
        TestStatus.INTERRUPTED: "YELLOW",
        TestStatus.SKIPPED: "YELLOW",
    }

    return colored.ColoredString(mapping.get(status, "RESET"), content)


class BaseReporter(Reporter):
    """
    Tallies results and prints a summary once the run has finished.

    Options:
      - `omit_failures`: do not repeat failure details in the summary,
        for when another reporter already shows them.
    """

    config: FullConfig | None
    suite: Suite | None
    omit_failures: bool

    passed: int
    skipped: int
    failures: list[tuple[Test, TestResult]]
    errors: list[TestError]

    total: int

    def __init__(self, options: Any = None) -> None:
        super().__init__(options)
        options = reporter_options(self.__class__.__name__, options)

        self.config = None
        self.suite = None
        self.total = 0
        self.omit_failures = bool(options.get("omit_failures", False))

        self.passed = 0
        self.skipped = 0
        self.failures = []
        self.errors = []

    async def on_begin(self, config: FullConfig, suite: Suite) -> None:
        self.config = config
        self.suite = suite
        self.total = len(suite.all_tests())
        sys.stdout.write(f"\nRunning {pluralise(self.total, 'test')}\n\n")
        sys.stdout.flush()

    async def on_test_end(self, test: Test, result: TestResult) -> None:
        if result.status == TestStatus.SKIPPED:
            self.skipped += 1
        elif result.ok:
            self.passed += 1
        else:
            self.failures.append((test, result))

    async def on_error(self, error: TestError) -> None:
        self.errors.append(error)

    async def on_end(self, result: FullResult) -> None:
        sys.stdout.write(self.summary(details=not self.omit_failures))
        sys.stdout.flush()

    def summary(self, details: bool = True, highlight: bool = True) -> str:
        lines = [""]

        if details and self.failures:
            lines.append(terminal_header("Failures"))
            for index, (test, result) in enumerate(self.failures, start=1):
                lines.append(self.format_failure(index, test, result, highlight))

        for error in self.errors:
            lines.append(self.format_error(error, highlight))

        if self.failures:
            lines.append(paint("red", f"  {len(self.failures)} failed", highlight))
            if not details and self.config:
                lines.extend(
                    f"    {format_test_title(self.config, test)}" for test, _ in self.failures
                )
        if self.skipped:
            lines.append(paint("yellow", f"  {self.skipped} skipped", highlight))
        if self.passed:
            lines.append(paint("green", f"  {self.passed} passed", highlight))

        return "\n".join(lines) + "\n"

    def format_failure(
        self,
        index: int,
        test: Test,
        result: TestResult,
        highlight: bool = True,
    ) -> str:
        title = format_test_title(self.config, test) if self.config else test.title
        header = paint("red", f"  {index}) {title}", highlight)

        details = [self.format_error(error, highlight) for error in result.errors]
        if not details:
            return header + "\n"

        return header + "\n\n" + textwrap.indent("\n\n".join(details), "    ") + "\n"

    def format_error(self, error: TestError, highlight: bool = True) -> str:
        if not self.config:
            return error.message or ""

        return format_error(self.config, error, highlight).message
