# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from typing import Any
from xml.etree import ElementTree

import pathlib
import sys

from lynx.model import FullConfig, FullResult, Suite, Test, TestResult, TestStatus

from .abc import Reporter
from .base import format_error, relative_path, reporter_options


class JUnitReporter(Reporter):
    """
    Writes a JUnit XML report, one <testsuite> per test file.

    Options:
      - `output_file`: where to write the report. Without one the report
        goes to stdout.
    """

    output_file: pathlib.Path | None
    config: FullConfig | None
    suite: Suite | None
    results: dict[Test, TestResult]

    def __init__(self, options: Any = None) -> None:
        super().__init__(options)
        options = reporter_options(self.__class__.__name__, options)

        output_file = options.get("output_file")
        self.output_file = pathlib.Path(output_file) if output_file else None
        self.config = None
        self.suite = None
        self.results = {}

    def prints_to_stdio(self) -> bool:
        return self.output_file is None

    async def on_begin(self, config: FullConfig, suite: Suite) -> None:
        self.config = config
        self.suite = suite

    async def on_test_end(self, test: Test, result: TestResult) -> None:
        # Only the final attempt counts.
        self.results[test] = result

    async def on_end(self, result: FullResult) -> None:
        document = ElementTree.tostring(self.build(), encoding="unicode")
        report = '<?xml version="1.0" encoding="UTF-8"?>\n' + document + "\n"

        if self.output_file is None:
            sys.stdout.write(report)
            sys.stdout.flush()
            return

        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        self.output_file.write_text(report, encoding="utf-8")

    def build(self) -> ElementTree.Element:
        root = ElementTree.Element("testsuites")
        if self.config is None or self.suite is None:
            return root

        files: dict[str, list[Test]] = {}
        for test in self.suite.all_tests():
            files.setdefault(relative_path(self.config, test.location.file), []).append(test)

        for file, tests in files.items():
            suite = ElementTree.SubElement(root, "testsuite", name=file)
            failures = skipped = 0
            duration = 0.0

            for test in tests:
                case = self._case(self.config, suite, test)
                result = self.results.get(test)
                if result is None or result.status == TestStatus.SKIPPED:
                    skipped += 1
                elif not result.ok:
                    failures += 1
                duration += result.duration if result else 0.0
                case.set("classname", file)

            suite.set("tests", str(len(tests)))
            suite.set("failures", str(failures))
            suite.set("skipped", str(skipped))
            suite.set("time", f"{duration:.3f}")

        return root

    def _case(
        self,
        config: FullConfig,
        parent: ElementTree.Element,
        test: Test,
    ) -> ElementTree.Element:
        _, project, _, *titles = test.title_path()
        name = " › ".join(titles)
        if project:
            name = f"[{project}] {name}"

        result = self.results.get(test)
        case = ElementTree.SubElement(parent, "testcase", name=name)
        case.set("time", f"{result.duration if result else 0.0:.3f}")

        if result is None or result.status == TestStatus.SKIPPED:
            ElementTree.SubElement(case, "skipped")
        elif not result.ok:
            messages = [format_error(config, e, highlight=False).message for e in result.errors]
            summary = (messages[0].splitlines() or [""])[0] if messages else str(result.status)
            failure = ElementTree.SubElement(
                case,
                "failure",
                message=summary,
                type=str(result.status),
            )
            failure.text = "\n\n".join(messages)

        return case
