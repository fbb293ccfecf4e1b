# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from typing import Any

import json
import pathlib
import sys

from lynx.model import FullConfig, FullResult, Suite, Test, TestError, TestResult

from .abc import Reporter
from .base import format_error, relative_path, reporter_options


class JSONReporter(Reporter):
    """
    Writes the whole run as a single JSON document when it ends.

    Options:
      - `output_file`: where to write the report. Without one the report
        goes to stdout.
    """

    output_file: pathlib.Path | None
    config: FullConfig | None
    suite: Suite | None
    results: dict[Test, list[TestResult]]
    errors: list[TestError]

    def __init__(self, options: Any = None) -> None:
        super().__init__(options)
        options = reporter_options(self.__class__.__name__, options)

        output_file = options.get("output_file")
        self.output_file = pathlib.Path(output_file) if output_file else None
        self.config = None
        self.suite = None
        self.results = {}
        self.errors = []

    def prints_to_stdio(self) -> bool:
        return self.output_file is None

    async def on_begin(self, config: FullConfig, suite: Suite) -> None:
        self.config = config
        self.suite = suite

    async def on_test_end(self, test: Test, result: TestResult) -> None:
        self.results.setdefault(test, []).append(result)

    async def on_error(self, error: TestError) -> None:
        self.errors.append(error)

    async def on_end(self, result: FullResult) -> None:
        report = json.dumps(self.serialise(result), indent=2)

        if self.output_file is None:
            sys.stdout.write(report + "\n")
            sys.stdout.flush()
            return

        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        self.output_file.write_text(report + "\n", encoding="utf-8")

    def serialise(self, result: FullResult) -> dict[str, Any]:
        if self.config is None or self.suite is None:
            return {"status": str(result.status), "tests": [], "errors": []}

        config = self.config
        return {
            "status": str(result.status),
            "rootDir": str(config.root_dir),
            "tests": [self._test(config, test) for test in self.suite.all_tests()],
            "errors": [
                format_error(config, error, highlight=False).message for error in self.errors
            ],
        }

    def _test(self, config: FullConfig, test: Test) -> dict[str, Any]:
        _, project, _, *titles = test.title_path()

        return {
            "project": project,
            "file": relative_path(config, test.location.file),
            "line": test.location.line,
            "column": test.location.column,
            "titles": titles,
            "results": [
                {
                    "status": str(result.status),
                    "duration": result.duration,
                    "retry": result.retry,
                    "errors": [
                        format_error(config, error, highlight=False).message
                        for error in result.errors
                    ],
                }
                for result in self.results.get(test, [])
            ],
        }
