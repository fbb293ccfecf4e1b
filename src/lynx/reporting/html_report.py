# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from typing import Any

import html
import pathlib

from lynx.model import FullConfig, FullResult, Suite, Test, TestResult

from .base import BaseReporter, format_error, format_test_title, reporter_options

DEFAULT_OUTPUT_FOLDER = "lynx-report"

PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Test Report</title>
<style>
body {{ font-family: sans-serif; }}
.passed {{ color: #2a7d2a; }}
.failed, .timedOut, .interrupted {{ color: #b52a2a; }}
.skipped {{ color: #9a7d0a; }}
pre {{ background: #f4f4f4; padding: 0.5em; }}
</style>
</head>
<body>
<h1>{heading}</h1>
<p>{summary}</p>
<ul>
{tests}
</ul>
</body>
</html>
"""


class HtmlReporter(BaseReporter):
    """
    Writes a static HTML page summarising the run.

    Options:
      - `output_folder`: directory for `index.html`, relative to the
        working directory. Defaults to `lynx-report`.
    """

    output_folder: pathlib.Path
    results: dict[Test, TestResult]

    def __init__(self, options: Any = None) -> None:
        super().__init__(options)
        options = reporter_options(self.__class__.__name__, options)

        self.output_folder = pathlib.Path(options.get("output_folder") or DEFAULT_OUTPUT_FOLDER)
        self.results = {}

    def prints_to_stdio(self) -> bool:
        return False

    async def on_begin(self, config: FullConfig, suite: Suite) -> None:
        self.config = config
        self.suite = suite

    async def on_test_end(self, test: Test, result: TestResult) -> None:
        await super().on_test_end(test, result)
        self.results[test] = result

    async def on_end(self, result: FullResult) -> None:
        self.output_folder.mkdir(parents=True, exist_ok=True)
        (self.output_folder / "index.html").write_text(self.render(result), encoding="utf-8")

    def render(self, result: FullResult) -> str:
        tests = self.suite.all_tests() if self.suite else []

        summary = (
            f"{len(tests)} tests: {self.passed} passed, "
            f"{len(self.failures)} failed, {self.skipped} skipped"
        )

        return PAGE.format(
            heading=html.escape(f"Run {result.status}"),
            summary=html.escape(summary),
            tests="\n".join(self._render_test(test) for test in tests),
        )

    def _render_test(self, test: Test) -> str:
        if self.config is None:
            return ""

        result = self.results.get(test)
        status = str(result.status) if result else "skipped"
        title = html.escape(format_test_title(self.config, test))

        errors = "".join(
            f"<pre>{html.escape(format_error(self.config, error, highlight=False).message)}</pre>"
            for error in (result.errors if result else [])
        )

        return f'<li class="{status}">{title} <b>{status}</b>{errors}</li>'
