# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

import sys

from clint.textui import colored  # type: ignore[import-untyped]

from lynx.model import FullResult, Test, TestResult, TestStatus

from .base import BaseReporter

LINE_WIDTH = 80


class DotReporter(BaseReporter):
    """One character per finished test; the summary follows at the end."""

    _counter: int = 0

    async def on_test_end(self, test: Test, result: TestResult) -> None:
        await super().on_test_end(test, result)

        if self._counter and self._counter % LINE_WIDTH == 0:
            sys.stdout.write("\n")
        self._counter += 1

        sys.stdout.write(str(self.mark(result)))
        sys.stdout.flush()

    async def on_end(self, result: FullResult) -> None:
        if self._counter:
            sys.stdout.write("\n")
        await super().on_end(result)

    @staticmethod
    def mark(result: TestResult) -> colored.ColoredString:
        if result.status == TestStatus.SKIPPED:
            return colored.yellow("°")
        if result.status == TestStatus.TIMED_OUT:
            return colored.red("T")
        if not result.ok:
            return colored.red("F")
        if result.retry:
            return colored.yellow("±")
        return colored.green("·")
