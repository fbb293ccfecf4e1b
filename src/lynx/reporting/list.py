# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

import sys

from lynx.model import Test, TestResult, TestStatus

from .base import BaseReporter, color_by_status, format_test_title

MARKS = {
    TestStatus.PASSED: "ok",
    TestStatus.FAILED: "x",
    TestStatus.TIMED_OUT: "x",
    TestStatus.SKIPPED: "-",
    TestStatus.INTERRUPTED: "!",
}


class ListReporter(BaseReporter):
    """Prints a line for every test as it finishes."""

    async def on_test_end(self, test: Test, result: TestResult) -> None:
        await super().on_test_end(test, result)

        title = format_test_title(self.config, test) if self.config else test.title
        mark = color_by_status(MARKS.get(result.status, "?"), result.status)
        duration = f" ({result.duration * 1000:.0f}ms)" if result.duration else ""

        sys.stdout.write(f"  {mark} {title}{duration}\n")
        sys.stdout.flush()
