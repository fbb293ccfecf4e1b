# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

import sys

from lynx.model import FullResult, Test, TestResult

from .base import BaseReporter, format_test_title


class LineReporter(BaseReporter):
    """
    Keeps progress on a single, rewritten console line.

    Failures are printed above the progress line as they happen, unless
    the `omit_failures` option is set.
    """

    _current: int = 0

    async def on_test_begin(self, test: Test, result: TestResult) -> None:
        self._current += 1
        title = format_test_title(self.config, test) if self.config else test.title
        sys.stdout.write(f"\r\x1b[K[{self._current}/{self.total}] {title}")
        sys.stdout.flush()

    async def on_std_out(
        self,
        chunk: str | bytes,
        test: Test | None,
        result: TestResult | None,
    ) -> None:
        text = chunk.decode("utf-8", errors="replace") if isinstance(chunk, bytes) else chunk
        sys.stdout.write(f"\r\x1b[K{text}")
        sys.stdout.flush()

    async def on_test_end(self, test: Test, result: TestResult) -> None:
        await super().on_test_end(test, result)

        if result.ok or self.omit_failures:
            return

        failure = self.format_failure(len(self.failures), test, result)
        sys.stdout.write(f"\r\x1b[K{failure}\n")
        sys.stdout.flush()

    async def on_end(self, result: FullResult) -> None:
        # Failure details were printed as they happened.
        sys.stdout.write("\r\x1b[K" + self.summary(details=False))
        sys.stdout.flush()
