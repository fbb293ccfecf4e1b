# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

"""
The contract every reporter, built-in or user supplied, satisfies.

All hooks are optional. Subclasses override the ones they care about; the
defaults do nothing. Objects that do not subclass Reporter are still
accepted as long as the hooks they do define have these signatures.
"""

from __future__ import annotations as _future_annotations

from typing import Any

import abc

from lynx.model import FullConfig, FullResult, Suite, Test, TestError, TestResult

HOOKS = (
    "on_begin",
    "on_test_begin",
    "on_std_out",
    "on_std_err",
    "on_test_end",
    "on_end",
    "on_error",
)


class Reporter(abc.ABC):  # noqa: B024 - every hook is optional.
    """
    Consumer of test-run lifecycle events.

    The runner calls `on_begin` once with the whole suite, then
    `on_test_begin` / `on_test_end` around each test, and finally `on_end`.
    `on_error` may arrive at any point for errors not tied to a test.
    """

    def __init__(self, options: Any = None) -> None:  # noqa: B027
        pass

    def prints_to_stdio(self) -> bool:
        """
        Whether this reporter shows progress on the console.

        Reporters writing only to files return False, which lets the run
        add a console reporter so progress is still visible.
        """
        return True

    async def on_begin(self, config: FullConfig, suite: Suite) -> None:  # noqa: B027
        pass

    async def on_test_begin(self, test: Test, result: TestResult) -> None:  # noqa: B027
        pass

    async def on_std_out(  # noqa: B027
        self,
        chunk: str | bytes,
        test: Test | None,
        result: TestResult | None,
    ) -> None:
        pass

    async def on_std_err(  # noqa: B027
        self,
        chunk: str | bytes,
        test: Test | None,
        result: TestResult | None,
    ) -> None:
        pass

    async def on_test_end(self, test: Test, result: TestResult) -> None:  # noqa: B027
        pass

    async def on_end(self, result: FullResult) -> None:  # noqa: B027
        pass

    async def on_error(self, error: TestError) -> None:  # noqa: B027
        pass


def prints_to_stdio(reporter: Any) -> bool:
    """Ask a reporter if it prints to the console; reporters that don't say are assumed to."""

    query = getattr(reporter, "prints_to_stdio", None)
    if query is None:
        return True

    return bool(query())
