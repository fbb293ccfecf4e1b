# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from collections.abc import Iterable
from typing import Any

import inspect
import logging

from lynx.model import FullConfig, FullResult, Suite, Test, TestError, TestResult

from .abc import Reporter, prints_to_stdio
from .exceptions import ReporterDispatchError


class Multiplexer(Reporter):
    """
    Presents a set of reporters as a single reporter.

    Every lifecycle call is forwarded to each wrapped reporter in order,
    waiting for one to finish before calling the next. A reporter that
    raises does not stop the event reaching the rest: the failure is logged
    and kept in `errors` for the runner to report once the run is over.
    """

    logger: logging.Logger
    errors: list[ReporterDispatchError]
    _reporters: tuple[Any, ...]

    def __init__(self, logger: logging.Logger, reporters: Iterable[Any]) -> None:
        super().__init__()
        self.logger = logger
        self.errors = []
        self._reporters = tuple(reporters)

    def __repr__(self) -> str:
        names = ", ".join(reporter.__class__.__name__ for reporter in self._reporters)
        return f"<Multiplexer [{names}]>"

    @property
    def reporters(self) -> tuple[Any, ...]:
        return self._reporters

    def prints_to_stdio(self) -> bool:
        return any(prints_to_stdio(reporter) for reporter in self._reporters)

    async def on_begin(self, config: FullConfig, suite: Suite) -> None:
        await self._dispatch("on_begin", config, suite)

    async def on_test_begin(self, test: Test, result: TestResult) -> None:
        await self._dispatch("on_test_begin", test, result)

    async def on_std_out(
        self,
        chunk: str | bytes,
        test: Test | None,
        result: TestResult | None,
    ) -> None:
        await self._dispatch("on_std_out", chunk, test, result)

    async def on_std_err(
        self,
        chunk: str | bytes,
        test: Test | None,
        result: TestResult | None,
    ) -> None:
        await self._dispatch("on_std_err", chunk, test, result)

    async def on_test_end(self, test: Test, result: TestResult) -> None:
        await self._dispatch("on_test_end", test, result)

    async def on_end(self, result: FullResult) -> None:
        await self._dispatch("on_end", result)

    async def on_error(self, error: TestError) -> None:
        await self._dispatch("on_error", error)

    async def _dispatch(self, hook: str, *args: Any) -> None:
        for reporter in self._reporters:
            method = getattr(reporter, hook, None)
            if method is None:
                continue

            try:
                outcome = method(*args)
                if inspect.isawaitable(outcome):
                    await outcome
            except Exception as e:  # noqa: BLE001 - isolated per reporter
                self.logger.exception("Reporter %r failed in %s", reporter, hook)
                self.errors.append(ReporterDispatchError(reporter, hook, e))
