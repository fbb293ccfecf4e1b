# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

"""
Export hack to make ParameterSet easy to import, and shared test doubles.
"""

from __future__ import annotations as _future_annotations

from typing import Any

import pathlib

from _pytest.mark.structures import ParameterSet

from lynx.model import FullConfig, Suite, Test, build_suite
from lynx.reporting import Reporter

ROOT = pathlib.Path("/project")


def make_suite(*tests: tuple[str, str, list[str], int, int]) -> tuple[Suite, list[Test]]:
    """Build a suite from (project, relative file, titles, line, column) tuples."""

    return build_suite(
        ROOT,
        [(project, ROOT / file, titles, line, col) for project, file, titles, line, col in tests],
    )


def make_config(*reporters: tuple[str] | tuple[str, Any]) -> FullConfig:
    return FullConfig(list(reporters), ROOT)


class RecordingReporter(Reporter):
    """Appends (name, hook) to a shared journal for every event it sees."""

    def __init__(
        self,
        options: Any = None,
        journal: list[tuple[str, str]] | None = None,
        name: str = "recorder",
        prints: bool = True,
    ) -> None:
        super().__init__(options)
        self.options = options
        self.journal = [] if journal is None else journal
        self.name = name
        self.prints = prints

    def prints_to_stdio(self) -> bool:
        return self.prints

    async def on_begin(self, config: Any, suite: Any) -> None:
        self.journal.append((self.name, "on_begin"))

    async def on_test_begin(self, test: Any, result: Any) -> None:
        self.journal.append((self.name, "on_test_begin"))

    async def on_test_end(self, test: Any, result: Any) -> None:
        self.journal.append((self.name, "on_test_end"))

    async def on_end(self, result: Any) -> None:
        self.journal.append((self.name, "on_end"))

    async def on_error(self, error: Any) -> None:
        self.journal.append((self.name, "on_error"))


class FileOnlyReporter(RecordingReporter):
    def prints_to_stdio(self) -> bool:
        return False


class FakeLoader:
    """Resolves reporter names from a dict, remembering what was asked for."""

    def __init__(self, known: dict[str, type[Any]]) -> None:
        self.known = known
        self.requested: list[str] = []

    async def __call__(self, name: str) -> type[Any]:
        self.requested.append(name)
        return self.known[name]


__all__ = [
    "FakeLoader",
    "FileOnlyReporter",
    "ParameterSet",
    "ROOT",
    "RecordingReporter",
    "make_config",
    "make_suite",
]
