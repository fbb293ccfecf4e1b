# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

"""
The read-only test model that reporters consume.

Suites form a tree: an unnamed root, one suite per project, one suite per
file, and then any number of nested 'describe' suites. Tests are the leaves.
"""

from __future__ import annotations as _future_annotations

from collections.abc import Iterable, Iterator
from typing import Any, NamedTuple

import dataclasses
import enum
import pathlib
import traceback


class TestStatus(enum.StrEnum):
    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    TIMED_OUT = "timedOut"
    SKIPPED = "skipped"
    INTERRUPTED = "interrupted"


class RunStatus(enum.StrEnum):
    PASSED = "passed"
    FAILED = "failed"
    TIMED_OUT = "timedout"
    INTERRUPTED = "interrupted"


class Location(NamedTuple):
    file: pathlib.Path
    line: int
    column: int


@dataclasses.dataclass
class TestError:
    """
    An error raised by a test, a hook, or the runner itself.

    Any of the fields may be missing; formatting prefers the stack,
    then the message, then the raw value.
    """

    __test__ = False

    message: str | None = None
    stack: str | None = None
    value: str | None = None
    location: Location | None = None

    @classmethod
    def from_exception(cls, error: BaseException) -> TestError:
        return cls(
            message=str(error) or error.__class__.__name__,
            stack="".join(traceback.format_exception(error)).rstrip(),
        )


@dataclasses.dataclass
class TestResult:
    __test__ = False

    status: TestStatus = TestStatus.PASSED
    duration: float = 0.0
    retry: int = 0
    errors: list[TestError] = dataclasses.field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status in (TestStatus.PASSED, TestStatus.SKIPPED)


@dataclasses.dataclass
class FullResult:
    status: RunStatus = RunStatus.PASSED


ReporterDescription = tuple[str] | tuple[str, Any]


@dataclasses.dataclass
class FullConfig:
    """
    The resolved configuration for a run.

    `reporter` keeps the configured order; `root_dir` is what locations
    are shown relative to, and `config_dir` anchors relative reporter paths.
    """

    reporter: list[ReporterDescription]
    root_dir: pathlib.Path
    config_dir: pathlib.Path | None = None

    def __post_init__(self) -> None:
        if self.config_dir is None:
            self.config_dir = self.root_dir


class Test:
    __test__ = False

    title: str
    location: Location
    parent: Suite | None

    def __init__(self, title: str, location: Location) -> None:
        self.title = title
        self.location = location
        self.parent = None

    def __repr__(self) -> str:
        return f"<Test {' > '.join(self.title_path()[1:])}>"

    def title_path(self) -> list[str]:
        path = self.parent.title_path() if self.parent else []
        return [*path, self.title]


class Suite:
    title: str
    parent: Suite | None
    _entries: list[Suite | Test]

    def __init__(self, title: str = "", entries: Iterable[Suite | Test] = ()) -> None:
        self.title = title
        self.parent = None
        self._entries = []

        for entry in entries:
            self.add(entry)

    def __repr__(self) -> str:
        return f"<Suite {self.title!r} ({len(self._entries)} entries)>"

    def add(self, entry: Suite | Test) -> Suite | Test:
        entry.parent = self
        self._entries.append(entry)
        return entry

    def child(self, title: str) -> Suite:
        """Return the direct child suite with this title, creating it if needed."""

        for entry in self._entries:
            if isinstance(entry, Suite) and entry.title == title:
                return entry

        suite = Suite(title)
        self.add(suite)
        return suite

    @property
    def entries(self) -> tuple[Suite | Test, ...]:
        return tuple(self._entries)

    def title_path(self) -> list[str]:
        path = self.parent.title_path() if self.parent else []
        return [*path, self.title]

    def all_tests(self) -> list[Test]:
        return list(self._iter_tests())

    def _iter_tests(self) -> Iterator[Test]:
        for entry in self._entries:
            if isinstance(entry, Test):
                yield entry
            else:
                yield from entry._iter_tests()


def build_suite(
    root_dir: pathlib.Path,
    tests: Iterable[tuple[str, pathlib.Path, list[str], int, int]],
) -> tuple[Suite, list[Test]]:
    """
    Assemble a suite tree from flat test descriptions.

    Each description is (project, file, titles, line, column); the last of
    the titles is the test's own name and the rest are describe blocks.
    File suites are titled with the path relative to `root_dir`.
    """

    root = Suite()
    created: list[Test] = []

    for project, file, titles, line, column in tests:
        if not titles:
            raise ValueError(f"Test in {file} has no title")

        file = file if file.is_absolute() else root_dir / file
        try:
            file_title = str(file.relative_to(root_dir))
        except ValueError:
            file_title = str(file)

        suite = root.child(project).child(file_title)
        for describe in titles[:-1]:
            suite = suite.child(describe)

        test = Test(titles[-1], Location(file, line, column))
        suite.add(test)
        created.append(test)

    return root, created
