# SPDX-FileCopyrightText: 2023 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from typing import Any, NamedTuple

import json
import pathlib

from .model import (
    FullConfig,
    FullResult,
    RunStatus,
    Suite,
    Test,
    TestError,
    TestResult,
    TestStatus,
    build_suite,
)
from .reporting import Reporter


class ManifestEntry(NamedTuple):
    test: Test
    result: TestResult
    stdout: str | None
    stderr: str | None


class Manifest(NamedTuple):
    suite: Suite
    entries: list[ManifestEntry]
    errors: list[TestError]


def load_manifest(path: pathlib.Path, root_dir: pathlib.Path) -> Manifest:
    """
    Read a JSON test manifest.

    The manifest is either a list of tests, or an object with `tests` and
    `errors` lists. Each test has `file`, `titles` and optionally `project`,
    `line`, `column`, `status`, `duration`, `error`, `stdout` and `stderr`.
    """

    with path.open("r", encoding="utf-8") as in_file:
        data: Any = json.load(in_file)

    if isinstance(data, list):
        data = {"tests": data}

    tests = data.get("tests", [])
    suite, created = build_suite(
        root_dir,
        (
            (
                str(test.get("project", "")),
                pathlib.Path(test["file"]),
                [str(title) for title in test["titles"]],
                int(test.get("line", 1)),
                int(test.get("column", 1)),
            )
            for test in tests
        ),
    )

    entries = [
        ManifestEntry(
            test,
            _result(test, raw),
            raw.get("stdout"),
            raw.get("stderr"),
        )
        for test, raw in zip(created, tests, strict=True)
    ]
    errors = [TestError(message=str(message)) for message in data.get("errors", [])]

    return Manifest(suite, entries, errors)


def _result(test: Test, raw: dict[str, Any]) -> TestResult:
    status = TestStatus(raw.get("status", TestStatus.PASSED))
    errors = []

    if raw.get("error"):
        errors.append(TestError(message=str(raw["error"]), location=test.location))

    return TestResult(status, float(raw.get("duration", 0.0)), int(raw.get("retry", 0)), errors)


class ManifestRunner:
    """
    Replays a manifest of already-known results through a reporter.

    In list mode only `on_begin` and `on_end` are sent; otherwise each test
    is reported in manifest order between them.
    """

    reporter: Reporter
    config: FullConfig

    def __init__(self, reporter: Reporter, config: FullConfig) -> None:
        self.reporter = reporter
        self.config = config

    async def __call__(self, manifest: Manifest, list_mode: bool = False) -> FullResult:
        await self.reporter.on_begin(self.config, manifest.suite)

        if list_mode:
            result = FullResult(RunStatus.PASSED)
            await self.reporter.on_end(result)
            return result

        for error in manifest.errors:
            await self.reporter.on_error(error)

        success = not manifest.errors

        for test, outcome, stdout, stderr in manifest.entries:
            await self.reporter.on_test_begin(test, TestResult())

            if stdout:
                await self.reporter.on_std_out(stdout, test, outcome)
            if stderr:
                await self.reporter.on_std_err(stderr, test, outcome)

            await self.reporter.on_test_end(test, outcome)
            success = success and outcome.ok

        result = FullResult(RunStatus.PASSED if success else RunStatus.FAILED)
        await self.reporter.on_end(result)

        return result


__all__ = ["Manifest", "ManifestRunner", "load_manifest"]
