# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from collections.abc import Iterable
from typing import NamedTuple

import sys

from lynx.model import FullResult, TestError

from .base import BaseReporter, format_error, format_test_title, pluralise, relative_path


class WorkflowAnnotation(NamedTuple):
    level: str
    file: str
    line: int
    column: int
    title: str
    message: str

    def command(self) -> str:
        message = escape_data(self.message)
        title = escape_property(self.title)

        if not self.file:
            return f"::{self.level} title={title}::{message}\n"

        return (
            f"::{self.level} file={escape_property(self.file)},line={self.line},"
            f"col={self.column},title={title}::{message}\n"
        )


class GitHubReporter(BaseReporter):
    """
    Outputs failures as GitHub Actions workflow commands.

    The annotations are grouped at the end of output so the raw log stays
    readable, followed by the usual summary.
    """

    async def on_end(self, result: FullResult) -> None:
        annotations = sorted(set(self.annotations()))

        sys.stdout.write("::group::Annotations\n")
        for annotation in annotations:
            sys.stdout.write(annotation.command())
        sys.stdout.write("::endgroup::\n")

        sys.stdout.write(self.summary(details=False, highlight=False))
        sys.stdout.write(f"Total Issues: {len(annotations)}\n")
        sys.stdout.flush()

    def annotations(self) -> Iterable[WorkflowAnnotation]:
        if self.config is None:
            return

        config = self.config

        for test, result in self.failures:
            title = format_test_title(config, test)
            location = test.location

            if not result.errors:
                yield WorkflowAnnotation(
                    "error",
                    relative_path(config, location.file),
                    location.line,
                    location.column,
                    title,
                    f"Test {result.status}",
                )

            for error in result.errors:
                if error.location:
                    location = error.location
                yield WorkflowAnnotation(
                    "error",
                    relative_path(config, location.file),
                    location.line,
                    location.column,
                    title,
                    format_error(config, error, highlight=False).message,
                )

        for error in self.errors:
            yield self.annotate_error(error)

        if self.skipped:
            yield WorkflowAnnotation("notice", "", 0, 0, "Skipped", pluralise(self.skipped, "test"))

    def annotate_error(self, error: TestError) -> WorkflowAnnotation:
        message = format_error(self.config, error, highlight=False).message if self.config else ""

        if self.config and error.location:
            return WorkflowAnnotation(
                "error",
                relative_path(self.config, error.location.file),
                error.location.line,
                error.location.column,
                "Error",
                message,
            )

        return WorkflowAnnotation("error", "", 0, 0, "Error", message)


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")
