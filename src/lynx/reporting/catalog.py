# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

"""
The table of built-in reporters, by configuration name.
"""

from __future__ import annotations as _future_annotations

import enum

from .abc import Reporter
from .dot import DotReporter
from .empty import EmptyReporter
from .github import GitHubReporter
from .html_report import HtmlReporter
from .json_report import JSONReporter
from .junit import JUnitReporter
from .line import LineReporter
from .list import ListReporter
from .list_mode import ListModeReporter


class BuiltInReporter(enum.StrEnum):
    LIST = "list"
    LINE = "line"
    DOT = "dot"
    JSON = "json"
    JUNIT = "junit"
    NULL = "null"
    GITHUB = "github"
    HTML = "html"


builtin_reporters: tuple[str, ...] = tuple(str(member) for member in BuiltInReporter)

reporters: dict[BuiltInReporter, type[Reporter]] = {
    BuiltInReporter.LIST: ListReporter,
    BuiltInReporter.LINE: LineReporter,
    BuiltInReporter.DOT: DotReporter,
    BuiltInReporter.JSON: JSONReporter,
    BuiltInReporter.JUNIT: JUnitReporter,
    BuiltInReporter.NULL: EmptyReporter,
    BuiltInReporter.GITHUB: GitHubReporter,
    BuiltInReporter.HTML: HtmlReporter,
}

# These only differ in how they show progress, which means nothing
# when the tests are listed rather than run.
list_mode_reporters: dict[BuiltInReporter, type[Reporter]] = {
    BuiltInReporter.LIST: ListModeReporter,
    BuiltInReporter.LINE: ListModeReporter,
    BuiltInReporter.DOT: ListModeReporter,
}


def lookup(name: str, list_mode: bool) -> type[Reporter] | None:
    """The built-in reporter class for `name`, or None if it isn't a built-in."""

    if name not in builtin_reporters:
        return None

    builtin = BuiltInReporter(name)

    if list_mode and builtin in list_mode_reporters:
        return list_mode_reporters[builtin]

    return reporters[builtin]
