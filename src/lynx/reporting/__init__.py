# SPDX-FileCopyrightText: 2023 Mewbot Developers <mewbot@quicksilver.london>

# SPDX-License-Identifier: BSD-2-Clause

"""
Reporting subsystem for Lynx.

Reporters receive the lifecycle events of a test run (begin, each test,
errors, end) and turn them into console output, files, or CI annotations.
The resolver picks the reporters for a run and the multiplexer fans the
events out to all of them.
"""

from __future__ import annotations as _future_annotations

from .abc import Reporter
from .catalog import BuiltInReporter, builtin_reporters, lookup
from .dot import DotReporter
from .empty import EmptyReporter
from .exceptions import ReporterDispatchError, ReporterError, ReporterLoadError
from .github import GitHubReporter
from .html_report import HtmlReporter
from .json_report import JSONReporter
from .junit import JUnitReporter
from .line import LineReporter
from .list import ListReporter
from .list_mode import ListModeReporter
from .loader import ReporterLoader
from .multiplexer import Multiplexer
from .resolver import (
    ReporterEnvironment,
    apply_stdio_fallback,
    create_reporter,
    resolve_reporters,
    to_reporters,
)

__all__ = [
    "BuiltInReporter",
    "DotReporter",
    "EmptyReporter",
    "GitHubReporter",
    "HtmlReporter",
    "JSONReporter",
    "JUnitReporter",
    "LineReporter",
    "ListModeReporter",
    "ListReporter",
    "Multiplexer",
    "Reporter",
    "ReporterDispatchError",
    "ReporterEnvironment",
    "ReporterError",
    "ReporterLoadError",
    "ReporterLoader",
    "apply_stdio_fallback",
    "builtin_reporters",
    "create_reporter",
    "lookup",
    "resolve_reporters",
    "to_reporters",
]
