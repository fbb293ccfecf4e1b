# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from typing import Any


class ReporterError(Exception):
    pass


class ReporterLoadError(ReporterError):
    """A reporter could not be found, imported or constructed from its options."""

    name: str

    def __init__(
        self,
        name: str,
        reason: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(f"Unable to load reporter '{name}'")
        self.name = name
        self.__cause__ = cause

        if reason:
            self.add_note(reason)
        if cause:
            self.add_note(f"Caused by {cause.__class__.__name__}: {cause}")


class ReporterDispatchError(ReporterError):
    """A reporter raised from one of its lifecycle hooks."""

    reporter: Any
    hook: str

    def __init__(self, reporter: Any, hook: str, cause: Exception) -> None:
        super().__init__(f"{reporter.__class__.__name__}.{hook} failed: {cause}")
        self.reporter = reporter
        self.hook = hook
        self.__cause__ = cause
