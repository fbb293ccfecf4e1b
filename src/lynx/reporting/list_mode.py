# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from typing import Any

import pathlib
import sys

from lynx.model import FullConfig, Suite, TestError

from .abc import Reporter
from .base import format_error, format_location, pluralise


class ListModeReporter(Reporter):
    """
    Prints the tests that would run, without running them.

    Used in place of the list, line and dot reporters when the runner
    is only asked to enumerate tests.
    """

    config: FullConfig | None = None

    def __init__(self, options: Any = None) -> None:
        super().__init__(options)

    async def on_begin(self, config: FullConfig, suite: Suite) -> None:
        self.config = config
        sys.stdout.write("Listing tests:\n")

        tests = suite.all_tests()
        files = set()

        for test in tests:
            # root, project, file, ...describes, test
            _, project, _, *titles = test.title_path()
            project_title = f"[{project}] › " if project else ""
            location = format_location(config, test.location)

            sys.stdout.write(f"  {project_title}{location} › {' '.join(titles)}\n")
            files.add(test.location.file)

        sys.stdout.write(
            f"Total: {pluralise(len(tests), 'test')} in {pluralise(len(files), 'file')}\n",
        )
        sys.stdout.flush()

    async def on_error(self, error: TestError) -> None:
        # Errors may arrive before on_begin, e.g. while loading the config.
        config = self.config or FullConfig([], pathlib.Path.cwd())

        sys.stderr.write("\n" + format_error(config, error, highlight=False).message + "\n")
        sys.stderr.flush()
