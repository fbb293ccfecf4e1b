#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2023 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

"""
Replay a test manifest through the configured reporters.

Reporters come from `--reporter` options, or the `[tool.lynx]` table of
the project's pyproject.toml. With `--list` the tests are only listed.
"""

from __future__ import annotations as _future_annotations

import argparse
import asyncio
import logging
import os
import sys

from .config import LynxConfiguration
from .model import RunStatus
from .reporting import ReporterLoadError, create_reporter
from .runner import ManifestRunner, load_manifest


async def run(logger: logging.Logger, config: LynxConfiguration) -> int:
    full_config = config.full_config

    try:
        reporter = await create_reporter(
            logger,
            full_config,
            list_mode=config.list_mode,
            environment=config.environment,
        )
    except ReporterLoadError as e:
        sys.stderr.write(f"{e}\n")
        for note in getattr(e, "__notes__", []):
            sys.stderr.write(f"  {note}\n")
        return 1

    manifest = load_manifest(config.manifest, full_config.root_dir)

    runner = ManifestRunner(reporter, full_config)
    result = await runner(manifest, list_mode=config.list_mode)

    for error in reporter.errors:
        logger.error("%s", error)

    return 0 if result.status == RunStatus.PASSED and not reporter.errors else 1


def main() -> None:
    """
    Run the lynx command line.
    """

    # Windows hack to allow colour printing in the terminal
    # See https://bugs.python.org/issue30075.
    if os.name == "nt":
        os.system("")  # noqa: S605 S607 # nosec: B605 B607

    logging.basicConfig(level=logging.WARNING)
    logger = logging.getLogger("lynx")
    logger.setLevel(logging.WARNING)

    parser = argparse.ArgumentParser()
    LynxConfiguration.add_options(parser)
    config = LynxConfiguration(logger, parser.parse_args())

    sys.exit(asyncio.run(run(logger, config)))


if __name__ == "__main__":
    main()
