# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from collections.abc import Mapping
from typing import Any

import argparse
import logging
import os
import tomllib
from pathlib import Path

from .model import FullConfig, ReporterDescription
from .reporting import ReporterEnvironment, to_reporters

PYPROJECT_NAME = "pyproject.toml"

REPORTER_ENV = "LYNX_TEST_REPORTER"
CI_ENV = "CI"


class LynxConfiguration:
    @staticmethod
    def add_options(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
        parser.add_argument(
            "--root",
            nargs=argparse.OPTIONAL,
            help="Root directory of the project.",
        )
        parser.add_argument(
            "--reporter",
            action="append",
            help="Name or import path of a reporter to use. May be repeated.",
        )
        parser.add_argument(
            "--list",
            action="store_true",
            default=False,
            help="List the tests in the manifest without running them.",
        )
        parser.add_argument(
            "manifest",
            help="JSON manifest of the tests to report on.",
        )

        return parser

    config: dict[str, Any]

    root_dir: Path
    manifest: Path
    list_mode: bool

    reporters: list[ReporterDescription]
    environment: ReporterEnvironment

    def __init__(
        self,
        logger: logging.Logger,
        args: argparse.Namespace,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        logger.debug("Receive CLI args %s", args)
        environ = os.environ if environ is None else environ

        if args.root:
            self.root_dir = Path(args.root).resolve()
        else:
            logger.debug("Auto detecting repo root")
            self.root_dir = _find_pyproject(logger) or Path.cwd()

        logger.debug("Root Dir set to %s", self.root_dir)

        self.config = _load_config(logger, self.root_dir)
        self.manifest = Path(args.manifest)
        self.list_mode = bool(args.list)

        self.environment = ReporterEnvironment(
            override=environ.get(REPORTER_ENV) or None,
            ci=bool(environ.get(CI_ENV)),
        )
        logger.debug("Reporter environment %s", self.environment)

        # An explicit empty list in the file means no reporters at all.
        reporters = to_reporters(args.reporter)
        if reporters is None:
            reporters = self._config_reporters(logger)
        if reporters is None:
            reporters = default_reporters(ci=self.environment.ci)

        self.reporters = reporters
        logger.debug("Reporters set to %s", self.reporters)

    def _config_reporters(self, logger: logging.Logger) -> list[ReporterDescription] | None:
        if "reporter" not in self.config:
            return None

        try:
            return to_reporters(self.config["reporter"])
        except (TypeError, ValueError):
            logger.warning("Config option 'reporter' is invalid: %r", self.config["reporter"])
            return None

    @property
    def full_config(self) -> FullConfig:
        return FullConfig(self.reporters, self.root_dir)


def default_reporters(*, ci: bool) -> list[ReporterDescription]:
    return [("dot",)] if ci else [("list",)]


def _load_config(logger: logging.Logger, folder: Path) -> dict[str, Any]:
    logger.debug("Loading config from %s", folder)

    file = folder / PYPROJECT_NAME

    if not file.is_file():
        logger.warning("config file %s not found", file)
        return {}

    with file.open("rb") as in_file:
        toml = tomllib.load(in_file)

    config: dict[str, Any] = toml.get("tool", {}).get("lynx", {})

    if not isinstance(config, dict):
        logger.warning("Bad config: '[tool.lynx]' section in %s is not a dict", file)
        config = {}

    logger.debug("Loaded config: %s", config)
    return config


def _find_pyproject(logger: logging.Logger) -> Path | None:
    """
    Search for file pyproject.toml in the parent directories recursively.

    It resolves symlinks, so if there is any symlink up in the tree,
    it does not respect them.
    """
    current_dir = Path.cwd().resolve()

    while True:
        if (current_dir / PYPROJECT_NAME).is_file():
            logger.debug("Selecting %s due to %s", current_dir, PYPROJECT_NAME)
            return current_dir

        if (current_dir / ".git").is_dir():
            logger.debug("Selecting %s due to .git folder", current_dir)
            return current_dir

        if (current_dir / ".hg").is_dir():
            logger.debug("Selecting %s due to .hg folder", current_dir)
            return current_dir

        if current_dir == current_dir.parent:
            logger.error("No repo root found before hitting root directory.")
            return None

        current_dir = current_dir.parent
