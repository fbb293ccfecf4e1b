# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

"""
Loads user supplied reporter classes.

A reporter is named by one of:
  - `package.module:ClassName`
  - `package.module.ClassName`
  - `path/to/file.py:ClassName`
  - `package.module` or `path/to/file.py`, where the module has a
    `reporter` attribute holding the class.

Relative file paths are resolved against the directory of the config.
"""

from __future__ import annotations as _future_annotations

from collections.abc import Awaitable, Callable
from types import ModuleType
from typing import Any

import asyncio
import hashlib
import importlib
import importlib.util
import logging
import pathlib
import sys

from .exceptions import ReporterLoadError

DEFAULT_ATTRIBUTE = "reporter"

Loader = Callable[[str], Awaitable[type[Any]]]


class ReporterLoader:
    logger: logging.Logger
    config_dir: pathlib.Path

    def __init__(self, logger: logging.Logger, config_dir: pathlib.Path) -> None:
        self.logger = logger
        self.config_dir = config_dir

    async def __call__(self, name: str) -> type[Any]:
        return await asyncio.to_thread(self.load, name)

    def load(self, name: str) -> type[Any]:
        self.logger.debug("Loading reporter %s", name)

        location, attribute = self.split_locator(name)
        if not location:
            raise ReporterLoadError(name, "No module or file given")

        if self._is_file(location):
            module = self._load_file(name, location)
        elif attribute:
            module = self._import(name, location)
        else:
            module, attribute = self._import_dotted(name)

        attribute = attribute or DEFAULT_ATTRIBUTE
        reporter = getattr(module, attribute, None)

        if reporter is None:
            raise ReporterLoadError(name, f"{module.__name__} has no attribute '{attribute}'")

        if not isinstance(reporter, type):
            raise ReporterLoadError(name, f"{module.__name__}.{attribute} is not a class")

        self.logger.debug("Loaded reporter %s as %r", name, reporter)
        return reporter

    @classmethod
    def split_locator(cls, name: str) -> tuple[str, str]:
        """
        Split a locator into its module or file and the attribute to take.

        Only the last colon separates the attribute, and only when what
        follows it is not itself a path, so `C:\\rep\\my.py` stays whole.
        """

        location, separator, attribute = name.rpartition(":")
        if not separator or cls._is_file(attribute):
            return name, ""

        return location, attribute

    @staticmethod
    def _is_file(location: str) -> bool:
        return location.endswith(".py") or "/" in location or "\\" in location

    def _import(self, name: str, module_name: str) -> ModuleType:
        try:
            return importlib.import_module(module_name)
        except ImportError as e:
            raise ReporterLoadError(name, f"Could not import {module_name}", e) from e

    def _import_dotted(self, name: str) -> tuple[ModuleType, str]:
        try:
            return importlib.import_module(name), DEFAULT_ATTRIBUTE
        except ModuleNotFoundError as e:
            # Only fall back when `name` itself is missing, not something it imports.
            if e.name != name or "." not in name:
                raise ReporterLoadError(name, f"Could not import {name}", e) from e
        except ImportError as e:
            raise ReporterLoadError(name, f"Could not import {name}", e) from e

        module_name, attribute = name.rsplit(".", 1)
        return self._import(name, module_name), attribute

    def _load_file(self, name: str, location: str) -> ModuleType:
        path = pathlib.Path(location)
        if not path.is_absolute():
            path = self.config_dir / path
        path = path.resolve()

        if not path.is_file():
            raise ReporterLoadError(name, f"File {path} does not exist")

        digest = hashlib.sha1(str(path).encode("utf-8"), usedforsecurity=False).hexdigest()[:8]
        module_name = f"_lynx_reporter_{path.stem}_{digest}"

        if module_name in sys.modules:
            return sys.modules[module_name]

        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ReporterLoadError(name, f"{path} can not be imported")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            del sys.modules[module_name]
            raise ReporterLoadError(name, f"Error while executing {path}", e) from e

        return module
