# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

"""
Turns the configured reporter descriptions into a live set of reporters.
"""

from __future__ import annotations as _future_annotations

from collections.abc import Iterable, Sequence
from typing import Any, NamedTuple

import logging

from lynx.model import FullConfig, ReporterDescription

from . import catalog
from .abc import prints_to_stdio
from .dot import DotReporter
from .exceptions import ReporterLoadError
from .line import LineReporter
from .list_mode import ListModeReporter
from .loader import Loader, ReporterLoader
from .multiplexer import Multiplexer


class ReporterEnvironment(NamedTuple):
    """
    The parts of the process environment that affect reporter selection.

    `override` names a reporter added after all configured ones;
    `ci` selects a quieter console reporter when one has to be added.
    """

    override: str | None = None
    ci: bool = False


async def create_reporter(
    logger: logging.Logger,
    config: FullConfig,
    *,
    list_mode: bool = False,
    environment: ReporterEnvironment | None = None,
    loader: Loader | None = None,
) -> Multiplexer:
    """
    Build the reporter for a run.

    All reporters are resolved before this returns, so a reporter that
    can't be loaded raises ReporterLoadError before any events are sent.
    """

    environment = environment or ReporterEnvironment()
    loader = loader or ReporterLoader(logger, config.config_dir or config.root_dir)

    reporters = await resolve_reporters(
        logger,
        config,
        list_mode=list_mode,
        environment=environment,
        loader=loader,
    )
    reporters = apply_stdio_fallback(logger, reporters, list_mode=list_mode, ci=environment.ci)

    return Multiplexer(logger, reporters)


async def resolve_reporters(
    logger: logging.Logger,
    config: FullConfig,
    *,
    list_mode: bool,
    environment: ReporterEnvironment,
    loader: Loader,
) -> list[Any]:
    reporters: list[Any] = []

    for name, arg in _descriptions(config.reporter):
        builtin = catalog.lookup(name, list_mode)

        if builtin is not None:
            logger.debug("Using built-in reporter %s (%s)", name, builtin.__name__)
            reporters.append(_construct(name, builtin, arg))
            continue

        reporter = await _load(loader, name)
        logger.debug("Using custom reporter %s (%s)", name, reporter.__name__)
        reporters.append(_construct(name, reporter, arg))

    if environment.override:
        reporter = await _load(loader, environment.override)
        logger.debug("Adding reporter %s from the environment", environment.override)
        reporters.append(_construct(environment.override, reporter))

    return reporters


def apply_stdio_fallback(
    logger: logging.Logger,
    reporters: Sequence[Any],
    *,
    list_mode: bool,
    ci: bool,
) -> list[Any]:
    """
    Make sure something shows progress on the console.

    When there are reporters but none of them print to stdio, a console
    reporter is put in front of them. It goes first so that progress is
    still shown if a later reporter stalls at the end of the run.
    """

    reporters = list(reporters)

    if not reporters or any(prints_to_stdio(reporter) for reporter in reporters):
        return reporters

    fallback: Any
    if list_mode:
        fallback = ListModeReporter()
    elif ci:
        fallback = DotReporter()
    else:
        fallback = LineReporter({"omit_failures": True})

    logger.debug("No reporter prints to stdio, adding %s", fallback.__class__.__name__)
    return [fallback, *reporters]


def to_reporters(value: Any) -> list[ReporterDescription] | None:
    """
    Normalise a reporter setting from the config.

    Accepts a single name, or a list whose items are names or
    `[name, argument]` pairs. An empty list stays empty, so no reporters
    are used; only a missing or blank setting returns None.
    """

    if value is None or value == "":
        return None

    if isinstance(value, str):
        return [(value,)]

    descriptions: list[ReporterDescription] = []
    for item in value:
        if isinstance(item, str):
            descriptions.append((item,))
        elif isinstance(item, (list, tuple)) and len(item) in (1, 2) and isinstance(item[0], str):
            descriptions.append(tuple(item))  # type: ignore[arg-type]
        else:
            raise ValueError(f"Invalid reporter description: {item!r}")

    return descriptions


def _descriptions(
    descriptions: Iterable[ReporterDescription],
) -> Iterable[tuple[str, Any]]:
    for description in descriptions:
        name, arg = description[0], description[1] if len(description) > 1 else None
        yield name, arg


async def _load(loader: Loader, name: str) -> type[Any]:
    try:
        return await loader(name)
    except ReporterLoadError:
        raise
    except Exception as e:
        raise ReporterLoadError(name, cause=e) from e


def _construct(name: str, reporter: type[Any], *args: Any) -> Any:
    try:
        return reporter(*args)
    except (TypeError, ValueError) as e:
        raise ReporterLoadError(name, str(e), e) from e
