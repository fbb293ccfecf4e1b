#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2021 - 2023 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

"""Reporter selection and event fan-out for test runs."""

from __future__ import annotations as _future_annotations

from .model import FullConfig, FullResult, Suite, Test, TestError, TestResult
from .reporting import (
    Multiplexer,
    Reporter,
    ReporterEnvironment,
    ReporterLoadError,
    create_reporter,
)

__version__ = "0.1.0"

__all__ = [
    "FullConfig",
    "FullResult",
    "Multiplexer",
    "Reporter",
    "ReporterEnvironment",
    "ReporterLoadError",
    "Suite",
    "Test",
    "TestError",
    "TestResult",
    "create_reporter",
]
