# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

from .abc import Reporter


class EmptyReporter(Reporter):
    """The 'null' reporter. Produces no output at all."""

    def prints_to_stdio(self) -> bool:
        return False
