# SPDX-FileCopyrightText: 2024 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

"""
Tests for resolving reporter descriptions and the console fallback.
"""

from __future__ import annotations as _future_annotations

from typing import Any

import asyncio
import logging

import pytest

from lynx.reporting import (
    DotReporter,
    EmptyReporter,
    JSONReporter,
    LineReporter,
    ListModeReporter,
    ListReporter,
    Multiplexer,
    ReporterEnvironment,
    ReporterLoadError,
    apply_stdio_fallback,
    create_reporter,
    resolve_reporters,
    to_reporters,
)

from .util import (
    FakeLoader,
    FileOnlyReporter,
    ParameterSet,
    RecordingReporter,
    make_config,
    make_suite,
)

LOGGER = logging.getLogger("lynx.tests")


def resolve(
    *descriptions: tuple[str] | tuple[str, Any],
    loader: FakeLoader | None = None,
    list_mode: bool = False,
    environment: ReporterEnvironment | None = None,
) -> list[Any]:
    return asyncio.run(
        resolve_reporters(
            LOGGER,
            make_config(*descriptions),
            list_mode=list_mode,
            environment=environment or ReporterEnvironment(),
            loader=loader or FakeLoader({}),
        ),
    )


class TestResolveReporters:
    """
    Tests for `resolve_reporters`.
    """

    def test_order_is_kept(self) -> None:
        """Reporters come back in configured order, custom ones included."""

        loader = FakeLoader({"custom:Recorder": RecordingReporter})

        reporters = resolve(("json",), ("custom:Recorder", {"x": 1}), ("dot",), loader=loader)

        assert [type(r) for r in reporters] == [JSONReporter, RecordingReporter, DotReporter]
        assert reporters[1].options == {"x": 1}
        assert loader.requested == ["custom:Recorder"]

    def test_builtins_get_their_argument(self) -> None:
        """The second element of a description is passed to the constructor."""

        reporters = resolve(
            ("line", {"omit_failures": True}),
            ("json", {"output_file": "r.json"}),
        )

        assert reporters[0].omit_failures
        assert str(reporters[1].output_file) == "r.json"

    def test_list_mode_substitution(self) -> None:
        """In list mode dot, line and list all become the listing reporter."""

        reporters = resolve(("dot",), ("line",), ("list",), ("json",), list_mode=True)

        assert [type(r) for r in reporters] == [
            ListModeReporter,
            ListModeReporter,
            ListModeReporter,
            JSONReporter,
        ]

    def test_environment_override_is_last(self) -> None:
        """The environment reporter is appended after all configured ones, without argument."""

        loader = FakeLoader({"debug:Recorder": RecordingReporter})

        reporters = resolve(
            ("dot",),
            ("list",),
            loader=loader,
            environment=ReporterEnvironment(override="debug:Recorder"),
        )

        assert [type(r) for r in reporters] == [DotReporter, ListReporter, RecordingReporter]
        assert reporters[-1].options is None

    def test_environment_override_with_nothing_configured(self) -> None:
        """The override is added even when no reporters are configured."""

        loader = FakeLoader({"debug:Recorder": RecordingReporter})

        environment = ReporterEnvironment(override="debug:Recorder")

        reporters = resolve(loader=loader, environment=environment)

        assert [type(r) for r in reporters] == [RecordingReporter]

    def test_unknown_reporter_fails(self) -> None:
        """A reporter the loader can't find raises ReporterLoadError naming it."""

        with pytest.raises(ReporterLoadError) as excinfo:
            resolve(("dot",), ("missing:Reporter",))

        assert excinfo.value.name == "missing:Reporter"
        assert "missing:Reporter" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, KeyError)

    def test_unknown_override_fails(self) -> None:
        """A bad environment override is a load error too."""

        with pytest.raises(ReporterLoadError):
            resolve(("dot",), environment=ReporterEnvironment(override="nope"))

    @pytest.mark.parametrize("name", ["dot", "line", "list", "json", "junit", "html", "github"])
    def test_options_must_be_a_table(self, name: str) -> None:
        """A built-in given a bare value instead of options fails to load, naming itself."""

        with pytest.raises(ReporterLoadError) as excinfo:
            resolve((name, "report-out"))

        assert excinfo.value.name == name
        assert isinstance(excinfo.value.__cause__, ValueError)
        assert "must be a table, not str" in "\n".join(excinfo.value.__notes__)

    def test_null_ignores_its_argument(self) -> None:
        """The null reporter takes any argument."""

        assert [type(r) for r in resolve(("null", "report-out"))] == [EmptyReporter]

    def test_custom_constructor_rejects_argument(self) -> None:
        """A custom reporter whose constructor rejects the argument is a load error."""

        class NoOptions:
            def __init__(self) -> None:
                pass

        loader = FakeLoader({"custom:NoOptions": NoOptions})

        with pytest.raises(ReporterLoadError) as excinfo:
            resolve(("custom:NoOptions", {"x": 1}), loader=loader)

        assert excinfo.value.name == "custom:NoOptions"
        assert isinstance(excinfo.value.__cause__, TypeError)


class TestStdioFallback:
    """
    Tests for `apply_stdio_fallback`.
    """

    DATASET_FALLBACK = [
        ParameterSet([True, False, ListModeReporter], [], "list-mode"),
        ParameterSet([True, True, ListModeReporter], [], "list-mode-ci"),
        ParameterSet([False, True, DotReporter], [], "ci"),
        ParameterSet([False, False, LineReporter], [], "local"),
    ]

    @pytest.mark.parametrize(("list_mode", "ci", "expected"), DATASET_FALLBACK)
    def test_fallback_is_first(self, list_mode: bool, ci: bool, expected: type) -> None:
        """One console reporter is added in front when nothing prints."""

        quiet = [FileOnlyReporter(), EmptyReporter()]

        reporters = apply_stdio_fallback(LOGGER, quiet, list_mode=list_mode, ci=ci)

        assert len(reporters) == len(quiet) + 1
        assert type(reporters[0]) is expected
        assert reporters[1:] == quiet

    def test_local_fallback_omits_failures(self) -> None:
        """Outside CI the line reporter is told not to repeat failures."""

        reporters = apply_stdio_fallback(LOGGER, [EmptyReporter()], list_mode=False, ci=False)

        assert isinstance(reporters[0], LineReporter)
        assert reporters[0].omit_failures

    def test_no_fallback_when_something_prints(self) -> None:
        """A single printing reporter is enough."""

        original = [FileOnlyReporter(), RecordingReporter()]

        reporters = apply_stdio_fallback(LOGGER, original, list_mode=False, ci=False)

        assert reporters == original

    def test_missing_query_counts_as_printing(self) -> None:
        """Reporters without prints_to_stdio are assumed to print."""

        class Bare:
            pass

        original = [FileOnlyReporter(), Bare()]

        assert apply_stdio_fallback(LOGGER, original, list_mode=False, ci=False) == original

    def test_empty_stays_empty(self) -> None:
        """No reporters at all means no fallback either."""

        assert apply_stdio_fallback(LOGGER, [], list_mode=False, ci=True) == []

    def test_input_is_not_modified(self) -> None:
        """A new list is returned."""

        original = [EmptyReporter()]

        apply_stdio_fallback(LOGGER, original, list_mode=False, ci=False)

        assert len(original) == 1


class TestCreateReporter:
    """
    Tests for `create_reporter`, which resolves, applies the fallback and wraps.
    """

    def test_wraps_in_multiplexer(self) -> None:
        """The result is a Multiplexer over the resolved reporters plus fallback."""

        multiplexer = asyncio.run(
            create_reporter(
                LOGGER,
                make_config(("null",), ("json", {"output_file": "out.json"})),
                environment=ReporterEnvironment(ci=True),
                loader=FakeLoader({}),
            ),
        )

        assert isinstance(multiplexer, Multiplexer)
        assert [type(r) for r in multiplexer.reporters] == [
            DotReporter,
            EmptyReporter,
            JSONReporter,
        ]

    def test_load_failure_before_any_event(self) -> None:
        """A bad custom reporter fails the run before on_begin reaches anyone."""

        journal: list[tuple[str, str]] = []

        class Journaled(RecordingReporter):
            def __init__(self, options: Any = None) -> None:
                super().__init__(options, journal=journal)

        suite, _ = make_suite(("", "test_a.py", ["a"], 1, 1))
        config = make_config(("good:Reporter",), ("bad:Reporter",))

        async def scenario() -> None:
            reporter = await create_reporter(
                LOGGER,
                config,
                loader=FakeLoader({"good:Reporter": Journaled}),
            )
            await reporter.on_begin(config, suite)

        with pytest.raises(ReporterLoadError):
            asyncio.run(scenario())

        assert journal == []


class TestToReporters:
    """
    Tests for normalising the reporter setting.
    """

    DATASET_VALID = [
        ParameterSet([None, None], [], "none"),
        ParameterSet(["", None], [], "blank"),
        ParameterSet([[], []], [], "empty"),
        ParameterSet(["dot", [("dot",)]], [], "single-name"),
        ParameterSet([["dot", "json"], [("dot",), ("json",)]], [], "names"),
        ParameterSet([[["dot"]], [("dot",)]], [], "one-element-pair"),
        ParameterSet(
            [
                [["json", {"output_file": "a.json"}], "line"],
                [("json", {"output_file": "a.json"}), ("line",)],
            ],
            [],
            "pairs",
        ),
    ]

    @pytest.mark.parametrize(("value", "expected"), DATASET_VALID)
    def test_valid(self, value: Any, expected: Any) -> None:
        """Names and pairs are normalised to a list of tuples."""

        assert to_reporters(value) == expected

    @pytest.mark.parametrize("value", [[42], [["dot", 1, 2]], [[]]])
    def test_invalid(self, value: Any) -> None:
        """Anything else is rejected."""

        with pytest.raises(ValueError, match="Invalid reporter description"):
            to_reporters(value)
