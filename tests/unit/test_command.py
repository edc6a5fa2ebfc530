"""Tests for JMeter command construction."""

import logging
from pathlib import Path

import pytest

from jmeter_engine.command import (
    Command,
    build_arguments,
    build_command,
    format_parameter,
    normalize_parameters,
    split_arguments,
    split_script_reference,
)
from jmeter_engine.errors import ConfigurationError, InputError
from jmeter_engine.models.test_run import TestRunParameter

OUTPUT_FILE = Path("/var/log/RemoteLaunch/JMeterEngine_Output.log")


@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("/tests/login.jmx", ("/tests/login.jmx", "")),
        ("/tests/login.jmx|-Jusers=5", ("/tests/login.jmx", "-Jusers=5")),
        ("/tests/login.jmx|", ("/tests/login.jmx", "")),
        ("/tests/login.jmx|-Ja=1|ignored", ("/tests/login.jmx", "-Ja=1")),
    ],
)
def test_split_script_reference(reference: str, expected: tuple[str, str]) -> None:
    """Splits path and arguments on the first pipe."""
    assert split_script_reference(reference) == expected


class TestNormalizeParameters:
    """Tests for normalize_parameters function."""

    def test_returns_empty_for_missing_parameters(self) -> None:
        """No parameters yields an empty mapping."""
        assert normalize_parameters(None) == {}

    def test_lower_cases_names(self) -> None:
        """Parameter names are lower-cased, values kept as is."""
        parameters = [TestRunParameter(name="Threads", value="Five")]

        assert normalize_parameters(parameters) == {"threads": "Five"}

    def test_first_value_wins_for_duplicate_names(self) -> None:
        """Later parameters differing only by case are dropped."""
        parameters = [
            TestRunParameter(name="Users", value="10"),
            TestRunParameter(name="USERS", value="20"),
            TestRunParameter(name="users", value="30"),
        ]

        assert normalize_parameters(parameters) == {"users": "10"}

    def test_keeps_parameter_order(self) -> None:
        """Parameters keep the order they were given in."""
        parameters = [
            TestRunParameter(name="b", value="2"),
            TestRunParameter(name="a", value="1"),
        ]

        assert list(normalize_parameters(parameters)) == ["b", "a"]

    def test_trace_logs_added_parameters(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Trace logging reports each parameter added."""
        parameters = [
            TestRunParameter(name="Host", value="example.com"),
            TestRunParameter(name="host", value="ignored.com"),
        ]

        with caplog.at_level(logging.INFO):
            normalize_parameters(parameters, trace=True)

        assert "Test run has parameters" in caplog.text
        assert "Adding test run parameter host = example.com" in caplog.text
        assert "ignored.com" not in caplog.text

    def test_no_logging_without_trace(self, caplog: pytest.LogCaptureFixture) -> None:
        """Nothing is logged when trace logging is off."""
        with caplog.at_level(logging.INFO):
            normalize_parameters([TestRunParameter(name="a", value="1")])

        assert caplog.text == ""


@pytest.mark.parametrize(
    ("name", "value", "expected"),
    [
        ("threads", "5", '-Jthreads="5"'),
        ('a"b', "x", '-Ja""b="x"'),
        ("name", 'c"d', '-Jname="c"""d"'),
        ("empty", "", '-Jempty=""'),
    ],
)
def test_format_parameter_escapes_quotes(name: str, value: str, expected: str) -> None:
    """Doubles quotes in names and triples them in values."""
    assert format_parameter(name, value) == expected


@pytest.mark.parametrize(
    ("arguments", "expected"),
    [
        ("-n -t /tests/login.jmx", ["-n", "-t", "/tests/login.jmx"]),
        ('-t "/my tests/login.jmx"', ["-t", "/my tests/login.jmx"]),
        ("  -n   -Ja=1 ", ["-n", "-Ja=1"]),
        ('-Jempty=""', ["-Jempty="]),
        ('-n ""', ["-n", ""]),
        ("-Jhome=$HOME -Jcmd=`id`", ["-Jhome=$HOME", "-Jcmd=`id`"]),
        ("-Jpath=C:\\tests\\", ["-Jpath=C:\\tests\\"]),
    ],
)
def test_split_arguments(arguments: str, expected: list[str]) -> None:
    """Splits on unquoted whitespace without expanding anything."""
    assert split_arguments(arguments) == expected


@pytest.mark.parametrize(
    ("name", "value", "expected"),
    [
        ("q", 'c"d', '-Jq=c"d'),
        ("q", 'c" d', '-Jq=c" d'),
        ("q", 'end"', '-Jq=end"'),
        ("q", '""', '-Jq=""'),
        ("q", "a b", "-Jq=a b"),
        ('a"b', "x", "-Jab=x"),
    ],
)
def test_split_arguments_unescapes_parameters(
    name: str, value: str, expected: str
) -> None:
    """Escaped parameters arrive as a single argument."""
    assert split_arguments(format_parameter(name, value)) == [expected]


def test_build_arguments_without_extras() -> None:
    """Builds the non-GUI invocation with test plan and log file."""
    arguments = build_arguments("/tests/login.jmx", "", {}, OUTPUT_FILE)

    assert arguments == (
        f'-n -t "/tests/login.jmx" -l "{OUTPUT_FILE}"'
    )


def test_build_arguments_with_extras_and_parameters() -> None:
    """Appends extra arguments, then one property flag per parameter."""
    arguments = build_arguments(
        "/tests/login.jmx",
        "-Jduration=60 ",
        {"threads": "5", "host": "example.com"},
        OUTPUT_FILE,
    )

    assert arguments == (
        f'-n -t "/tests/login.jmx" -l "{OUTPUT_FILE}" -Jduration=60 '
        '-Jthreads="5" -Jhost="example.com"'
    )


class TestBuildCommand:
    """Tests for build_command function."""

    def test_resolves_executable_in_install_dir(
        self, install_dir: Path, script_path: Path
    ) -> None:
        """Builds the command with install dir as working directory."""
        command = build_command(
            str(script_path),
            "",
            {"threads": "5"},
            OUTPUT_FILE,
            install_dir=install_dir,
            executable_name="jmeter",
        )

        assert command == Command(
            executable=install_dir / "jmeter",
            arguments=(
                f'-n -t "{script_path}" -l "{OUTPUT_FILE}" -Jthreads="5"'
            ),
            working_directory=install_dir,
        )
        assert command.command_line == (
            f'"{install_dir / "jmeter"}" {command.arguments}'
        )
        assert command.argv == [
            str(install_dir / "jmeter"),
            "-n",
            "-t",
            str(script_path),
            "-l",
            str(OUTPUT_FILE),
            "-Jthreads=5",
        ]

    def test_raises_for_missing_script(self, install_dir: Path, tmp_path: Path) -> None:
        """Raises InputError when the test plan does not exist."""
        missing = tmp_path / "missing.jmx"

        with pytest.raises(InputError, match="Unable to find a JMeter test at"):
            build_command(
                str(missing),
                "",
                {},
                OUTPUT_FILE,
                install_dir=install_dir,
                executable_name="jmeter",
            )

    def test_raises_for_missing_executable(
        self, tmp_path: Path, script_path: Path
    ) -> None:
        """Raises ConfigurationError when JMeter is not installed there."""
        with pytest.raises(ConfigurationError, match="Unable to find JMeter at"):
            build_command(
                str(script_path),
                "",
                {},
                OUTPUT_FILE,
                install_dir=tmp_path / "nowhere",
                executable_name="jmeter",
            )

    def test_checks_script_before_executable(self, tmp_path: Path) -> None:
        """A missing script is reported even if JMeter is missing too."""
        with pytest.raises(InputError):
            build_command(
                str(tmp_path / "missing.jmx"),
                "",
                {},
                OUTPUT_FILE,
                install_dir=tmp_path / "nowhere",
                executable_name="jmeter",
            )
