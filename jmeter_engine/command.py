"""Command line construction for non-GUI JMeter runs."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from jmeter_engine.errors import ConfigurationError, InputError
from jmeter_engine.models.test_run import TestRunParameter

log = logging.getLogger(__name__)

SCRIPT_REFERENCE_DELIMITER = "|"
QUOTE = '"'


@dataclass(frozen=True, kw_only=True)
class Command:
    """Fully resolved JMeter invocation."""

    executable: Path
    arguments: str
    working_directory: Path

    @property
    def command_line(self) -> str:
        """Executable and arguments as a single line, for logging."""
        return f'"{self.executable}" {self.arguments}'

    @property
    def argv(self) -> list[str]:
        """Executable followed by the split argument string."""
        return [str(self.executable), *split_arguments(self.arguments)]


def split_arguments(arguments: str) -> list[str]:
    """Split an argument string the way JMeter's launcher receives it.

    Whitespace separates arguments unless quoted. A quote opens a quoted
    section; inside it, a doubled quote is a literal quote and also closes
    the section, while a single quote just closes it. Nothing else is
    special, so ``$``, backticks and backslashes are kept as they are.

    This makes a value escaped as ``"c\"\"\"d"`` arrive as ``c"d``.

    Args:
        arguments: Argument string as built by ``build_arguments``

    Returns:
        Individual arguments, without their quoting.

    """
    result: list[str] = []
    current: list[str] = []
    in_argument = False
    quoted = False
    index = 0
    while index < len(arguments):
        char = arguments[index]
        if char == QUOTE:
            in_argument = True
            if not quoted:
                quoted = True
            elif arguments[index + 1 : index + 2] == QUOTE:
                current.append(QUOTE)
                quoted = False
                index += 1
            else:
                quoted = False
        elif char.isspace() and not quoted:
            if in_argument:
                result.append("".join(current))
                current = []
                in_argument = False
        else:
            current.append(char)
            in_argument = True
        index += 1

    if in_argument:
        result.append("".join(current))
    return result


def split_script_reference(reference: str) -> tuple[str, str]:
    """Split a script reference into its path and extra arguments.

    Args:
        reference: Script path, optionally followed by ``|`` and arguments
            (e.g. ``"C:\\tests\\login.jmx|-Jusers=5"``)

    Returns:
        Tuple of (path, arguments), arguments being empty when absent.

    """
    elements = reference.split(SCRIPT_REFERENCE_DELIMITER)
    arguments = elements[1] if len(elements) > 1 else ""
    return elements[0], arguments


def normalize_parameters(
    parameters: Sequence[TestRunParameter] | None, *, trace: bool = False
) -> Mapping[str, str]:
    """Lower-case parameter names, keeping the first value seen for each name."""
    normalized: dict[str, str] = {}
    if parameters is None:
        if trace:
            log.info("Test run has no parameters")
        return normalized

    if trace:
        log.info("Test run has parameters")

    for parameter in parameters:
        name = parameter.name.lower()
        if name in normalized:
            continue
        if trace:
            log.info("Adding test run parameter %s = %s", name, parameter.value)
        normalized[name] = parameter.value
    return normalized


def format_parameter(name: str, value: str) -> str:
    """Format a parameter as a JMeter property flag.

    Quotes are doubled in names but tripled in values, matching what
    existing test scripts were written against.
    """
    escaped_name = name.replace('"', '""')
    escaped_value = value.replace('"', '"""')
    return f'-J{escaped_name}="{escaped_value}"'


def build_arguments(
    script_path: str,
    extra_arguments: str,
    parameters: Mapping[str, str],
    output_file: Path,
) -> str:
    """Build the JMeter argument string.

    The layout is ``-n -t "<script>" -l "<output>" <extra> -J<name>="<value>"...``.
    """
    parts = ["-n", f'-t "{script_path}"', f'-l "{output_file}"']
    if extra_arguments.strip():
        parts.append(extra_arguments.strip())
    parts.extend(format_parameter(name, value) for name, value in parameters.items())
    return " ".join(parts)


def build_command(
    script_path: str,
    extra_arguments: str,
    parameters: Mapping[str, str],
    output_file: Path,
    *,
    install_dir: Path,
    executable_name: str,
) -> Command:
    """Resolve the JMeter executable and build the full invocation.

    Raises:
        InputError: If the script does not exist
        ConfigurationError: If JMeter is not found in the install directory

    """
    if not Path(script_path).is_file():
        raise InputError(f"Unable to find a JMeter test at {script_path}")

    executable = install_dir / executable_name
    if not executable.is_file():
        raise ConfigurationError(f"Unable to find JMeter at {executable}")

    return Command(
        executable=executable,
        arguments=build_arguments(
            script_path, extra_arguments, parameters, output_file
        ),
        working_directory=install_dir,
    )
