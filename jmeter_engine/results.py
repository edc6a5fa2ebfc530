"""Parse JMeter XML result logs into a test run verdict."""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException, ElementTree
from defusedxml.ElementTree import ParseError

from jmeter_engine.errors import MissingOutputError, UnparseableOutputError
from jmeter_engine.models.result import AssertionResult, ParsedResults
from jmeter_engine.models.test_run import ExecutionStatus

log = logging.getLogger(__name__)

ASSERTION_RESULT_TAG = "assertionResult"
LABEL_ATTRIBUTE = "lb"


def parse_result_log(path: Path) -> ParsedResults:
    """Read a JMeter result log and aggregate its assertion results.

    Args:
        path: Result log written by ``jmeter -l``

    Returns:
        Verdict, summary and per-assertion detail

    Raises:
        MissingOutputError: If the log does not exist
        UnparseableOutputError: If the log is not well-formed XML

    """
    if not path.is_file():
        raise MissingOutputError(f"Unable to find an output log for JMeter at {path}")

    try:
        root = ElementTree.parse(path).getroot()
    except (ParseError, DefusedXmlException) as e:
        raise UnparseableOutputError(path, _read_raw(path)) from e

    return summarize(parse_assertion_results(root))


def parse_assertion_results(root: Element) -> Sequence[AssertionResult]:
    """Collect every assertion result in the document, in document order."""
    parents: Mapping[Element, Element] = {
        child: parent for parent in root.iter() for child in parent
    }

    results: list[AssertionResult] = []
    for node in root.iter(ASSERTION_RESULT_TAG):
        parent = parents.get(node)
        label = parent.get(LABEL_ATTRIBUTE, "") if parent is not None else ""
        results.append(
            AssertionResult(
                name=_assertion_name(node, label),
                failure=_child_text(node, "failure", "false"),
                error=_child_text(node, "error", "false"),
                failure_message=_child_text(node, "failureMessage", ""),
            )
        )
    return results


def summarize(assertions: Sequence[AssertionResult]) -> ParsedResults:
    """Aggregate assertion results into a single verdict.

    No assertions means the run is not applicable. Otherwise the run passes
    unless at least one assertion failed or errored.
    """
    if not assertions:
        return ParsedResults(status="NotApplicable")

    status: ExecutionStatus = "Passed"
    failure_count = 0
    error_count = 0
    lines: list[str] = []

    for assertion in assertions:
        if assertion.failed:
            failure_count += 1
            status = "Failed"
        if assertion.errored:
            error_count += 1
            status = "Failed"
        lines.append(assertion.describe() + "\n")

    log.debug(
        "Parsed %d assertion(s): %d failure(s), %d error(s)",
        len(assertions),
        failure_count,
        error_count,
    )
    return ParsedResults(
        status=status,
        summary=f"Ran with {failure_count} failures and {error_count} errors",
        detail="".join(lines),
        assertions=tuple(assertions),
        failure_count=failure_count,
        error_count=error_count,
    )


def _read_raw(path: Path) -> str:
    # latin-1 maps every byte, so non-UTF-8 logs keep their exact content
    data = path.read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def _assertion_name(node: Element, label: str) -> str:
    name_node = node.find("name")
    if name_node is None:
        return label
    name = "".join(name_node.itertext())
    return f"{name} ({label})" if label else name


def _child_text(node: Element, tag: str, default: str) -> str:
    child = node.find(tag)
    if child is None:
        return default
    return "".join(child.itertext())
