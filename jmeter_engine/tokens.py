"""Placeholder substitution for script paths and arguments.

Script references may contain bracketed shortcuts (e.g. ``[MyDocuments]``) so
the same test can run on machines with different folder layouts. Arguments
may additionally reference the identifiers of the run being executed.
"""

import os
import re
import sys
from collections.abc import Mapping
from pathlib import Path

from pydantic import Field

from jmeter_engine.models.base import Model
from jmeter_engine.models.test_run import AutomatedTestRun


def _windows_folder(variable: str, *parts: str) -> str:
    base = os.environ.get(variable, "")
    return str(Path(base, *parts)) if base else ""


def _default_my_documents() -> str:
    if sys.platform == "win32":
        return _windows_folder("USERPROFILE", "Documents")
    return str(Path.home() / "Documents")


def _default_common_documents() -> str:
    if sys.platform == "win32":
        return _windows_folder("PUBLIC", "Documents")
    return "/usr/share"


def _default_desktop() -> str:
    if sys.platform == "win32":
        return _windows_folder("USERPROFILE", "Desktop")
    return str(Path.home() / "Desktop")


def _default_program_files() -> str:
    if sys.platform == "win32":
        return os.environ.get("ProgramFiles", "")
    return "/opt"


def _default_program_files_x86() -> str:
    if sys.platform == "win32":
        return os.environ.get("ProgramFiles(x86)", "")
    return "/opt"


class SpecialFolders(Model):
    """Locations substituted for the special folder tokens."""

    my_documents: str = Field(default_factory=_default_my_documents)
    common_documents: str = Field(default_factory=_default_common_documents)
    desktop_directory: str = Field(default_factory=_default_desktop)
    program_files: str = Field(default_factory=_default_program_files)
    program_files_x86: str = Field(default_factory=_default_program_files_x86)

    def tokens(self) -> Mapping[str, str]:
        """Map each folder token to its location."""
        return {
            "[MyDocuments]": self.my_documents,
            "[CommonDocuments]": self.common_documents,
            "[DesktopDirectory]": self.desktop_directory,
            "[ProgramFiles]": self.program_files,
            "[ProgramFilesX86]": self.program_files_x86,
        }


def run_tokens(test_run: AutomatedTestRun) -> Mapping[str, str]:
    """Map the identifier tokens to the identifiers of a test run.

    Optional identifiers that are not set are left out, so their tokens
    stay unexpanded.
    """
    tokens = {
        "[TestCaseId]": str(test_run.test_case_id),
        "[TestRunId]": str(test_run.test_run_id),
    }
    if test_run.test_set_id is not None:
        tokens["[TestSetId]"] = str(test_run.test_set_id)
    if test_run.release_id is not None:
        tokens["[ReleaseId]"] = str(test_run.release_id)
    return tokens


def replace_tokens(text: str, tokens: Mapping[str, str]) -> str:
    """Replace every token in a single pass.

    Replacement values are never scanned again, so the result does not
    depend on the order of the tokens.
    """
    if not tokens or not text:
        return text
    pattern = re.compile("|".join(re.escape(token) for token in tokens))
    return pattern.sub(lambda match: tokens[match.group(0)], text)


def substitute_path(text: str, folders: SpecialFolders) -> str:
    """Expand special folder tokens in a script path."""
    return replace_tokens(text, folders.tokens())


def substitute_arguments(
    text: str, folders: SpecialFolders, test_run: AutomatedTestRun
) -> str:
    """Expand special folder and identifier tokens in script arguments."""
    return replace_tokens(text, {**folders.tokens(), **run_tokens(test_run)})
