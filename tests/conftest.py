"""Shared fixtures for engine tests."""

from pathlib import Path

import pytest

from jmeter_engine.engines.jmeter.config import JMeterConfig
from jmeter_engine.tokens import SpecialFolders


@pytest.fixture
def special_folders(tmp_path: Path) -> SpecialFolders:
    """Special folders rooted in the test directory."""
    return SpecialFolders(
        my_documents=str(tmp_path / "Documents"),
        common_documents=str(tmp_path / "Public"),
        desktop_directory=str(tmp_path / "Desktop"),
        program_files=str(tmp_path / "Program Files"),
        program_files_x86=str(tmp_path / "Program Files (x86)"),
    )


@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    """JMeter bin folder containing a placeholder launcher."""
    bin_dir = tmp_path / "jmeter" / "bin"
    bin_dir.mkdir(parents=True)
    (bin_dir / "jmeter").write_text("#!/bin/sh\n")
    return bin_dir


@pytest.fixture
def script_path(special_folders: SpecialFolders) -> Path:
    """Test plan stored in the documents folder."""
    documents = Path(special_folders.my_documents)
    documents.mkdir(parents=True, exist_ok=True)
    script = documents / "login.jmx"
    script.write_text("<jmeterTestPlan/>")
    return script


@pytest.fixture
def config(
    tmp_path: Path, install_dir: Path, special_folders: SpecialFolders
) -> JMeterConfig:
    """Engine configuration pointing at the test directory."""
    return JMeterConfig(
        location=install_dir,
        executable_name="jmeter",
        output_dir=tmp_path / "RemoteLaunch",
        special_folders=special_folders,
    )
