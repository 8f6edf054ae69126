from __future__ import annotations

from pathlib import Path

import pytest

from examplectl.config import ExamplesConfig
from examplectl.core.errors import MissingField, MissingFile, ParseError, SchemaError
from examplectl.discovery import Project
from examplectl.toolchain import read_channel, read_components
from tests.helpers import write_project


def _project(tmp_path: Path, **kwargs: object) -> Project:
    path = write_project(tmp_path / "examples/general/alpha", **kwargs)  # type: ignore[arg-type]
    return Project(root=path, rel="general/alpha")


def test_reads_channel_and_components(tmp_path: Path) -> None:
    project = _project(tmp_path, channel="nightly-2025-01-09", components=("rustc-dev", "llvm-tools-preview"))
    assert read_channel(project, ExamplesConfig()) == "nightly-2025-01-09"
    assert read_components(project, ExamplesConfig()) == frozenset({"rustc-dev", "llvm-tools-preview"})


def test_toml_suffixed_descriptor_is_accepted(tmp_path: Path) -> None:
    project = _project(tmp_path)
    (project.root / "rust-toolchain").rename(project.root / "rust-toolchain.toml")
    assert read_channel(project, ExamplesConfig()) == "nightly-2025-01-09"


def test_legacy_single_line_descriptor(tmp_path: Path) -> None:
    project = _project(tmp_path, toolchain="nightly-2023-11-16\n")
    assert read_channel(project, ExamplesConfig()) == "nightly-2023-11-16"
    assert read_components(project, ExamplesConfig()) == frozenset()


def test_missing_descriptor(tmp_path: Path) -> None:
    project = _project(tmp_path)
    (project.root / "rust-toolchain").unlink()
    with pytest.raises(MissingFile) as excinfo:
        read_channel(project, ExamplesConfig())
    assert excinfo.value.project == "general/alpha"


def test_unparseable_descriptor(tmp_path: Path) -> None:
    project = _project(tmp_path, toolchain='[toolchain\nchannel = "stable"\n')
    with pytest.raises(ParseError):
        read_channel(project, ExamplesConfig())


@pytest.mark.parametrize(
    ("toolchain", "field"),
    [
        ('[other]\nchannel = "stable"\n', "toolchain"),
        ('[toolchain]\nprofile = "minimal"\n', "toolchain.channel"),
    ],
)
def test_missing_schema_fields(tmp_path: Path, toolchain: str, field: str) -> None:
    project = _project(tmp_path, toolchain=toolchain)
    with pytest.raises(MissingField) as excinfo:
        read_channel(project, ExamplesConfig())
    assert excinfo.value.field == field


def test_components_absent_or_malformed(tmp_path: Path) -> None:
    project = _project(tmp_path, toolchain='[toolchain]\nchannel = "stable"\n')
    assert read_channel(project, ExamplesConfig()) == "stable"
    with pytest.raises(MissingField):
        read_components(project, ExamplesConfig())
    (project.root / "rust-toolchain").write_text('[toolchain]\nchannel = "stable"\ncomponents = ["a", 1]\n', encoding="utf-8")
    with pytest.raises(SchemaError) as excinfo:
        read_components(project, ExamplesConfig())
    assert excinfo.value.field == "toolchain.components"


def test_channel_must_be_a_string(tmp_path: Path) -> None:
    project = _project(tmp_path, toolchain="[toolchain]\nchannel = 1\n")
    with pytest.raises(SchemaError):
        read_channel(project, ExamplesConfig())
