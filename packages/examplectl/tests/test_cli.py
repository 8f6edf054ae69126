from __future__ import annotations

import json
from pathlib import Path

import pytest
import tomlkit

from examplectl.cli import main
from examplectl.core.exit_codes import ERR_CHECK_FAILED, ERR_CONFIG, ERR_USER
from tests.helpers import run_examplectl, write_project

pytestmark = pytest.mark.integration


def _allowed_tree(tmp_path: Path) -> Path:
    root = tmp_path / "examples"
    for rel in ("experimental/alpha", "testing/beta", "testing/nested/gamma"):
        write_project(root / rel)
    return root


def test_check_json_report_on_consistent_tree(tmp_path: Path) -> None:
    root = _allowed_tree(tmp_path)
    proc = run_examplectl("--root", str(root), "--quiet", "--json", "check")
    assert proc.returncode == 0, proc.stderr
    payload = json.loads(proc.stdout)
    assert payload["schema_name"] == "examplectl.check-run.v1"
    assert payload["status"] == "pass"
    assert payload["run_id"] == "pytest-run"
    assert payload["summary"] == {"total": 5, "passed": 5, "failed": 0}
    assert [row["id"] for row in payload["rows"]] == [
        "examples.version",
        "examples.cargo_config",
        "examples.toolchain_channel",
        "examples.toolchain_components",
        "examples.forbidden_paths",
    ]


def test_check_text_report_names_drift(tmp_path: Path) -> None:
    root = _allowed_tree(tmp_path)
    write_project(root / "testing/beta", version="4.0.1")
    proc = run_examplectl("--root", str(root), "--quiet", "check", "version")
    assert proc.returncode == ERR_CHECK_FAILED
    assert "FAIL examples.version" in proc.stdout
    assert "`testing/beta` has '4.0.1' but `experimental/alpha` has '4.0.0'" in proc.stdout
    assert "0/1 checks passed" in proc.stdout


def test_failures_in_one_check_do_not_hide_others(tmp_path: Path) -> None:
    root = _allowed_tree(tmp_path)
    (root / "testing/beta/.gitignore").write_text("target\n", encoding="utf-8")
    (root / "testing/nested/gamma/rust-toolchain").write_text("[toolchain\n", encoding="utf-8")
    proc = run_examplectl("--root", str(root), "--quiet", "--format", "json", "check")
    assert proc.returncode == ERR_CHECK_FAILED
    rows = {row["id"]: row for row in json.loads(proc.stdout)["rows"]}
    assert rows["examples.forbidden_paths"]["violations"][0]["path"] == "testing/beta/.gitignore"
    assert rows["examples.toolchain_channel"]["violations"][0]["code"] == "PARSE_ERROR"
    assert rows["examples.version"]["status"] == "pass"


def test_log_events_go_to_stderr(tmp_path: Path) -> None:
    root = _allowed_tree(tmp_path)
    proc = run_examplectl("--root", str(root), "--verbose", "--log-json", "check", "toolchain_channel")
    assert proc.returncode == 0, proc.stderr
    events = [json.loads(line) for line in proc.stderr.splitlines() if line.strip()]
    assert {"cli", "checks", "examples.toolchain_channel"} <= {event["component"] for event in events}
    assert all(event["run_id"] == "pytest-run" for event in events)


def test_projects_and_normalize_commands(tmp_path: Path) -> None:
    root = _allowed_tree(tmp_path)
    proc = run_examplectl("--root", str(root), "--quiet", "--json", "projects", "--recursive")
    assert proc.returncode == 0, proc.stderr
    assert json.loads(proc.stdout)["projects"] == ["experimental/alpha", "testing/beta", "testing/nested/gamma"]
    proc = run_examplectl("--root", str(root), "--quiet", "projects")
    assert proc.stdout.split() == ["experimental/alpha", "testing/beta"]
    proc = run_examplectl("--root", str(root), "--quiet", "normalize", "gamma")
    assert proc.returncode == 0, proc.stderr
    assert tomlkit.parse(proc.stdout)["build"]["target-dir"] == (tmp_path / "target").as_posix()


def test_list_command_shows_exclusions(tmp_path: Path) -> None:
    proc = run_examplectl("--root", str(tmp_path), "--json", "list")
    assert proc.returncode == 0, proc.stderr
    rows = {row["id"]: row for row in json.loads(proc.stdout)["checks"]}
    assert rows["examples.build"]["slow"] is True
    assert rows["examples.toolchain_channel"]["excluded"] == ["marker", "straggler"]


def test_in_process_errors_map_to_exit_codes(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--root", str(tmp_path / "absent"), "check"]) == ERR_USER
    assert "not a directory" in capsys.readouterr().err
    (tmp_path / "examplectl.toml").write_text('[exclude]\n"examples.nope" = ["x"]\n', encoding="utf-8")
    assert main(["--root", str(tmp_path), "--json", "check"]) == ERR_CONFIG
    error = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert error["errors"][0]["kind"] == "invalid_config"
    assert main(["--root", str(tmp_path), "--quiet", "normalize", "nothing"]) == ERR_USER


def test_malformed_pyproject_tool_entry_exits_with_config_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "pyproject.toml").write_text('tool = "x"\n', encoding="utf-8")
    assert main(["--root", str(tmp_path), "--json", "list"]) == ERR_CONFIG
    error = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert error["errors"][0]["kind"] == "invalid_config"
