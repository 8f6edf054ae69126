from __future__ import annotations

from pathlib import Path

import pytest

from examplectl.checks.model import CheckResult, CheckStatus
from examplectl.checks.report import build_report_payload, render_text
from examplectl.core.errors import ScriptError
from examplectl.core.model import Violation


def _results() -> list[CheckResult]:
    return [
        CheckResult(id="examples.version", title="same version", status=CheckStatus.PASS, metrics={"duration_ms": 3}),
        CheckResult(
            id="examples.forbidden_paths",
            title="no forbidden paths",
            status=CheckStatus.FAIL,
            violations=(Violation(code="FORBIDDEN_PATH", message="forbidden file found: a/.gitignore", path="a/.gitignore"),),
            fix_hint="Delete the file.",
        ),
    ]


def test_report_payload_is_schema_valid() -> None:
    payload = build_report_payload(_results(), run_id="r1", root=Path("/examples"), config_source="<defaults>")
    assert payload["status"] == "fail"
    assert payload["summary"] == {"total": 2, "passed": 1, "failed": 1}
    assert payload["rows"][1]["violations"][0]["path"] == "a/.gitignore"
    assert set(payload["rows"][1]["violations"][0]) == {"code", "message", "hint", "path", "project", "values"}


def test_report_payload_rejects_malformed_codes() -> None:
    bad = [CheckResult(id="examples.version", title="t", status=CheckStatus.FAIL, violations=(Violation(code="lower", message="m"),))]
    with pytest.raises(ScriptError):
        build_report_payload(bad, run_id="r1", root=Path("/examples"))


def test_text_rendering() -> None:
    text = render_text(_results())
    assert "PASS examples.version (3ms)" in text
    assert "  - [FORBIDDEN_PATH] forbidden file found: a/.gitignore" in text
    assert "  hint: Delete the file." in text
    assert text.endswith("1/2 checks passed")
