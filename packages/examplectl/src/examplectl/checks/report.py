from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from ..contracts.validate import validate_self
from .model import CheckResult, CheckStatus

CHECK_RUN = "examplectl.check-run.v1"


def overall_status(results: Sequence[CheckResult]) -> str:
    return CheckStatus.FAIL.value if any(not row.passed for row in results) else CheckStatus.PASS.value


def build_report_payload(results: Sequence[CheckResult], *, run_id: str, root: Path, config_source: str = "") -> dict[str, Any]:
    rows: list[dict[str, Any]] = []
    for result in results:
        rows.append(
            {
                "id": result.id,
                "title": result.title,
                "status": result.status.value,
                "duration_ms": int(result.metrics.get("duration_ms", 0)),
                "excluded": list(result.excluded),
                "hint": result.fix_hint,
                "violations": [item.to_dict() for item in result.violations],
            }
        )
    failed = sum(1 for row in results if not row.passed)
    payload: dict[str, Any] = {
        "schema_name": CHECK_RUN,
        "schema_version": 1,
        "tool": "examplectl",
        "kind": "check-run",
        "run_id": run_id,
        "root": str(root),
        "config_source": config_source,
        "status": overall_status(results),
        "summary": {"total": len(results), "passed": len(results) - failed, "failed": failed},
        "rows": rows,
    }
    return validate_self(CHECK_RUN, payload)


def render_text(results: Sequence[CheckResult]) -> str:
    lines: list[str] = []
    for result in results:
        lines.append(f"{result.status.value.upper():<4} {result.id} ({int(result.metrics.get('duration_ms', 0))}ms)")
        for item in result.violations:
            head, *rest = item.message.splitlines() or [""]
            lines.append(f"  - [{item.code}] {head}")
            lines.extend(f"    {line}" for line in rest)
        if result.violations and result.fix_hint:
            lines.append(f"  hint: {result.fix_hint}")
    failed = sum(1 for row in results if not row.passed)
    lines.append(f"{len(results) - failed}/{len(results)} checks passed")
    return "\n".join(lines)
