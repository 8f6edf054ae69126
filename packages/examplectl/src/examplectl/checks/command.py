from __future__ import annotations

import argparse

from ..build import CommandBuildRunner
from ..cli.output import emit_payload
from ..core.context import RunContext
from ..core.exit_codes import ERR_CHECK_FAILED, OK
from .model import CheckContext
from .registry import list_checks, select_checks, validate_exclusions
from .report import build_report_payload, render_text
from .runner import run_checks


def check_context(ctx: RunContext) -> CheckContext:
    runner = CommandBuildRunner(
        command=ctx.config.build_command,
        timeout_seconds=ctx.config.build_timeout_seconds,
        ctx=ctx,
    )
    return CheckContext(root=ctx.root, config=ctx.config, build_runner=runner, run=ctx)


def run_check_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    validate_exclusions(ctx.config)
    checks = select_checks(ns.checks, include_slow=ns.include_slow)
    results = run_checks(checks, check_context(ctx), jobs=ns.jobs)
    if ctx.output_format == "json":
        payload = build_report_payload(results, run_id=ctx.run_id, root=ctx.root, config_source=ctx.config.source)
        emit_payload(payload, as_json=True)
    else:
        print(render_text(results))
    return OK if all(row.passed for row in results) else ERR_CHECK_FAILED


def run_list_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    validate_exclusions(ctx.config)
    rows = [
        {
            "id": check.check_id,
            "title": check.title,
            "slow": check.slow,
            "mode": "recursive" if check.recursive else "restricted",
            "excluded": list(ctx.config.excluded(check.check_id)),
        }
        for check in list_checks()
    ]
    if ctx.output_format == "json":
        emit_payload({"schema_version": 1, "tool": "examplectl", "kind": "check-list", "checks": rows}, as_json=True)
        return OK
    for row in rows:
        flags = " (slow)" if row["slow"] else ""
        excluded = ", ".join(row["excluded"]) or "-"
        print(f"{row['id']}{flags}: {row['title']} [mode={row['mode']} excluded={excluded}]")
    return OK
