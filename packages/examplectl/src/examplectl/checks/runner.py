from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from ..core.errors import ExampleError
from ..core.logging import log_event
from .model import CheckContext, CheckDef, CheckResult, CheckStatus


def run_check(check: CheckDef, ctx: CheckContext) -> CheckResult:
    log_event(ctx.run, "debug", "checks", "start", check=check.check_id)
    started = time.monotonic()
    try:
        violations = list(check.fn(ctx))
    except ExampleError as exc:
        violations = exc.violations()
    duration_ms = int((time.monotonic() - started) * 1000)
    status = CheckStatus.FAIL if violations else CheckStatus.PASS
    log_event(
        ctx.run,
        "info" if status == CheckStatus.PASS else "error",
        "checks",
        "finish",
        check=check.check_id,
        status=status.value,
        violations=len(violations),
        duration_ms=duration_ms,
    )
    return CheckResult(
        id=check.check_id,
        title=check.title,
        status=status,
        violations=tuple(sorted(violations, key=lambda item: item.canonical_key)),
        excluded=ctx.excluded(check.check_id),
        fix_hint=check.fix_hint,
        metrics={"duration_ms": duration_ms},
    )


def run_checks(checks: Sequence[CheckDef], ctx: CheckContext, *, jobs: int = 1) -> list[CheckResult]:
    if jobs <= 1 or len(checks) <= 1:
        return [run_check(check, ctx) for check in checks]
    with ThreadPoolExecutor(max_workers=min(jobs, len(checks))) as pool:
        return list(pool.map(lambda check: run_check(check, ctx), checks))
