from __future__ import annotations

from .consistency import Baseline, check_all_equal
from .model import CheckContext, CheckDef, CheckResult, CheckStatus
from .registry import get_check, list_checks, select_checks
from .runner import run_check, run_checks

__all__ = [
    "Baseline",
    "CheckContext",
    "CheckDef",
    "CheckResult",
    "CheckStatus",
    "check_all_equal",
    "get_check",
    "list_checks",
    "run_check",
    "run_checks",
    "select_checks",
]
