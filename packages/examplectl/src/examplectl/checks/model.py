from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Mapping

from ..build import BuildRunner
from ..config import ExamplesConfig
from ..core.model import Violation

if TYPE_CHECKING:
    from ..core.context import RunContext


class CheckStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"


@dataclass(frozen=True)
class CheckContext:
    root: Path
    config: ExamplesConfig
    build_runner: BuildRunner | None = None
    run: RunContext | None = None

    def excluded(self, check_id: str) -> tuple[str, ...]:
        return self.config.excluded(check_id)


CheckFunc = Callable[[CheckContext], list[Violation]]


@dataclass(frozen=True)
class CheckDef:
    check_id: str
    description: str
    fn: CheckFunc
    fix_hint: str = "Review check output and apply the documented fix."
    slow: bool = False
    recursive: bool = True

    @property
    def id(self) -> str:
        return self.check_id

    @property
    def title(self) -> str:
        return self.description


@dataclass(frozen=True)
class CheckResult:
    id: str
    title: str
    status: CheckStatus
    violations: tuple[Violation, ...] = ()
    excluded: tuple[str, ...] = ()
    fix_hint: str = ""
    metrics: Mapping[str, object] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.status == CheckStatus.PASS


__all__ = [
    "CheckContext",
    "CheckDef",
    "CheckFunc",
    "CheckResult",
    "CheckStatus",
    "Violation",
]
