"""Per-project build/test runner.

Running a project's test suite is delegated to an external command. When the
checks themselves run under cargo, variables inherited from the outer
invocation would leak into the nested build, so they are stripped first.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Protocol

from .core.process import run_command
from .discovery import Project

if TYPE_CHECKING:
    from .core.context import RunContext

_SANITIZED_PREFIXES = ("CARGO", "RUSTC")
_SANITIZED_NAMES = frozenset({"RUSTUP_TOOLCHAIN", "RUSTFLAGS", "RUSTDOCFLAGS"})
_KEPT_NAMES = frozenset({"CARGO_HOME"})


@dataclass(frozen=True)
class BuildOutcome:
    ok: bool
    code: int
    output: str = ""


class BuildRunner(Protocol):
    def run(self, project: Project) -> BuildOutcome: ...


def sanitize_environment(env: Mapping[str, str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for key, value in env.items():
        if key in _KEPT_NAMES:
            out[key] = value
            continue
        if key in _SANITIZED_NAMES or key.startswith(_SANITIZED_PREFIXES):
            continue
        out[key] = value
    return out


@dataclass(frozen=True)
class CommandBuildRunner:
    command: tuple[str, ...]
    timeout_seconds: int = 0
    ctx: RunContext | None = None

    def run(self, project: Project) -> BuildOutcome:
        result = run_command(
            list(self.command),
            cwd=project.root,
            timeout_seconds=self.timeout_seconds,
            env=sanitize_environment(os.environ),
            ctx=self.ctx,
        )
        return BuildOutcome(ok=result.code == 0, code=result.code, output=result.combined_output)
