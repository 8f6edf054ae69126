"""Forbidden path scanning.

Two rules apply to every entry below the examples root. General names are
forbidden everywhere. Specific relative-path suffixes are forbidden outside
the allow-listed top-level directories. Matching is component-wise, so
`experimental2/` is not covered by an `experimental` allow-list entry.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from ..config import ForbiddenPathRules
from ..core.errors import DiscoveryError
from ..core.model import Violation
from ..core.scan import walk_tree

RULE_GENERAL = "general"
RULE_SPECIFIC = "specific"


@dataclass(frozen=True)
class PathViolation:
    path: str
    rule: str
    pattern: str

    def to_violation(self) -> Violation:
        if self.rule == RULE_GENERAL:
            message = f"forbidden file found in examples directory: {self.path}"
        else:
            message = f"forbidden file `{self.pattern}` found in non-allowed directory: {self.path}"
        return Violation(
            code="FORBIDDEN_PATH",
            message=message,
            path=self.path,
            values={"rule": self.rule, "pattern": self.pattern},
        )


def _parts(value: str) -> tuple[str, ...]:
    return PurePosixPath(value.strip().strip("/")).parts


def _ends_with(rel: tuple[str, ...], suffix: tuple[str, ...]) -> bool:
    return bool(suffix) and len(suffix) <= len(rel) and rel[-len(suffix):] == suffix


def _starts_with(rel: tuple[str, ...], prefix: tuple[str, ...]) -> bool:
    return bool(prefix) and len(prefix) <= len(rel) and rel[: len(prefix)] == prefix


def classify(rel: PurePosixPath, rules: ForbiddenPathRules) -> list[PathViolation]:
    found: list[PathViolation] = []
    parts = rel.parts
    shown = rel.as_posix()
    for name in rules.general:
        if rel.name == name:
            found.append(PathViolation(path=shown, rule=RULE_GENERAL, pattern=name))
    if any(_starts_with(parts, _parts(allowed)) for allowed in rules.allowed_dirs):
        return found
    for suffix in rules.specific:
        if _ends_with(parts, _parts(suffix)):
            found.append(PathViolation(path=shown, rule=RULE_SPECIFIC, pattern=suffix))
    return found


def scan(root: Path, rules: ForbiddenPathRules, *, skip_dirs: tuple[str, ...] = ()) -> list[PathViolation]:
    violations: list[PathViolation] = []
    for item in walk_tree(Path(os.path.abspath(root)), skip_dirs=skip_dirs):
        if isinstance(item, DiscoveryError):
            raise item
        violations.extend(classify(item.rel, rules))
    return violations
