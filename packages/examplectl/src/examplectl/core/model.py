from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class Violation:
    code: str
    message: str
    hint: str = ""
    path: str = ""
    project: str = ""
    values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", str(self.code).strip() or "CHECK_GENERIC")
        object.__setattr__(self, "message", str(self.message).strip())
        object.__setattr__(self, "hint", str(self.hint).strip())
        object.__setattr__(self, "path", str(self.path).strip())
        object.__setattr__(self, "project", str(self.project).strip())

    @property
    def canonical_key(self) -> tuple[str, str, str, str]:
        return (self.project, self.path, self.code, self.message)

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code,
            "message": self.message,
            "hint": self.hint,
            "path": self.path,
            "project": self.project,
            "values": dict(self.values),
        }
