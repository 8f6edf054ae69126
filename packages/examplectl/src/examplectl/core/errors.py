"""Error types.

`ScriptError` is the user-facing CLI failure carrying an exit code. The
`ExampleError` family describes what is wrong with the examples tree; the check
runner turns each of them into violations so one broken check never hides the
results of the others.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass

from .model import Violation


@dataclass
class ScriptError(Exception):
    message: str
    code: int
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


class ExampleError(Exception):
    code = "EXAMPLE_ERROR"
    hint = ""

    def __init__(self, message: str, *, project: str = "", path: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.project = project
        self.path = path

    def values(self) -> dict[str, str]:
        return {}

    def violations(self) -> list[Violation]:
        return [
            Violation(
                code=self.code,
                message=self.message,
                hint=self.hint,
                path=self.path,
                project=self.project,
                values=self.values(),
            )
        ]


class DiscoveryError(ExampleError):
    code = "DISCOVERY_ERROR"
    hint = "Make every directory under the examples root readable."

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot read directory {path}: {reason}", path=path)
        self.reason = reason


class MissingFile(ExampleError):
    code = "MISSING_FILE"

    def __init__(self, path: str, *, project: str = "") -> None:
        super().__init__(f"{project or 'project'}: missing required file {path}", project=project, path=path)


class ParseError(ExampleError):
    code = "PARSE_ERROR"
    hint = "Fix the TOML syntax of the reported file."

    def __init__(self, path: str, reason: str, *, project: str = "") -> None:
        super().__init__(f"{project or 'project'}: cannot parse {path}: {reason}", project=project, path=path)
        self.reason = reason


class SchemaError(ExampleError):
    code = "SCHEMA_ERROR"

    def __init__(self, path: str, field: str, reason: str, *, project: str = "") -> None:
        super().__init__(f"{project or 'project'}: {path}: `{field}` {reason}", project=project, path=path)
        self.field = field
        self.reason = reason

    def values(self) -> dict[str, str]:
        return {"field": self.field}


class MissingField(SchemaError):
    code = "MISSING_FIELD"

    def __init__(self, path: str, field: str, *, project: str = "") -> None:
        super().__init__(path, field, "is missing", project=project)


class ConsistencyError(ExampleError):
    code = "CONSISTENCY_ERROR"

    def __init__(
        self,
        check: str,
        *,
        baseline_project: str,
        baseline_value: str,
        project: str,
        value: str,
    ) -> None:
        message = f"{check}: `{project}` has {_short(value)} but `{baseline_project}` has {_short(baseline_value)}"
        if "\n" in value or "\n" in baseline_value:
            diff = difflib.unified_diff(
                baseline_value.splitlines(),
                value.splitlines(),
                fromfile=baseline_project,
                tofile=project,
                lineterm="",
            )
            message = f"{check}: `{project}` differs from `{baseline_project}`\n" + "\n".join(diff)
        super().__init__(message, project=project)
        self.check = check
        self.baseline_project = baseline_project
        self.baseline_value = baseline_value
        self.value = value

    def values(self) -> dict[str, str]:
        return {
            "baseline_project": self.baseline_project,
            "baseline": self.baseline_value,
            "project": self.project,
            "value": self.value,
        }


class ForbiddenComponentPresent(ExampleError):
    code = "FORBIDDEN_COMPONENT"

    def __init__(self, component: str, *, project: str, path: str = "") -> None:
        super().__init__(f"{project}: toolchain requests forbidden component `{component}`", project=project, path=path)
        self.component = component

    def values(self) -> dict[str, str]:
        return {"component": self.component}


def _short(value: str, limit: int = 80) -> str:
    text = repr(value)
    return text if len(text) <= limit else text[: limit - 3] + "..."
