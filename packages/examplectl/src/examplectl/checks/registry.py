from __future__ import annotations

from fnmatch import fnmatch
from typing import Iterable

from ..config import ExamplesConfig
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_CONFIG, ERR_USER
from .examples import (
    BUILD,
    CARGO_CONFIG,
    FORBIDDEN_PATHS,
    TOOLCHAIN_CHANNEL,
    TOOLCHAIN_COMPONENTS,
    VERSION,
    check_build,
    check_equivalent_cargo_configs,
    check_forbidden_paths,
    check_same_toolchain_channel,
    check_same_version,
    check_toolchain_components,
)
from .model import CheckDef

CHECKS: tuple[CheckDef, ...] = (
    CheckDef(BUILD, "build and test every example project", check_build, fix_hint="Fix the failing example or exclude it from examples.build.", slow=True, recursive=False),
    CheckDef(VERSION, "examples declare the same package version", check_same_version, fix_hint="Bump the reported example to the shared version.", recursive=False),
    CheckDef(CARGO_CONFIG, "examples have equivalent .cargo/config.toml files", check_equivalent_cargo_configs, fix_hint="Copy the build configuration from the baseline example and keep target-dir pointing at the shared directory."),
    CheckDef(TOOLCHAIN_CHANNEL, "examples use the same toolchain channel", check_same_toolchain_channel, fix_hint="Pin the reported example to the baseline toolchain channel."),
    CheckDef(TOOLCHAIN_COMPONENTS, "examples do not request forbidden toolchain components", check_toolchain_components, fix_hint="Drop the component from the example's rust-toolchain file."),
    CheckDef(FORBIDDEN_PATHS, "examples tree contains no forbidden paths", check_forbidden_paths, fix_hint="Delete the file or move the example under an allow-listed directory."),
)


def list_checks() -> tuple[CheckDef, ...]:
    return CHECKS


def check_ids() -> tuple[str, ...]:
    return tuple(check.check_id for check in CHECKS)


def get_check(check_id: str) -> CheckDef:
    for check in CHECKS:
        if check.check_id == check_id:
            return check
    raise ScriptError(f"unknown check `{check_id}`", ERR_USER, kind="unknown_check")


def select_checks(patterns: Iterable[str] = (), *, include_slow: bool = False) -> list[CheckDef]:
    wanted = [str(item).strip() for item in patterns if str(item).strip()]
    if not wanted:
        return [check for check in CHECKS if include_slow or not check.slow]
    selected: list[CheckDef] = []
    for pattern in wanted:
        matches = [
            check
            for check in CHECKS
            if fnmatch(check.check_id, pattern) or fnmatch(check.check_id, f"examples.{pattern}")
        ]
        if not matches:
            raise ScriptError(f"no check matches `{pattern}`", ERR_USER, kind="unknown_check")
        for check in matches:
            if check not in selected:
                selected.append(check)
    return sorted(selected, key=lambda check: check.check_id)


def validate_exclusions(config: ExamplesConfig) -> None:
    known = set(check_ids())
    unknown = sorted(key for key in config.exclude if key not in known)
    if unknown:
        raise ScriptError(
            f"exclusions in {config.source} reference unknown checks: {', '.join(unknown)}",
            ERR_CONFIG,
            kind="invalid_config",
        )
