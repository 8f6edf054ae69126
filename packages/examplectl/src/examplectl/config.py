"""Examples tree configuration.

Configuration is read from TOML: an explicit `--config` file, otherwise
`examplectl.toml` or the `[tool.examplectl]` table of `pyproject.toml` in the
examples root. Anything not configured falls back to the defaults below.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

from .contracts.validate import validate
from .core.errors import ScriptError
from .core.exit_codes import ERR_CONFIG

try:
    import tomllib  # py311+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

CONFIG_SCHEMA = "examplectl.config.v1"
STANDALONE_CONFIG = "examplectl.toml"
PYPROJECT = "pyproject.toml"

DEFAULT_EXCLUSIONS: Mapping[str, tuple[str, ...]] = {
    "examples.build": ("testing/marker",),
    "examples.version": ("restriction",),
    "examples.cargo_config": ("straggler",),
    "examples.toolchain_channel": ("marker", "straggler"),
}


@dataclass(frozen=True)
class ForbiddenPathRules:
    general: tuple[str, ...] = (".gitignore",)
    specific: tuple[str, ...] = (".cargo/config.toml", "rust-toolchain")
    allowed_dirs: tuple[str, ...] = ("experimental", "testing")


@dataclass(frozen=True)
class ExamplesConfig:
    manifest_name: str = "Cargo.toml"
    toolchain_files: tuple[str, ...] = ("rust-toolchain", "rust-toolchain.toml")
    build_config_files: tuple[str, ...] = (".cargo/config.toml", ".cargo/config")
    target_dir_field: tuple[str, ...] = ("build", "target-dir")
    restricted_categories: tuple[str, ...] = ("experimental", "general", "restriction", "supplementary", "testing")
    skip_dirs: tuple[str, ...] = (".git", "target")
    scan_skip_dirs: tuple[str, ...] = ()
    forbidden_components: tuple[str, ...] = ("rust-src",)
    expected_version: str | None = None
    build_command: tuple[str, ...] = ("cargo", "test", "--lib", "--tests")
    build_timeout_seconds: int = 0
    forbidden_paths: ForbiddenPathRules = field(default_factory=ForbiddenPathRules)
    exclude: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: dict(DEFAULT_EXCLUSIONS))
    source: str = "<defaults>"

    def excluded(self, check_id: str) -> tuple[str, ...]:
        return tuple(self.exclude.get(check_id, ()))


def _tuple(value: Any) -> tuple[str, ...]:
    return tuple(str(item).strip() for item in value if str(item).strip())


def config_from_mapping(raw: Mapping[str, Any], *, source: str = "<mapping>") -> ExamplesConfig:
    try:
        validate(CONFIG_SCHEMA, dict(raw))
    except ScriptError as exc:
        raise ScriptError(f"invalid examplectl config in {source}: {exc}", ERR_CONFIG, kind="invalid_config") from exc
    base = ExamplesConfig()
    updates: dict[str, Any] = {"source": source}
    scalar_names = {f.name for f in fields(ExamplesConfig)} - {"forbidden_paths", "exclude", "source"}
    for key, value in raw.items():
        if key not in scalar_names:
            continue
        if isinstance(value, list):
            updates[key] = _tuple(value)
        elif key == "target_dir_field" and isinstance(value, str):
            updates[key] = tuple(part for part in value.split(".") if part)
        else:
            updates[key] = value
    rules = raw.get("forbidden_paths")
    if isinstance(rules, dict):
        updates["forbidden_paths"] = ForbiddenPathRules(
            general=_tuple(rules.get("general", base.forbidden_paths.general)),
            specific=_tuple(rules.get("specific", base.forbidden_paths.specific)),
            allowed_dirs=_tuple(rules.get("allowed_dirs", base.forbidden_paths.allowed_dirs)),
        )
    exclude = raw.get("exclude")
    if isinstance(exclude, dict):
        merged = dict(base.exclude)
        merged.update({str(check_id): _tuple(items) for check_id, items in exclude.items()})
        updates["exclude"] = merged
    return replace(base, **updates)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ScriptError(f"cannot read config {path}: {exc}", ERR_CONFIG, kind="invalid_config") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ScriptError(f"invalid TOML in config {path}: {exc}", ERR_CONFIG, kind="invalid_config") from exc


def _tool_table(payload: dict[str, Any], path: Path) -> dict[str, Any] | None:
    tool = payload.get("tool", {})
    if not isinstance(tool, dict):
        raise ScriptError(f"invalid [tool] table in {path}", ERR_CONFIG, kind="invalid_config")
    table = tool.get("examplectl")
    if table is None:
        return None
    if not isinstance(table, dict):
        raise ScriptError(f"invalid [tool.examplectl] table in {path}", ERR_CONFIG, kind="invalid_config")
    return table


def load_config(root: Path, explicit: Path | None = None) -> ExamplesConfig:
    if explicit is not None:
        if not explicit.is_file():
            raise ScriptError(f"config file not found: {explicit}", ERR_CONFIG, kind="invalid_config")
        payload = _read_toml(explicit)
        if explicit.name == PYPROJECT:
            payload = _tool_table(payload, explicit) or {}
        return config_from_mapping(payload, source=str(explicit))
    standalone = root / STANDALONE_CONFIG
    if standalone.is_file():
        return config_from_mapping(_read_toml(standalone), source=str(standalone))
    pyproject = root / PYPROJECT
    if pyproject.is_file():
        table = _tool_table(_read_toml(pyproject), pyproject)
        if table is not None:
            return config_from_mapping(table, source=f"{pyproject} [tool.examplectl]")
    return ExamplesConfig()
