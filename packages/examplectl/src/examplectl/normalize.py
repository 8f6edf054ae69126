"""Build configuration normalization.

Examples share one build output directory through a relative
`build.target-dir` entry in `.cargo/config.toml`. Rewriting that entry into an
absolute, lexically normalized path makes configs from different project
roots comparable: if they all point at the same directory, their normalized
text is identical. Everything else, comments and layout included, is kept as
written.
"""

from __future__ import annotations

import posixpath
from pathlib import Path, PurePosixPath
from typing import Any, Mapping

import tomlkit

from .config import ExamplesConfig
from .core.documents import first_existing, load_editable, lookup, read_source
from .core.errors import MissingFile, SchemaError
from .discovery import Project


def normalize_path(path: str | PurePosixPath | Path) -> str:
    """Resolve `.`/`..` and duplicate separators without touching the filesystem."""
    raw = Path(path).as_posix()
    normalized = posixpath.normpath(raw)
    # posixpath keeps a leading `//` as-is; collapse it like any other separator run.
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def normalize_document(
    document: Mapping[str, Any],
    project_root: Path,
    *,
    field: tuple[str, ...] = ("build", "target-dir"),
    path: str = "<document>",
    project: str = "",
) -> str:
    value = lookup(document, field, path=path, project=project)
    if not isinstance(value, str):
        raise SchemaError(path, ".".join(field), f"must be a string, got {type(value).__name__}", project=project)
    rewritten = tomlkit.parse(tomlkit.dumps(document))
    parent = lookup(rewritten, field[:-1], path=path, project=project) if len(field) > 1 else rewritten
    parent[field[-1]] = normalize_path(project_root / value)
    return tomlkit.dumps(rewritten)


def normalize_bytes(data: bytes, project_root: Path, *, field: tuple[str, ...] = ("build", "target-dir"), path: str = "<bytes>", project: str = "") -> str:
    document = load_editable(data, path=path, project=project)
    return normalize_document(document, project_root, field=field, path=path, project=project)


def build_config_path(project: Project, config: ExamplesConfig) -> Path:
    found = first_existing(project.root, config.build_config_files)
    if found is None:
        raise MissingFile(config.build_config_files[0], project=project.rel)
    return found


def normalize_config(project: Project, config: ExamplesConfig) -> str:
    target = build_config_path(project, config)
    display = target.relative_to(project.root).as_posix()
    data = read_source(target, project=project.rel, display=display)
    return normalize_bytes(data, project.root, field=config.target_dir_field, path=display, project=project.rel)
