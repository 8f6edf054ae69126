"""Structured document loading shared by the manifest, toolchain and config readers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterable

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.toml_document import TOMLDocument

from .errors import MissingField, MissingFile, ParseError, SchemaError

try:
    import tomllib  # py311+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore


def load_document(data: bytes, *, path: str = "<bytes>", project: str = "") -> dict[str, Any]:
    text = _decode(data, path=path, project=project)
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ParseError(path, str(exc), project=project) from exc


def _decode(data: bytes, *, path: str, project: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"not valid UTF-8: {exc}", project=project) from exc


def load_editable(data: bytes, *, path: str = "<bytes>", project: str = "") -> TOMLDocument:
    """Parse TOML keeping comments, ordering and whitespace for round-tripping."""
    text = _decode(data, path=path, project=project)
    try:
        return tomlkit.parse(text)
    except TOMLKitError as exc:
        raise ParseError(path, str(exc), project=project) from exc


def read_source(path: Path, *, project: str = "", display: str | None = None) -> bytes:
    shown = display or str(path)
    try:
        return path.read_bytes()
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
        raise MissingFile(shown, project=project) from exc
    except OSError as exc:
        raise ParseError(shown, f"unreadable: {exc.strerror or exc}", project=project) from exc


def read_document(path: Path, *, project: str = "", display: str | None = None) -> dict[str, Any]:
    shown = display or str(path)
    return load_document(read_source(path, project=project, display=shown), path=shown, project=project)


def first_existing(root: Path, names: Iterable[str]) -> Path | None:
    for name in names:
        candidate = root / name
        if os.path.isfile(candidate):
            return candidate
    return None


def lookup(document: dict[str, Any], keys: tuple[str, ...], *, path: str, project: str = "") -> Any:
    """Return the value at `keys`, raising `MissingField` when any level is absent."""
    node: Any = document
    for depth, key in enumerate(keys):
        if not isinstance(node, dict):
            dotted = ".".join(keys[:depth])
            raise SchemaError(path, dotted, f"must be a table, got {type(node).__name__}", project=project)
        if key not in node:
            raise MissingField(path, ".".join(keys[: depth + 1]), project=project)
        node = node[key]
    return node
