"""Toolchain descriptor reading (`rust-toolchain` / `rust-toolchain.toml`)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .config import ExamplesConfig
from .core.documents import first_existing, load_document, lookup, read_source
from .core.errors import MissingField, MissingFile, ParseError, SchemaError
from .discovery import Project

_LEGACY_CHANNEL = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


@dataclass(frozen=True)
class ToolchainDescriptor:
    path: str
    channel: str
    components: frozenset[str] | None


def descriptor_path(project: Project, config: ExamplesConfig) -> Path:
    found = first_existing(project.root, config.toolchain_files)
    if found is None:
        raise MissingFile(config.toolchain_files[0], project=project.rel)
    return found


def read_descriptor(project: Project, config: ExamplesConfig) -> ToolchainDescriptor:
    target = descriptor_path(project, config)
    display = target.relative_to(project.root).as_posix()
    data = read_source(target, project=project.rel, display=display)
    try:
        document = load_document(data, path=display, project=project.rel)
    except ParseError:
        # Legacy single-line form: the whole file is the channel name.
        legacy = data.decode("utf-8", errors="replace").strip()
        if _LEGACY_CHANNEL.fullmatch(legacy):
            return ToolchainDescriptor(path=display, channel=legacy, components=frozenset())
        raise
    channel = lookup(document, ("toolchain", "channel"), path=display, project=project.rel)
    if not isinstance(channel, str) or not channel.strip():
        raise SchemaError(display, "toolchain.channel", "must be a non-empty string", project=project.rel)
    components: frozenset[str] | None = None
    toolchain = document["toolchain"]
    if "components" in toolchain:
        raw = toolchain["components"]
        if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
            raise SchemaError(display, "toolchain.components", "must be an array of strings", project=project.rel)
        components = frozenset(raw)
    return ToolchainDescriptor(path=display, channel=channel.strip(), components=components)


def read_channel(project: Project, config: ExamplesConfig) -> str:
    return read_descriptor(project, config).channel


def read_components(project: Project, config: ExamplesConfig) -> frozenset[str]:
    descriptor = read_descriptor(project, config)
    if descriptor.components is None:
        raise MissingField(descriptor.path, "toolchain.components", project=project.rel)
    return descriptor.components
