"""Example project discovery.

A project is any directory below the examples root holding both the package
manifest and a toolchain descriptor. Restricted mode only looks at curated
top-level categories and their direct children, even when such a child sits
inside another project; recursive mode returns every project at any depth.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterator

from .config import ExamplesConfig
from .core.errors import DiscoveryError
from .core.scan import walk_tree

RESTRICTED_MAX_DEPTH = 2


@dataclass(frozen=True)
class Project:
    root: Path
    rel: str

    @property
    def name(self) -> str:
        return self.root.name

    def matches(self, entry: str) -> bool:
        wanted = PurePosixPath(entry.strip().strip("/")).parts
        if not wanted:
            return False
        parts = PurePosixPath(self.rel).parts
        return len(wanted) <= len(parts) and parts[-len(wanted):] == wanted

    def is_excluded(self, excluded: tuple[str, ...] | frozenset[str]) -> bool:
        return any(self.matches(entry) for entry in excluded)


def is_project_dir(path: Path, config: ExamplesConfig) -> bool:
    if not os.path.isfile(path / config.manifest_name):
        return False
    return any(os.path.isfile(path / name) for name in config.toolchain_files)


def iter_projects(root: Path, *, recursive: bool, config: ExamplesConfig) -> Iterator[Project | DiscoveryError]:
    base = Path(os.path.abspath(root))
    categories = frozenset(config.restricted_categories)
    max_depth = None if recursive else RESTRICTED_MAX_DEPTH
    for item in walk_tree(base, skip_dirs=config.skip_dirs, max_depth=max_depth):
        if isinstance(item, DiscoveryError):
            yield item
            continue
        if not item.is_dir or item.path.name in config.skip_dirs:
            continue
        if not recursive and categories and item.rel.parts[0] not in categories:
            continue
        if is_project_dir(item.path, config):
            yield Project(root=item.path, rel=item.rel.as_posix())


def list_projects(root: Path, *, recursive: bool, config: ExamplesConfig) -> list[Project]:
    projects: list[Project] = []
    for item in iter_projects(root, recursive=recursive, config=config):
        if isinstance(item, DiscoveryError):
            raise item
        projects.append(item)
    return projects
