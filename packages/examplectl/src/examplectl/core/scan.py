"""Deterministic directory walking.

Entries are yielded depth-first in name order. Unreadable directories are
yielded as `DiscoveryError` items instead of being skipped, so callers decide
whether the failure is fatal.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator

from .errors import DiscoveryError


@dataclass(frozen=True)
class TreeEntry:
    path: Path
    rel: PurePosixPath
    is_dir: bool

    @property
    def depth(self) -> int:
        return len(self.rel.parts)


def walk_tree(
    root: Path,
    *,
    skip_dirs: Iterable[str] = (),
    max_depth: int | None = None,
) -> Iterator[TreeEntry | DiscoveryError]:
    skipped = frozenset(skip_dirs)
    yield from _walk(root, PurePosixPath(), skipped, max_depth)


def _walk(
    directory: Path,
    rel: PurePosixPath,
    skipped: frozenset[str],
    max_depth: int | None,
) -> Iterator[TreeEntry | DiscoveryError]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        yield DiscoveryError(str(directory), exc.strerror or str(exc))
        return
    for entry in entries:
        child_rel = rel / entry.name
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            yield DiscoveryError(str(Path(entry.path)), exc.strerror or str(exc))
            continue
        yield TreeEntry(path=Path(entry.path), rel=child_rel, is_dir=is_dir)
        if not is_dir or entry.name in skipped:
            continue
        if max_depth is not None and len(child_rel.parts) >= max_depth:
            continue
        yield from _walk(Path(entry.path), child_rel, skipped, max_depth)
