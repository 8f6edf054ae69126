"""Cross-project equality checking.

Every project not excluded contributes one value. The first value seen is the
baseline and all later values must equal it exactly. Extraction failures and
unreadable directories are fatal for the check; a fully excluded or empty
project set passes without a baseline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Generic, Iterable, TypeVar

from ..core.errors import ConsistencyError, DiscoveryError
from ..core.logging import log_event
from ..discovery import Project

if TYPE_CHECKING:
    from ..core.context import RunContext

V = TypeVar("V")


@dataclass(frozen=True)
class Baseline(Generic[V]):
    project: str
    value: V


def check_all_equal(
    projects: Iterable[Project | DiscoveryError],
    excluded: Iterable[str],
    extract: Callable[[Project], V],
    *,
    check: str = "consistency",
    baseline: Baseline[V] | None = None,
    ctx: RunContext | None = None,
) -> Baseline[V] | None:
    skip = tuple(excluded)
    current = baseline
    for item in projects:
        if isinstance(item, DiscoveryError):
            raise item
        if item.is_excluded(skip):
            log_event(ctx, "debug", check, "skip-excluded", project=item.rel)
            continue
        value = extract(item)
        if current is None:
            current = Baseline(project=item.rel, value=value)
            log_event(ctx, "debug", check, "baseline", project=item.rel)
            continue
        if value != current.value:
            raise ConsistencyError(
                check,
                baseline_project=current.project,
                baseline_value=str(current.value),
                project=item.rel,
                value=str(value),
            )
        log_event(ctx, "debug", check, "match", project=item.rel)
    return current
