"""Checks that keep the example projects in lockstep."""

from __future__ import annotations

from typing import Iterable

from ..config import ExamplesConfig
from ..core.errors import DiscoveryError, ForbiddenComponentPresent
from ..core.logging import log_event
from ..core.model import Violation
from ..discovery import Project, iter_projects
from ..manifest import read_version
from ..normalize import normalize_config
from ..toolchain import descriptor_path, read_channel, read_components
from .consistency import Baseline, check_all_equal
from .model import CheckContext
from .paths import scan

BUILD = "examples.build"
VERSION = "examples.version"
CARGO_CONFIG = "examples.cargo_config"
TOOLCHAIN_CHANNEL = "examples.toolchain_channel"
TOOLCHAIN_COMPONENTS = "examples.toolchain_components"
FORBIDDEN_PATHS = "examples.forbidden_paths"


def check_build(ctx: CheckContext) -> list[Violation]:
    if ctx.build_runner is None:
        return [Violation(code="BUILD_RUNNER_MISSING", message=f"{BUILD}: no build runner configured")]
    excluded = ctx.excluded(BUILD)
    violations: list[Violation] = []
    for item in iter_projects(ctx.root, recursive=False, config=ctx.config):
        if isinstance(item, DiscoveryError):
            raise item
        if item.is_excluded(excluded):
            continue
        outcome = ctx.build_runner.run(item)
        log_event(ctx.run, "info", BUILD, "project-built", project=item.rel, code=outcome.code)
        if not outcome.ok:
            violations.append(
                Violation(
                    code="BUILD_FAILED",
                    message=f"{BUILD}: build/test of `{item.rel}` failed with exit code {outcome.code}",
                    project=item.rel,
                    values={"code": str(outcome.code), "output": outcome.output[-4000:]},
                )
            )
    return violations


def check_same_version(ctx: CheckContext) -> list[Violation]:
    expected = ctx.config.expected_version
    seed = Baseline(project="<expected_version>", value=expected) if expected else None
    check_all_equal(
        iter_projects(ctx.root, recursive=False, config=ctx.config),
        ctx.excluded(VERSION),
        lambda project: read_version(project, ctx.config),
        check=VERSION,
        baseline=seed,
        ctx=ctx.run,
    )
    return []


def check_equivalent_cargo_configs(ctx: CheckContext) -> list[Violation]:
    check_all_equal(
        iter_projects(ctx.root, recursive=True, config=ctx.config),
        ctx.excluded(CARGO_CONFIG),
        lambda project: normalize_config(project, ctx.config),
        check=CARGO_CONFIG,
        ctx=ctx.run,
    )
    return []


def check_same_toolchain_channel(ctx: CheckContext) -> list[Violation]:
    check_all_equal(
        iter_projects(ctx.root, recursive=True, config=ctx.config),
        ctx.excluded(TOOLCHAIN_CHANNEL),
        lambda project: read_channel(project, ctx.config),
        check=TOOLCHAIN_CHANNEL,
        ctx=ctx.run,
    )
    return []


def check_no_forbidden_component(project: Project, forbidden: Iterable[str], config: ExamplesConfig) -> None:
    components = read_components(project, config)
    for component in forbidden:
        if component in components:
            path = descriptor_path(project, config).relative_to(project.root).as_posix()
            raise ForbiddenComponentPresent(component, project=project.rel, path=path)


def check_toolchain_components(ctx: CheckContext) -> list[Violation]:
    excluded = ctx.excluded(TOOLCHAIN_COMPONENTS)
    violations: list[Violation] = []
    for item in iter_projects(ctx.root, recursive=True, config=ctx.config):
        if isinstance(item, DiscoveryError):
            raise item
        if item.is_excluded(excluded):
            continue
        try:
            check_no_forbidden_component(item, ctx.config.forbidden_components, ctx.config)
        except ForbiddenComponentPresent as exc:
            violations.extend(exc.violations())
    return violations


def check_forbidden_paths(ctx: CheckContext) -> list[Violation]:
    found = scan(ctx.root, ctx.config.forbidden_paths, skip_dirs=ctx.config.scan_skip_dirs)
    return [item.to_violation() for item in found]
