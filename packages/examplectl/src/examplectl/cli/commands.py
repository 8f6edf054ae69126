"""Inspection commands: project listing and config normalization."""

from __future__ import annotations

import argparse

from .. import __version__
from ..core.context import RunContext
from ..core.errors import DiscoveryError, ExampleError, ScriptError
from ..core.exit_codes import ERR_CHECK_FAILED, ERR_USER, OK
from ..discovery import Project, iter_projects, list_projects
from ..normalize import normalize_config
from .output import emit_payload


def run_version_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    if ctx.output_format == "json":
        emit_payload({"schema_version": 1, "tool": "examplectl", "version": __version__}, as_json=True)
    else:
        print(f"examplectl {__version__}")
    return OK


def run_projects_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    projects: list[str] = []
    errors: list[str] = []
    for item in iter_projects(ctx.root, recursive=ns.recursive, config=ctx.config):
        if isinstance(item, DiscoveryError):
            errors.append(item.message)
            continue
        projects.append(item.rel)
    if ctx.output_format == "json":
        emit_payload(
            {
                "schema_version": 1,
                "tool": "examplectl",
                "kind": "project-list",
                "root": str(ctx.root),
                "mode": "recursive" if ns.recursive else "restricted",
                "projects": projects,
                "errors": errors,
            },
            as_json=True,
        )
    else:
        for rel in projects:
            print(rel)
        for message in errors:
            print(f"error: {message}")
    return ERR_CHECK_FAILED if errors else OK


def _find_project(ctx: RunContext, wanted: str) -> Project:
    matches = [project for project in list_projects(ctx.root, recursive=True, config=ctx.config) if project.matches(wanted)]
    if not matches:
        raise ScriptError(f"no example project matches `{wanted}`", ERR_USER, kind="unknown_project")
    exact = [project for project in matches if project.rel == wanted.strip("/")]
    if exact:
        return exact[0]
    if len(matches) > 1:
        names = ", ".join(project.rel for project in matches)
        raise ScriptError(f"`{wanted}` is ambiguous: {names}", ERR_USER, kind="ambiguous_project")
    return matches[0]


def run_normalize_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    try:
        project = _find_project(ctx, ns.project)
        text = normalize_config(project, ctx.config)
    except ExampleError as exc:
        raise ScriptError(exc.message, ERR_CHECK_FAILED, kind=exc.code.lower()) from exc
    if ctx.output_format == "json":
        emit_payload({"schema_version": 1, "tool": "examplectl", "project": project.rel, "normalized": text}, as_json=True)
    else:
        print(text)
    return OK
