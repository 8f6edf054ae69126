from __future__ import annotations

import argparse
import importlib
import sys

from .. import __version__
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_CONFIG, ERR_INTERNAL, ERR_USER
from ..core.logging import log_event
from .output import render_error, resolve_output_format

COMMANDS = {
    "check": ("examplectl.checks.command", "run_check_command"),
    "list": ("examplectl.checks.command", "run_list_command"),
    "projects": ("examplectl.cli.commands", "run_projects_command"),
    "normalize": ("examplectl.cli.commands", "run_normalize_command"),
    "version": ("examplectl.cli.commands", "run_version_command"),
}


def _import_attr(module_name: str, attr: str):
    return getattr(importlib.import_module(module_name), attr)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="examplectl", description="keep sibling example projects consistent")
    p.add_argument("--version", action="version", version=f"examplectl {__version__}")
    p.add_argument("--root", help="examples root directory (default: $EXAMPLECTL_ROOT or cwd)")
    p.add_argument("--config", help="explicit config file (examplectl.toml or pyproject.toml)")
    p.add_argument("--run-id", help="run identifier for log events")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="log per-project progress")
    vg.add_argument("--quiet", action="store_true", help="only log errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    check_p = sub.add_parser("check", help="run consistency checks")
    check_p.add_argument("checks", nargs="*", help="check ids or glob patterns (default: all fast checks)")
    check_p.add_argument("--include-slow", action="store_true", help="also run slow checks such as examples.build")
    check_p.add_argument("--jobs", type=int, default=1, help="run independent checks in parallel")

    sub.add_parser("list", help="list registered checks and their exclusions")

    projects_p = sub.add_parser("projects", help="list discovered example projects")
    projects_p.add_argument("--recursive", action="store_true", help="include nested projects")

    normalize_p = sub.add_parser("normalize", help="print the normalized build config of one project")
    normalize_p.add_argument("project", help="project name or path relative to the examples root")

    sub.add_parser("version", help="print examplectl version")
    return p


def main(argv: list[str] | None = None) -> int:
    raw_argv = argv if argv is not None else sys.argv[1:]
    p = build_parser()
    ns = p.parse_args(raw_argv)
    as_json = ns.json or ns.format == "json"
    try:
        if ns.format and ns.json and ns.format != "json":
            raise ScriptError("conflicting output flags: use either --format json or --json", ERR_CONFIG)
        if getattr(ns, "jobs", 1) < 1:
            raise ScriptError("--jobs must be at least 1", ERR_USER)
        fmt = resolve_output_format(cli_json=ns.json, cli_format=ns.format)
        ctx = RunContext.from_args(
            ns.root,
            ns.config,
            run_id=ns.run_id,
            output_format=fmt,  # type: ignore[arg-type]
            verbose=ns.verbose,
            quiet=ns.quiet,
            log_json=ns.log_json,
        )
        log_event(ctx, "debug", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format, root=ctx.root, config=ctx.config.source)
        module_name, attr = COMMANDS[ns.cmd]
        return int(_import_attr(module_name, attr)(ctx, ns))
    except ScriptError as exc:
        print(render_error(as_json=as_json, message=str(exc), code=exc.code, kind=exc.kind), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(render_error(as_json=as_json, message=f"internal error: {exc}", code=ERR_INTERNAL), file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
