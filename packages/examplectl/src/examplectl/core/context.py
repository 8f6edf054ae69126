from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from ..config import ExamplesConfig, load_config
from .errors import ScriptError
from .exit_codes import ERR_USER

OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RunContext:
    run_id: str
    root: Path
    config: ExamplesConfig
    output_format: OutputFormat = "text"
    verbose: bool = False
    quiet: bool = False
    log_json: bool = False

    @classmethod
    def from_args(
        cls,
        root: str | None,
        config_path: str | None = None,
        *,
        run_id: str | None = None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
    ) -> "RunContext":
        resolved_root = Path(os.path.abspath(root or os.environ.get("EXAMPLECTL_ROOT") or "."))
        if not resolved_root.is_dir():
            raise ScriptError(f"examples root is not a directory: {resolved_root}", ERR_USER, kind="invalid_root")
        config = load_config(resolved_root, Path(config_path) if config_path else None)
        default_run = f"examples-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}"
        return cls(
            run_id=run_id or os.environ.get("RUN_ID") or default_run,
            root=resolved_root,
            config=config,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
        )
