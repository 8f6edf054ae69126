from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import Iterable

ROOT = Path(__file__).resolve().parents[3]
SRC = ROOT / "packages/examplectl/src"

CARGO_CONFIG = """\
[build]
target-dir = "{target_dir}"

[target.x86_64-unknown-linux-gnu]
linker = "dylint-link"
"""


def write_project(
    path: Path,
    *,
    version: str = "4.0.0",
    channel: str = "nightly-2025-01-09",
    components: Iterable[str] = ("llvm-tools-preview", "rustc-dev"),
    target_dir: str | None = None,
    cargo_config: str | None = None,
    toolchain: str | None = None,
) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    name = path.name
    (path / "Cargo.toml").write_text(
        f'[package]\nname = "{name}"\nversion = "{version}"\nedition = "2021"\n',
        encoding="utf-8",
    )
    if toolchain is None:
        items = ", ".join(f'"{item}"' for item in components)
        toolchain = f'[toolchain]\nchannel = "{channel}"\ncomponents = [{items}]\n'
    (path / "rust-toolchain").write_text(toolchain, encoding="utf-8")
    (path / ".cargo").mkdir(exist_ok=True)
    if cargo_config is None:
        cargo_config = CARGO_CONFIG.format(target_dir=target_dir if target_dir is not None else _shared_target(path))
    (path / ".cargo/config.toml").write_text(cargo_config, encoding="utf-8")
    return path


def _shared_target(path: Path) -> str:
    """Relative path from `path` to `<dir holding examples>/target`."""
    examples_root = next((parent for parent in path.parents if parent.name == "examples"), None)
    if examples_root is None:
        return "target"
    return os.path.relpath(examples_root.parent / "target", path).replace(os.sep, "/")


def run_examplectl(*args: str, cwd: Path | None = None, env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    merged = os.environ.copy()
    merged["PYTHONPATH"] = str(SRC)
    merged.setdefault("RUN_ID", "pytest-run")
    if env:
        merged.update(env)
    return subprocess.run(
        [sys.executable, "-m", "examplectl.cli", *args],
        cwd=(cwd or ROOT),
        env=merged,
        text=True,
        capture_output=True,
        check=False,
    )
