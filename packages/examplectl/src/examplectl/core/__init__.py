"""Core runtime helpers shared by checks and commands."""

from __future__ import annotations

from .errors import ExampleError, ScriptError

__all__ = ["ExampleError", "ScriptError"]
