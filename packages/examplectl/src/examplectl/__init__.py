__version__ = "0.1.0"

__all__ = [
    "__version__",
    "build",
    "checks",
    "cli",
    "config",
    "contracts",
    "core",
    "discovery",
    "manifest",
    "normalize",
    "toolchain",
]
