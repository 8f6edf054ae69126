"""Package manifest reading."""

from __future__ import annotations

from .config import ExamplesConfig
from .core.documents import lookup, read_document
from .core.errors import MissingField, SchemaError
from .discovery import Project


def read_version(project: Project, config: ExamplesConfig) -> str:
    manifest = project.root / config.manifest_name
    document = read_document(manifest, project=project.rel, display=config.manifest_name)
    version = lookup(document, ("package", "version"), path=config.manifest_name, project=project.rel)
    if isinstance(version, dict) and version.get("workspace") is True:
        return _workspace_version(project, config)
    if not isinstance(version, str) or not version.strip():
        raise SchemaError(config.manifest_name, "package.version", "must be a non-empty string", project=project.rel)
    return version.strip()


def _workspace_version(project: Project, config: ExamplesConfig) -> str:
    for parent in project.root.parents:
        manifest = parent / config.manifest_name
        if not manifest.is_file():
            continue
        document = read_document(manifest, project=project.rel)
        workspace = document.get("workspace")
        if not isinstance(workspace, dict):
            continue
        version = workspace.get("package", {}).get("version")
        if isinstance(version, str) and version.strip():
            return version.strip()
        raise MissingField(str(manifest), "workspace.package.version", project=project.rel)
    raise SchemaError(
        config.manifest_name,
        "package.version",
        "inherits from the workspace but no enclosing workspace manifest was found",
        project=project.rel,
    )
