"""Render environment variable docs for a path and, optionally, its dependencies."""

from dataclasses import replace
from typing import Optional

from ..config import ScanConfig
from ..render import OUTPUTS, render_report
from .scan_dependencies import scan_dependency_units
from .scan_sources import ScanPathError, scan_sources


def build_report(
    path: str,
    output: str = "md",
    dependency: bool = False,
    config: Optional[ScanConfig] = None,
) -> str:
    """Scan `path` (and the package store when `dependency` is set) and render.

    The root unit comes first under the default heading; each dependency
    follows under "<name>@<version>". Units without declarations are omitted.

    Raises:
        ScanPathError: path or package store cannot be opened
        ValueError: unknown output format
    """
    if output not in OUTPUTS:
        raise ValueError(f"Unknown/unsupported output {output}")

    config = config or ScanConfig()
    extensions = tuple(config.extensions)

    units = [(None, scan_sources(path, config.namespace, extensions))]

    if dependency:
        for unit, registry in scan_dependency_units(
            config.store, config.package, config.namespace, extensions
        ):
            units.append((unit.label, registry))

    return render_report(units, output, config.sort)


def render_env_docs(
    path: str,
    output: str = "md",
    sort: bool = True,
    dependency: bool = False,
    store: Optional[str] = None,
    config: Optional[ScanConfig] = None,
) -> dict:
    """Render Markdown or JSON docs for a path.

    Args:
        path: Source file or folder
        output: "md" or "json"
        sort: Order declarations alphabetically
        dependency: Also document packages in the store that use EnvParse
        store: Package store directory (default from configuration)
        config: Base configuration (read from the environment when None)

    Returns:
        Dict with the rendered report
    """
    config = replace(config or ScanConfig(), sort=sort)
    if store:
        config.store = store

    try:
        report = build_report(path, output, dependency, config)
    except (ScanPathError, ValueError) as e:
        return {"success": False, "error": str(e)}

    return {
        "success": True,
        "output": output,
        "report": report,
    }
