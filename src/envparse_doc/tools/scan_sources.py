"""Scan a file or folder - discover, parse, extract, aggregate."""

import logging
import os
from pathlib import Path
from typing import Optional

from ..parser import (
    DEFAULT_NAMESPACE,
    LANGUAGE_EXTENSIONS,
    ParseError,
    extract_declarations,
    language_for_path,
)
from ..registry import Registry

logger = logging.getLogger(__name__)


# Directory names never descended into
SKIP_DIRS = {"node_modules", ".git"}

DEFAULT_EXTENSIONS = (".js",)


class ScanPathError(OSError):
    """The scan root does not exist or cannot be read."""


def discover_source_files(
    path: Path,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> list[Path]:
    """Discover source files under a path.

    A file path is returned as-is. A directory is walked recursively,
    skipping SKIP_DIRS, keeping files whose extension is listed.

    Args:
        path: File or folder to scan
        extensions: File extensions to keep (e.g., (".js", ".ts"))

    Returns:
        Paths sorted by relative POSIX path, so discovery order is the same
        on every platform

    Raises:
        ScanPathError: path does not exist or cannot be listed
    """
    if not path.exists():
        raise ScanPathError(f"failed to open path {path}: no such file or directory")

    if path.is_file():
        if not os.access(path, os.R_OK):
            raise ScanPathError(f"failed to open path {path}: permission denied")
        return [path]

    if not os.access(path, os.R_OK | os.X_OK):
        raise ScanPathError(f"failed to open path {path}: permission denied")

    wanted = {ext for ext in extensions if ext in LANGUAGE_EXTENSIONS}
    files = []

    def on_error(error: OSError):
        logger.warning("Cannot list %s: %s", error.filename, error.strerror)

    for dirpath, dirnames, filenames in os.walk(path, onerror=on_error):
        dirnames[:] = [d for d in dirnames if d not in SKIP_DIRS]
        for filename in filenames:
            _, ext = os.path.splitext(filename)
            if ext.lower() in wanted:
                files.append(Path(dirpath) / filename)

    files.sort(key=lambda file_path: file_path.relative_to(path).as_posix())
    return files


def scan_sources(
    path: str,
    namespace: str = DEFAULT_NAMESPACE,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    registry: Optional[Registry] = None,
    warnings: Optional[list[str]] = None,
    files: Optional[list[Path]] = None,
) -> Registry:
    """Run one scan unit over a file or folder.

    Files that can't be read or parsed are logged and skipped; their
    declarations are simply absent from the registry.

    Args:
        path: File or folder to scan
        namespace: Accessor namespace the calls go through
        extensions: File extensions to keep when scanning folders
        registry: Registry to fill (a new one by default)
        warnings: Optional list collecting per-file diagnostics
        files: Files already discovered under path (discovered here when None)

    Returns:
        Registry holding the unit's declarations

    Raises:
        ScanPathError: path does not exist or cannot be listed
    """
    root = Path(path).expanduser()
    if registry is None:
        registry = Registry()

    if files is None:
        files = discover_source_files(root, tuple(extensions))

    for file_path in files:
        # A file given explicitly is parsed as JavaScript unless its extension says otherwise
        language = language_for_path(str(file_path)) or "javascript"

        try:
            content = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            _warn(warnings, f"Failed to read {file_path}: {e}")
            continue

        try:
            declarations = extract_declarations(content, str(file_path), language, namespace)
        except ParseError as e:
            _warn(warnings, f"Failed to parse {file_path}: {e}")
            continue

        logger.debug("%s: %d declaration(s)", file_path, len(declarations))
        registry.put_all(declarations)

    return registry


def _warn(warnings: Optional[list[str]], message: str):
    logger.warning(message)
    if warnings is not None:
        warnings.append(message)


def scan_env(
    path: str,
    sort: bool = True,
    extensions: Optional[list[str]] = None,
    namespace: str = DEFAULT_NAMESPACE,
) -> dict:
    """Scan a file or folder for EnvParse declarations.

    Args:
        path: Path to a source file or folder (absolute or relative)
        sort: Order declarations alphabetically
        extensions: File extensions to scan in folders (default: .js)
        namespace: Accessor namespace the calls go through

    Returns:
        Dict with scan results
    """
    warnings = []
    extensions = tuple(extensions or DEFAULT_EXTENSIONS)

    try:
        files = discover_source_files(Path(path).expanduser(), extensions)
        registry = scan_sources(path, namespace, extensions, warnings=warnings, files=files)
    except ScanPathError as e:
        return {"success": False, "error": str(e)}

    result = {
        "success": True,
        "path": path,
        "file_count": len(files),
        "declaration_count": len(registry),
        "declarations": registry.to_dict(sorted=sort),
    }

    if warnings:
        result["warnings"] = warnings

    return result
