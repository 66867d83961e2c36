"""Scan installed packages that depend on the EnvParse library."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import DEFAULT_PACKAGE
from ..parser import DEFAULT_NAMESPACE
from ..registry import Registry
from .scan_sources import DEFAULT_EXTENSIONS, ScanPathError, scan_sources

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


@dataclass
class PackageUnit:
    """An installed package scanned as its own unit."""
    name: str
    version: str
    entry_dir: Path

    @property
    def label(self) -> str:
        """Report heading, e.g. "@scope/pkg@1.2.0"."""
        if self.version:
            return f"{self.name}@{self.version}"
        return self.name


def load_manifest(manifest_path: Path) -> Optional[dict]:
    """Read a package.json; unreadable or invalid manifests give None."""
    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            manifest = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Skipping %s: %s", manifest_path, e)
        return None

    if not isinstance(manifest, dict):
        logger.warning("Skipping %s: manifest is not an object", manifest_path)
        return None

    return manifest


def uses_package(manifest: dict, package: str) -> bool:
    """True if the manifest is the package or lists it as a direct or peer dependency."""
    if manifest.get("name") == package:
        return True
    for section in ("dependencies", "peerDependencies"):
        deps = manifest.get(section)
        if isinstance(deps, dict) and package in deps:
            return True
    return False


def resolve_package_unit(package_dir: Path, manifest: dict) -> Optional[PackageUnit]:
    """Build the scan unit for a package from its "main" entry point."""
    main = manifest.get("main")
    if not isinstance(main, str) or not main:
        logger.debug("%s: no \"main\" entry point, skipped", package_dir)
        return None

    entry_dir = (package_dir / main).parent
    return PackageUnit(
        name=str(manifest.get("name") or package_dir.name),
        version=str(manifest.get("version") or ""),
        entry_dir=entry_dir,
    )


def find_package_units(store: Path, package: str = DEFAULT_PACKAGE) -> list[PackageUnit]:
    """Find packages under a store that use `package`.

    Directories without a manifest (e.g. "@scope" folders) are descended
    into; directories with one are packages and are never descended into.

    Raises:
        ScanPathError: store does not exist or is not a directory
    """
    if not store.is_dir():
        raise ScanPathError(f"failed to open path {store}: not a directory")

    units = []
    visited = set()
    _walk_store(store, package, units, visited)
    return units


def _walk_store(directory: Path, package: str, units: list, visited: set):
    """Recursively visit immediate subdirectories of a package store."""
    # Symlinked stores (pnpm, npm link) can loop back on themselves
    real = os.path.realpath(directory)
    if real in visited:
        logger.debug("%s already visited, skipped", directory)
        return
    visited.add(real)

    try:
        children = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.warning("Cannot list %s: %s", directory, e)
        return

    for child in children:
        if not child.is_dir():
            continue

        manifest_path = child / MANIFEST_NAME
        if not manifest_path.exists():
            _walk_store(child, package, units, visited)
            continue

        manifest = load_manifest(manifest_path)
        if manifest is None or not uses_package(manifest, package):
            continue

        unit = resolve_package_unit(child, manifest)
        if unit:
            units.append(unit)


def scan_dependency_units(
    store: str = "node_modules",
    package: str = DEFAULT_PACKAGE,
    namespace: str = DEFAULT_NAMESPACE,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    warnings: Optional[list[str]] = None,
) -> list[tuple[PackageUnit, Registry]]:
    """Run a fresh scan for every package under `store` that uses `package`.

    Packages whose scan finds nothing are left out.

    Raises:
        ScanPathError: store does not exist or is not a directory
    """
    results = []

    for unit in find_package_units(Path(store).expanduser(), package):
        try:
            registry = scan_sources(str(unit.entry_dir), namespace, extensions, warnings=warnings)
        except ScanPathError as e:
            # A package whose entry point is missing doesn't stop the walk
            logger.warning("Skipping %s: %s", unit.label, e)
            continue

        if registry.is_empty:
            logger.debug("%s: no declarations", unit.label)
            continue

        results.append((unit, registry))

    return results


def scan_dependencies(
    store: str = "node_modules",
    sort: bool = True,
    package: str = DEFAULT_PACKAGE,
    namespace: str = DEFAULT_NAMESPACE,
) -> dict:
    """Scan a package store for packages declaring EnvParse variables.

    Args:
        store: Package store directory (default: node_modules)
        sort: Order declarations alphabetically
        package: Library whose dependents are scanned
        namespace: Accessor namespace the calls go through

    Returns:
        Dict with one entry per package that declares variables
    """
    warnings = []

    try:
        results = scan_dependency_units(store, package, namespace, warnings=warnings)
    except ScanPathError as e:
        return {"success": False, "error": str(e)}

    result = {
        "success": True,
        "store": store,
        "packages": [
            {
                "package": unit.label,
                "entry_dir": str(unit.entry_dir),
                "declarations": registry.to_dict(sorted=sort),
            }
            for unit, registry in results
        ],
    }

    if warnings:
        result["warnings"] = warnings

    return result
