"""Tests for tools module."""

import json
from pathlib import Path

import pytest
from envparse_doc.parser import AccessorKind
from envparse_doc.tools.scan_sources import (
    ScanPathError,
    discover_source_files,
    scan_env,
    scan_sources,
)
from envparse_doc.tools.scan_dependencies import (
    PackageUnit,
    find_package_units,
    scan_dependencies,
    scan_dependency_units,
    uses_package,
)
from envparse_doc.tools.render_env_docs import build_report, render_env_docs


LIB = "@fluidware-it/saddlebag"


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _package(store: Path, name: str, manifest: dict, files: dict) -> Path:
    package_dir = store / name
    _write(package_dir / "package.json", json.dumps(manifest))
    for rel, content in files.items():
        _write(package_dir / rel, content)
    return package_dir


def test_discover_source_files(tmp_path):
    """Test recursive discovery with extension filter and skipped dirs."""
    _write(tmp_path / "b.js", "")
    _write(tmp_path / "a.js", "")
    _write(tmp_path / "lib" / "c.js", "")
    _write(tmp_path / "lib" / "d.ts", "")
    _write(tmp_path / "README.md", "")
    _write(tmp_path / "node_modules" / "dep" / "index.js", "")

    files = discover_source_files(tmp_path)
    rel = [f.relative_to(tmp_path).as_posix() for f in files]
    assert rel == ["a.js", "b.js", "lib/c.js"]

    files = discover_source_files(tmp_path, (".js", ".ts"))
    rel = [f.relative_to(tmp_path).as_posix() for f in files]
    assert rel == ["a.js", "b.js", "lib/c.js", "lib/d.ts"]


def test_discover_single_file(tmp_path):
    """Test a file path is scanned as-is."""
    source = _write(tmp_path / "config.jsx", "")
    assert discover_source_files(source) == [source]


def test_discover_missing_path(tmp_path):
    """Test missing paths are fatal."""
    with pytest.raises(ScanPathError):
        discover_source_files(tmp_path / "nope")


def test_scan_sources_last_write_wins(tmp_path):
    """Test the later file's declaration wins for a shared key."""
    _write(tmp_path / "a.js", "EnvParse.envString('X', 'first');")
    _write(tmp_path / "b.js", "EnvParse.envInt('X', 2);")

    registry = scan_sources(str(tmp_path))
    assert len(registry) == 1
    assert registry.get("X").kind == AccessorKind.INTEGER
    assert registry.get("X").file.endswith("b.js")


def test_scan_sources_skips_parse_failures(tmp_path):
    """Test a file that fails to parse doesn't stop the scan."""
    _write(tmp_path / "a.js", "EnvParse.envInt('A', 1);")
    _write(tmp_path / "b.js", "function (")
    _write(tmp_path / "c.js", "EnvParse.envInt('C', 3);")

    warnings = []
    registry = scan_sources(str(tmp_path), warnings=warnings)
    assert registry.keys() == ["A", "C"]
    assert len(warnings) == 1
    assert "b.js" in warnings[0]


def test_scan_sources_empty(tmp_path):
    """Test sources without accessor calls give an empty registry."""
    _write(tmp_path / "a.js", "console.log('nothing');")
    assert scan_sources(str(tmp_path)).is_empty


def test_scan_sources_missing_path(tmp_path):
    """Test missing scan roots raise."""
    with pytest.raises(ScanPathError):
        scan_sources(str(tmp_path / "missing"))


def test_scan_env_result(tmp_path):
    """Test the scan_env tool result."""
    _write(tmp_path / "a.js", "EnvParse.envInt('B', 1);\nEnvParse.envInt('A', 2);")

    result = scan_env(str(tmp_path))
    assert result["success"] is True
    assert result["file_count"] == 1
    assert result["declaration_count"] == 2
    assert list(result["declarations"]) == ["A", "B"]

    result = scan_env(str(tmp_path), sort=False)
    assert list(result["declarations"]) == ["B", "A"]


def test_scan_env_missing_path(tmp_path):
    """Test scan_env reports missing paths."""
    result = scan_env(str(tmp_path / "missing"))
    assert result["success"] is False
    assert "missing" in result["error"]


def test_scan_env_skips_unreadable_file(tmp_path):
    """Test an unreadable file is reported and the rest of the folder still scans."""
    _write(tmp_path / "a.js", "EnvParse.envInt('A', 1);")
    # Dangling symlink: discovered by the walk, fails on read
    (tmp_path / "x.js").symlink_to(tmp_path / "missing.js")

    assert list(scan_sources(str(tmp_path)).keys()) == ["A"]

    result = scan_env(str(tmp_path))
    assert result["success"] is True
    assert result["file_count"] == 2
    assert list(result["declarations"]) == ["A"]
    assert len(result["warnings"]) == 1
    assert result["warnings"][0].startswith("Failed to read")
    assert "x.js" in result["warnings"][0]


def test_scan_env_discovers_once(tmp_path, monkeypatch):
    """Test scan_env walks the folder a single time."""
    from envparse_doc.tools import scan_sources as scan_sources_module

    _write(tmp_path / "a.js", "EnvParse.envInt('A', 1);")
    _write(tmp_path / "sub" / "b.js", "EnvParse.envInt('B', 2);")

    calls = []
    original = scan_sources_module.discover_source_files

    def counting(path, extensions):
        calls.append(path)
        return original(path, extensions)

    monkeypatch.setattr(scan_sources_module, "discover_source_files", counting)

    result = scan_env(str(tmp_path))
    assert len(calls) == 1
    assert result["file_count"] == 2
    assert list(result["declarations"]) == ["A", "B"]


def test_uses_package():
    """Test manifest dependency matching."""
    assert uses_package({"name": LIB}, LIB)
    assert uses_package({"dependencies": {LIB: "^1.0.0"}}, LIB)
    assert uses_package({"peerDependencies": {LIB: "*"}}, LIB)
    assert not uses_package({"devDependencies": {LIB: "^1.0.0"}}, LIB)
    assert not uses_package({"dependencies": {"left-pad": "1.0.0"}}, LIB)


def test_package_unit_label():
    """Test report headings for packages."""
    assert PackageUnit("P", "1.2.0", Path(".")).label == "P@1.2.0"
    assert PackageUnit("P", "", Path(".")).label == "P"


def test_dependency_scan(tmp_path):
    """Test a dependent package gets a section, a sibling without the dependency doesn't."""
    store = tmp_path / "node_modules"
    _package(
        store, "P",
        {"name": "P", "version": "1.2.0", "main": "index.js", "dependencies": {LIB: "^2.0.0"}},
        {"index.js": "EnvParse.envInt('P_PORT', 1);"},
    )
    _package(
        store, "Q",
        {"name": "Q", "version": "0.1.0", "main": "index.js", "dependencies": {"other": "1"}},
        {"index.js": "EnvParse.envInt('Q_PORT', 1);"},
    )

    results = scan_dependency_units(str(store), LIB)
    assert len(results) == 1
    unit, registry = results[0]
    assert unit.label == "P@1.2.0"
    assert registry.keys() == ["P_PORT"]


def test_dependency_scan_scoped_and_main_dir(tmp_path):
    """Test scope folders are descended into and main's directory is scanned."""
    store = tmp_path / "node_modules"
    _package(
        store / "@acme", "service",
        {"name": "@acme/service", "version": "3.0.0", "main": "dist/index.js", "peerDependencies": {LIB: "*"}},
        {
            "dist/index.js": "EnvParse.envString('ACME_HOST', 'h');",
            "dist/lib/db.js": "EnvParse.envStringRequired('ACME_DB');",
            "src/ignored.js": "EnvParse.envString('NOT_IN_DIST');",
        },
    )

    units = find_package_units(store, LIB)
    assert [u.label for u in units] == ["@acme/service@3.0.0"]
    assert units[0].entry_dir == store / "@acme" / "service" / "dist"

    results = scan_dependency_units(str(store), LIB)
    assert results[0][1].keys(sorted=True) == ["ACME_DB", "ACME_HOST"]


def test_dependency_scan_skips_empty_and_mainless(tmp_path):
    """Test packages without declarations or without main produce nothing."""
    store = tmp_path / "node_modules"
    _package(
        store, "empty",
        {"name": "empty", "version": "1.0.0", "main": "index.js", "dependencies": {LIB: "1"}},
        {"index.js": "module.exports = {};"},
    )
    _package(
        store, "nomain",
        {"name": "nomain", "version": "1.0.0", "dependencies": {LIB: "1"}},
        {"index.js": "EnvParse.envInt('NOMAIN', 1);"},
    )
    assert scan_dependency_units(str(store), LIB) == []


def test_dependency_scan_invalid_manifest(tmp_path):
    """Test an unreadable manifest is skipped."""
    store = tmp_path / "node_modules"
    _write(store / "broken" / "package.json", "{not json")
    _package(
        store, "ok",
        {"name": "ok", "version": "1.0.0", "main": "index.js", "dependencies": {LIB: "1"}},
        {"index.js": "EnvParse.envInt('OK', 1);"},
    )
    results = scan_dependency_units(str(store), LIB)
    assert [u.label for u, _ in results] == ["ok@1.0.0"]


def test_dependency_scan_symlink_cycle(tmp_path):
    """Test a symlink loop in the store doesn't recurse forever."""
    store = tmp_path / "node_modules"
    scope = store / "@scope"
    scope.mkdir(parents=True)
    (scope / "loop").symlink_to(store, target_is_directory=True)
    _package(
        scope, "pkg",
        {"name": "@scope/pkg", "version": "1.0.0", "main": "index.js", "dependencies": {LIB: "1"}},
        {"index.js": "EnvParse.envInt('LOOP_SAFE', 1);"},
    )

    units = find_package_units(store, LIB)
    assert [u.label for u in units] == ["@scope/pkg@1.0.0"]


def test_dependency_store_missing(tmp_path):
    """Test a missing store is fatal."""
    with pytest.raises(ScanPathError):
        find_package_units(tmp_path / "node_modules", LIB)

    result = scan_dependencies(str(tmp_path / "node_modules"))
    assert result["success"] is False


def test_scan_dependencies_result(tmp_path):
    """Test the scan_dependencies tool result."""
    store = tmp_path / "node_modules"
    _package(
        store, "P",
        {"name": "P", "version": "1.2.0", "main": "index.js", "dependencies": {LIB: "1"}},
        {"index.js": "EnvParse.envInt('P_PORT', 1);"},
    )
    result = scan_dependencies(str(store))
    assert result["success"] is True
    assert result["packages"][0]["package"] == "P@1.2.0"
    assert list(result["packages"][0]["declarations"]) == ["P_PORT"]


def test_build_report_with_dependencies(tmp_path):
    """Test root and dependency sections in one Markdown report."""
    root = tmp_path / "app"
    _write(root / "main.js", "/* FW_MS_PORT: the listening port */\nEnvParse.envInt('FW_MS_PORT', 8080);")
    store = tmp_path / "node_modules"
    _package(
        store, "P",
        {"name": "P", "version": "1.2.0", "main": "index.js", "dependencies": {LIB: "1"}},
        {"index.js": "EnvParse.envBool('P_FLAG', true);"},
    )

    from envparse_doc.config import ScanConfig
    report = build_report(str(root), "md", dependency=True, config=ScanConfig(store=str(store)))

    assert report.index("## Environment variables") < report.index("## P@1.2.0")
    assert "| FW_MS_PORT | integer |    8080 |          | the listening port |" in report
    assert "P_FLAG" in report


def test_build_report_empty_root(tmp_path):
    """Test an empty root scan emits no section."""
    _write(tmp_path / "main.js", "console.log(1);")
    assert build_report(str(tmp_path), "md") == ""


def test_render_env_docs_tool(tmp_path):
    """Test the render tool wraps errors and output."""
    _write(tmp_path / "main.js", "EnvParse.envInt('A', 1);")

    result = render_env_docs(str(tmp_path), output="json")
    assert result["success"] is True
    assert json.loads(result["report"])["A"]["args"] == [1]

    result = render_env_docs(str(tmp_path), output="xml")
    assert result["success"] is False

    result = render_env_docs(str(tmp_path / "missing"))
    assert result["success"] is False
