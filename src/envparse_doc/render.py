"""Render registries as Markdown tables or JSON."""

import json
from typing import Any, Iterable, Optional

from .parser.declarations import DEFAULTED_KINDS, Declaration
from .registry import Registry

OUTPUTS = ("md", "json")

DEFAULT_TITLE = "Environment variables"

HEADERS = ("ENV", "type", "default", "required", "notes")

REQUIRED_MARKER = "*"


def format_value(value: Any) -> str:
    """Format a normalized argument the way JavaScript stringifies it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        # Array.prototype.toString leaves null elements empty
        return ",".join("" if v is None else format_value(v) for v in value)
    return str(value)


def format_default(declaration: Declaration) -> str:
    """Default column text; empty for kinds without a default or no default given."""
    if declaration.kind not in DEFAULTED_KINDS or not declaration.args:
        return ""
    return format_value(declaration.args[0])


def table_row(declaration: Declaration) -> tuple[str, str, str, str, str]:
    """Cell values for one declaration."""
    return (
        declaration.key,
        declaration.type_label,
        format_default(declaration),
        REQUIRED_MARKER if declaration.required else "",
        declaration.comment if declaration.comment is not None else "",
    )


def render_markdown(registry: Registry, title: Optional[str] = None, sort: bool = False) -> str:
    """Render a registry as a heading plus an aligned table.

    Every column is as wide as its widest cell (header included). ENV is
    left-aligned, the other columns right-aligned.
    """
    rows = [table_row(decl) for decl in registry.entries(sorted=sort).values()]

    widths = [len(h) for h in HEADERS]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    lines = [
        "",
        f"## {title or DEFAULT_TITLE}",
        "",
        _format_line(HEADERS, widths),
        "| " + " | ".join("-" * w for w in widths) + " |",
    ]
    lines.extend(_format_line(row, widths) for row in rows)
    return "\n".join(lines)


def _format_line(cells: Iterable[str], widths: list[int]) -> str:
    padded = []
    for i, (cell, width) in enumerate(zip(cells, widths)):
        padded.append(cell.ljust(width) if i == 0 else cell.rjust(width))
    return "| " + " | ".join(padded) + " |"


def render_json(registry: Registry, sort: bool = False) -> str:
    """Render a registry as a JSON mapping of key -> declaration."""
    return json.dumps(registry.to_dict(sorted=sort), indent=3)


def render_section(registry: Registry, output: str = "md", title: Optional[str] = None, sort: bool = False) -> str:
    """Render one scan unit; empty registries render as ""."""
    if registry.is_empty:
        return ""
    if output == "md":
        return render_markdown(registry, title, sort)
    if output == "json":
        return render_json(registry, sort)
    raise ValueError(f"Unknown/unsupported output {output}")


def render_report(
    units: Iterable[tuple[Optional[str], Registry]],
    output: str = "md",
    sort: bool = False,
) -> str:
    """Render several scan units, skipping those without declarations.

    Args:
        units: (title, registry) pairs; a None title uses DEFAULT_TITLE
        output: "md" or "json"
        sort: Order entries alphabetically

    Returns:
        Sections joined by newlines
    """
    sections = [render_section(registry, output, title, sort) for title, registry in units]
    return "\n".join(s for s in sections if s)
