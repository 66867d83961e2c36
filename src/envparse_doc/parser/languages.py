"""Language registry with LanguageSpec definitions for scannable languages."""

import os
from dataclasses import dataclass


@dataclass
class LanguageSpec:
    """Specification for finding accessor calls in a language's AST."""
    # tree-sitter language name (for tree-sitter-language-pack)
    ts_language: str

    # Node type of a call expression
    call_node_type: str

    # Node types treated as comments
    comment_node_types: list[str]

    # Node types whose value is a plain literal
    # Maps node_type -> literal category ("string" | "number" | "boolean" | "null")
    literal_node_types: dict[str, str]

    # Node type of a template string (`FOO_${name}`)
    template_node_type: str

    # Node type of a substitution inside a template string
    substitution_node_type: str


# File extension to language mapping
LANGUAGE_EXTENSIONS = {
    ".js": "javascript",
    ".cjs": "javascript",
    ".mjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}


_ECMASCRIPT_LITERALS = {
    "string": "string",
    "number": "number",
    "true": "boolean",
    "false": "boolean",
    "null": "null",
}


# JavaScript specification
JAVASCRIPT_SPEC = LanguageSpec(
    ts_language="javascript",
    call_node_type="call_expression",
    comment_node_types=["comment"],
    literal_node_types=_ECMASCRIPT_LITERALS,
    template_node_type="template_string",
    substitution_node_type="template_substitution",
)


# TypeScript specification
TYPESCRIPT_SPEC = LanguageSpec(
    ts_language="typescript",
    call_node_type="call_expression",
    comment_node_types=["comment"],
    literal_node_types=_ECMASCRIPT_LITERALS,
    template_node_type="template_string",
    substitution_node_type="template_substitution",
)


# TSX specification
TSX_SPEC = LanguageSpec(
    ts_language="tsx",
    call_node_type="call_expression",
    comment_node_types=["comment"],
    literal_node_types=_ECMASCRIPT_LITERALS,
    template_node_type="template_string",
    substitution_node_type="template_substitution",
)


# Language registry
LANGUAGE_REGISTRY = {
    "javascript": JAVASCRIPT_SPEC,
    "typescript": TYPESCRIPT_SPEC,
    "tsx": TSX_SPEC,
}


def language_for_path(path: str) -> str:
    """Return the language name for a file path, or "" if unsupported."""
    _, ext = os.path.splitext(path)
    return LANGUAGE_EXTENSIONS.get(ext.lower(), "")
