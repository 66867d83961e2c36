"""tree-sitter parser adapter: source text -> syntax tree plus comment list."""

from dataclasses import dataclass, field
from typing import Optional

from tree_sitter_language_pack import get_parser

from .languages import LanguageSpec, LANGUAGE_REGISTRY


class ParseError(Exception):
    """Raised when a source file cannot be parsed."""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(message)
        self.line = line
        self.column = column


@dataclass
class Comment:
    """A comment token with its markers removed."""
    text: str                       # Trimmed comment body
    line: int                       # Start line (1-indexed)
    column: int                     # Start column (0-indexed)


@dataclass
class ParsedSource:
    """Parse result for one file."""
    root: object                    # tree-sitter root node
    source_bytes: bytes
    spec: LanguageSpec
    comments: list[Comment] = field(default_factory=list)

    def text(self, node) -> str:
        """Source text covered by a node."""
        return node_text(node, self.source_bytes)


def node_text(node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8")


def parse_source(content: str, language: str) -> ParsedSource:
    """Parse source code and collect its comments.

    Args:
        content: Raw source code
        language: Language name (must be in LANGUAGE_REGISTRY)

    Returns:
        ParsedSource with the root node and the file's comments in document order

    Raises:
        ParseError: unknown language or the source has syntax errors
    """
    spec = LANGUAGE_REGISTRY.get(language)
    if spec is None:
        raise ParseError(f"Unsupported language: {language}")

    source_bytes = content.encode("utf-8")
    parser = get_parser(spec.ts_language)
    tree = parser.parse(source_bytes)
    root = tree.root_node

    # tree-sitter recovers from errors; a scan treats any recovery as a failed parse
    if root.has_error:
        error = _first_error(root)
        line = error.start_point[0] + 1 if error else 0
        column = error.start_point[1] if error else 0
        if error is not None and error.is_missing:
            message = f"Line {line}: missing {error.type}"
        else:
            message = f"Line {line}: unexpected token"
        raise ParseError(message, line, column)

    parsed = ParsedSource(root=root, source_bytes=source_bytes, spec=spec)
    _collect_comments(root, parsed)
    return parsed


def _first_error(node) -> Optional[object]:
    """Find the first ERROR or MISSING node in document order."""
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _collect_comments(node, parsed: ParsedSource):
    """Recursively gather comment nodes in document order."""
    if node.type in parsed.spec.comment_node_types:
        parsed.comments.append(Comment(
            text=clean_comment_markers(parsed.text(node)),
            line=node.start_point[0] + 1,
            column=node.start_point[1],
        ))
        return

    for child in node.children:
        _collect_comments(child, parsed)


def clean_comment_markers(text: str) -> str:
    """Strip // and /* */ markers and surrounding whitespace."""
    text = text.strip()
    if text.startswith("/**") and text != "/**/":
        text = text[3:]
    elif text.startswith("/*"):
        text = text[2:]
    elif text.startswith("//"):
        text = text[2:]

    if text.endswith("*/"):
        text = text[:-2]

    return text.strip()
