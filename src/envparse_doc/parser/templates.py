"""Rebuild template-string keys (`PREFIX_${name}_SUFFIX`) in source order."""

import re

from .adapter import node_text


_ESCAPE_RE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])"
)

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def cook_escapes(raw: str) -> str:
    """Apply ECMAScript escape sequences to raw literal text."""
    def replace(match: re.Match) -> str:
        seq = match.group(1)
        if seq.startswith("u{"):
            return chr(int(seq[2:-1], 16))
        if seq.startswith("u") and len(seq) == 5:
            return chr(int(seq[1:], 16))
        if seq.startswith("x") and len(seq) == 3:
            return chr(int(seq[1:], 16))
        if seq in ("\n", "\r\n", "\r", "\u2028", "\u2029"):
            # Line continuation
            return ""
        return _SIMPLE_ESCAPES.get(seq, seq)

    return _ESCAPE_RE.sub(replace, raw)


def placeholder(name: str) -> str:
    """Interpolation placeholder for a value only known at runtime."""
    return f"${{{name}}}"


def reconstruct_template(node, source_bytes: bytes, substitution_type: str = "template_substitution") -> str:
    """Reconstruct a template string's text with ${name} placeholders.

    Literal fragments and substitutions are gathered into separate lists,
    each entry carrying its (line, column) start point, then merged by
    position so the result reads exactly as the source does.
    """
    fragments = []
    substitutions = []

    children = node.children
    # Literal text lives in the gaps between the backticks and substitutions
    previous = children[0] if children else None
    for child in children[1:]:
        if child.type == substitution_type or child is children[-1]:
            if child.start_byte > previous.end_byte:
                raw = source_bytes[previous.end_byte:child.start_byte].decode("utf-8")
                fragments.append((previous.end_point, cook_escapes(raw)))
            if child.type == substitution_type:
                substitutions.append((child.start_point, _render_substitution(child, source_bytes)))
            previous = child

    parts = sorted(fragments + substitutions, key=lambda part: (part[0][0], part[0][1]))
    return "".join(value for _, value in parts)


def _render_substitution(node, source_bytes: bytes) -> str:
    """Render ${expr}; identifiers by name, anything else by its source text."""
    expressions = [c for c in node.named_children if c.type != "comment"]
    if not expressions:
        return placeholder("")
    expression = expressions[0]
    return placeholder(node_text(expression, source_bytes).strip())
