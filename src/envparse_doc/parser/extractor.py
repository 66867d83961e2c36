"""Per-file extractor: find EnvParse calls in a tree-sitter AST."""

import logging
from typing import Optional

from .adapter import ParsedSource, parse_source
from .classifier import ArgShape, call_arguments, classify_argument, match_accessor
from .comments import find_comment
from .declarations import Declaration, kind_for_accessor
from .languages import LANGUAGE_REGISTRY

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "EnvParse"

# Argument shapes that can name a variable
KEY_SHAPES = (ArgShape.LITERAL, ArgShape.TEMPLATE, ArgShape.IDENTIFIER)


def extract_declarations(
    content: str,
    filename: str,
    language: str,
    namespace: str = DEFAULT_NAMESPACE,
) -> list[Declaration]:
    """Parse source code and extract EnvParse declarations.

    Args:
        content: Raw source code
        filename: File path (recorded on each declaration)
        language: Language name (must be in LANGUAGE_REGISTRY)
        namespace: Accessor namespace the calls go through

    Returns:
        Declarations in document order

    Raises:
        ParseError: the file could not be parsed
    """
    if language not in LANGUAGE_REGISTRY:
        return []

    parsed = parse_source(content, language)

    declarations = []
    for node in _walk_calls(parsed):
        declaration = _extract_declaration(node, parsed, filename, namespace)
        if declaration:
            declarations.append(declaration)

    return declarations


def _walk_calls(parsed: ParsedSource):
    """Yield every call expression in document order, at any depth."""
    call_type = parsed.spec.call_node_type
    stack = [parsed.root]
    while stack:
        node = stack.pop()
        if node.type == call_type:
            yield node
        # Reversed so children pop in source order
        stack.extend(reversed(node.children))


def _extract_declaration(
    node,
    parsed: ParsedSource,
    filename: str,
    namespace: str,
) -> Optional[Declaration]:
    """Build a Declaration from a call expression, or None if it doesn't match."""
    accessor = match_accessor(node, parsed, namespace)
    if accessor is None:
        return None

    line = node.start_point[0] + 1
    arguments = call_arguments(node)
    if not arguments:
        logger.debug("%s:%d: %s.%s() has no key argument", filename, line, namespace, accessor)
        return None

    key = _extract_key(arguments[0], parsed)
    if not key:
        logger.debug(
            "%s:%d: %s.%s() key is not a literal, template or identifier",
            filename, line, namespace, accessor,
        )
        return None

    args = [classify_argument(arg, parsed)[1] for arg in arguments[1:]]

    return Declaration(
        key=key,
        kind=kind_for_accessor(accessor),
        accessor=accessor,
        args=args,
        comment=find_comment(parsed.comments, key),
        file=filename,
        line=line,
    )


def _extract_key(node, parsed: ParsedSource) -> Optional[str]:
    """Variable name from the first call argument."""
    shape, value = classify_argument(node, parsed)
    if shape not in KEY_SHAPES:
        return None
    if isinstance(value, bool) or value is None:
        return None
    return str(value)
