"""Call-site classifier: recognize EnvParse calls and normalize their arguments."""

from enum import Enum
from typing import Any, Optional

from .adapter import ParsedSource
from .templates import cook_escapes, placeholder, reconstruct_template


# Value recorded for arguments computed by a function call
FUNCTION_SENTINEL = "_function_"


class ArgShape(Enum):
    """Closed set of call argument shapes."""
    LITERAL = "literal"
    ARRAY = "array"
    TEMPLATE = "template"
    IDENTIFIER = "identifier"
    CALL = "call"
    UNSUPPORTED = "unsupported"


IDENTIFIER_NODE_TYPES = ("identifier", "undefined")


def match_accessor(node, parsed: ParsedSource, namespace: str) -> Optional[str]:
    """Return the accessed member name if `node` calls `<namespace>.<member>(...)`.

    The namespace may be a bare identifier (EnvParse.envInt) or the last
    property of a member chain (saddlebag.EnvParse.envInt).
    """
    callee = node.child_by_field_name("function")
    if callee is None or callee.type != "member_expression":
        return None

    obj = callee.child_by_field_name("object")
    if obj is None:
        return None

    if obj.type == "identifier":
        name = parsed.text(obj)
    elif obj.type == "member_expression":
        prop = obj.child_by_field_name("property")
        name = parsed.text(prop) if prop is not None else None
    else:
        return None

    if name != namespace:
        return None

    member = callee.child_by_field_name("property")
    if member is None:
        return None
    return parsed.text(member)


def call_arguments(node) -> list:
    """Argument nodes of a call, comments excluded."""
    arguments = node.child_by_field_name("arguments")
    # Tagged templates (EnvParse.envInt`X`) carry no argument list
    if arguments is None or arguments.type != "arguments":
        return []
    return [c for c in arguments.named_children if c.type != "comment"]


def classify_argument(node, parsed: ParsedSource) -> tuple[ArgShape, Any]:
    """Classify one argument node and produce its normalized value."""
    spec = parsed.spec

    if node.type in spec.literal_node_types or _is_signed_number(node):
        return ArgShape.LITERAL, literal_value(node, parsed)

    if node.type == "array":
        elements = [c for c in node.named_children if c.type != "comment"]
        return ArgShape.ARRAY, [
            literal_value(e, parsed) if e.type in spec.literal_node_types or _is_signed_number(e) else None
            for e in elements
        ]

    if node.type == spec.template_node_type:
        return ArgShape.TEMPLATE, reconstruct_template(
            node, parsed.source_bytes, spec.substitution_node_type
        )

    if node.type in IDENTIFIER_NODE_TYPES:
        return ArgShape.IDENTIFIER, placeholder(parsed.text(node))

    if node.type == spec.call_node_type:
        return ArgShape.CALL, FUNCTION_SENTINEL

    return ArgShape.UNSUPPORTED, _fallback_tag(node, parsed)


def literal_value(node, parsed: ParsedSource) -> Any:
    """Python value of a literal node."""
    category = parsed.spec.literal_node_types.get(node.type)
    text = parsed.text(node)

    if category == "string":
        return cook_escapes(text[1:-1])
    if category == "boolean":
        return node.type == "true"
    if category == "null":
        return None
    if category == "number":
        return _number_value(text)
    if _is_signed_number(node):
        operand = node.child_by_field_name("argument")
        value = _number_value(parsed.text(operand))
        negative = node.child_by_field_name("operator").type == "-"
        return -value if negative and not isinstance(value, str) else value
    return text


def _is_signed_number(node) -> bool:
    """-1 and +1 parse as unary expressions over a number."""
    if node.type != "unary_expression":
        return False
    operator = node.child_by_field_name("operator")
    operand = node.child_by_field_name("argument")
    return (
        operator is not None
        and operator.type in ("-", "+")
        and operand is not None
        and operand.type == "number"
    )


def _number_value(text: str):
    """Parse a numeric literal (decimal, hex, octal, binary, bigint, separators)."""
    text = text.replace("_", "")
    if text.endswith("n"):
        return int(text[:-1], 0)
    if text[:2].lower() in ("0x", "0o", "0b"):
        return int(text, 0)
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return text
    return int(value) if value.is_integer() else value


def _fallback_tag(node, parsed: ParsedSource) -> str:
    """Tag for argument shapes that are not analyzed: node type plus name if any."""
    name_node = node.child_by_field_name("property")
    if name_node is None:
        name_node = node.child_by_field_name("name")
    if name_node is not None:
        return f"{node.type}_{parsed.text(name_node)}"
    return node.type
