"""Declaration dataclass, accessor kinds and kind helpers."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class AccessorKind(str, Enum):
    """Accessor variants of the EnvParse namespace."""
    STRING = "string"
    STRING_REQUIRED = "string-required"
    STRING_OPTIONS = "string-options"
    STRING_OPTIONAL = "string-optional"
    STRING_LIST = "string-list"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    INTEGER_REQUIRED = "integer-required"
    UNKNOWN = "unknown"


# Accessor member name -> kind
ACCESSOR_KINDS = {
    "envString": AccessorKind.STRING,
    "envStringRequired": AccessorKind.STRING_REQUIRED,
    "envStringOptions": AccessorKind.STRING_OPTIONS,
    "envStringOptional": AccessorKind.STRING_OPTIONAL,
    "envStringList": AccessorKind.STRING_LIST,
    "envBool": AccessorKind.BOOLEAN,
    "envInt": AccessorKind.INTEGER,
    "envIntRequired": AccessorKind.INTEGER_REQUIRED,
}

# Kind -> rendered type label
TYPE_LABELS = {
    AccessorKind.STRING: "string",
    AccessorKind.STRING_REQUIRED: "string",
    AccessorKind.STRING_OPTIONS: "string",
    AccessorKind.STRING_OPTIONAL: "string",
    AccessorKind.STRING_LIST: "string[]",
    AccessorKind.BOOLEAN: "boolean",
    AccessorKind.INTEGER: "integer",
    AccessorKind.INTEGER_REQUIRED: "integer",
}

REQUIRED_KINDS = frozenset({AccessorKind.STRING_REQUIRED, AccessorKind.INTEGER_REQUIRED})

# Kinds whose first argument after the key is a default value
DEFAULTED_KINDS = frozenset({
    AccessorKind.STRING,
    AccessorKind.STRING_LIST,
    AccessorKind.BOOLEAN,
    AccessorKind.INTEGER,
})


@dataclass(frozen=True)
class Declaration:
    """One EnvParse accessor call found in source; immutable once built."""
    key: str                        # Variable name, may hold ${name} placeholders
    kind: AccessorKind              # Accessor variant
    accessor: str                   # Member name as written (e.g., "envInt")
    args: list[Any] = field(default_factory=list)  # Normalized arguments after the key
    comment: Optional[str] = None   # Correlated "KEY: ..." comment text
    file: str = ""                  # Source file the call was found in
    line: int = 0                   # Line of the call (1-indexed)

    @property
    def required(self) -> bool:
        return is_required(self.kind)

    @property
    def type_label(self) -> str:
        return type_label(self.kind, self.accessor)

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dict."""
        result = {
            "kind": self.kind.value,
            "accessor": self.accessor,
            "args": list(self.args),
        }
        if self.comment is not None:
            result["comment"] = self.comment
        result["file"] = self.file
        result["line"] = self.line
        return result


def kind_for_accessor(accessor: str) -> AccessorKind:
    """Map an accessor member name to its kind; unknown names map to UNKNOWN."""
    return ACCESSOR_KINDS.get(accessor, AccessorKind.UNKNOWN)


def is_required(kind: AccessorKind) -> bool:
    return kind in REQUIRED_KINDS


def type_label(kind: AccessorKind, accessor: str = "") -> str:
    """Type column text for a kind.

    Unknown kinds keep the accessor name visible:
    unknown (envFloat)
    """
    if kind is AccessorKind.UNKNOWN:
        return f"unknown ({accessor})"
    return TYPE_LABELS[kind]
