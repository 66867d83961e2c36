"""Parser package for extracting EnvParse declarations from source code."""

from .declarations import (
    AccessorKind,
    Declaration,
    ACCESSOR_KINDS,
    kind_for_accessor,
    is_required,
    type_label,
)
from .languages import LanguageSpec, LANGUAGE_REGISTRY, LANGUAGE_EXTENSIONS, language_for_path
from .adapter import Comment, ParsedSource, ParseError, parse_source
from .templates import reconstruct_template
from .comments import find_comment
from .classifier import ArgShape, FUNCTION_SENTINEL, classify_argument, match_accessor
from .extractor import DEFAULT_NAMESPACE, extract_declarations

__all__ = [
    "AccessorKind",
    "Declaration",
    "ACCESSOR_KINDS",
    "kind_for_accessor",
    "is_required",
    "type_label",
    "LanguageSpec",
    "LANGUAGE_REGISTRY",
    "LANGUAGE_EXTENSIONS",
    "language_for_path",
    "Comment",
    "ParsedSource",
    "ParseError",
    "parse_source",
    "reconstruct_template",
    "find_comment",
    "ArgShape",
    "FUNCTION_SENTINEL",
    "classify_argument",
    "match_accessor",
    "DEFAULT_NAMESPACE",
    "extract_declarations",
]
