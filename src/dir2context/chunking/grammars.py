"""
Grammar registry and per-grammar node categories.

Function-like constructs look different in every tree-sitter grammar. The
differences are kept here as data so supporting a new language means adding
a :class:`NodeCategories` entry and an extension mapping, not new code paths
in the classifier.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from tree_sitter import Language, Parser  # type: ignore[import]

from ..logger import get_logger

log = get_logger(__name__)


class GrammarUnavailableError(RuntimeError):
    """Raised when a registered grammar cannot be loaded at runtime."""


COMMENT_TYPES: FrozenSet[str] = frozenset(
    {"comment", "line_comment", "block_comment", "documentation_comment"}
)

# Bodies that hold a sequence of statements or members. A comment found
# before one of their children belongs to that child alone.
CONTAINER_TYPES: FrozenSet[str] = frozenset(
    {
        "program",
        "module",
        "block",
        "statement_block",
        "class_body",
        "interface_body",
        "enum_body",
        "constructor_body",
        "switch_body",
        "object",
        "dictionary",
    }
)


@dataclass(frozen=True)
class NodeCategories:
    """Node-type labels the classifier needs for one grammar."""

    function_types: FrozenSet[str]
    method_types: FrozenSet[str] = frozenset()
    constructor_types: FrozenSet[str] = frozenset()
    # node type -> child types that carry the unit's own name
    name_children: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    # forms whose name usually lives on the enclosing binding
    anonymous_types: FrozenSet[str] = frozenset()
    # binding parent type -> child types that carry the bound name
    binding_parents: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    comment_types: FrozenSet[str] = COMMENT_TYPES
    container_types: FrozenSet[str] = CONTAINER_TYPES
    parameter_containers: FrozenSet[str] = frozenset(
        {"formal_parameters", "parameter_list", "parameters"}
    )
    parameter_types: FrozenSet[str] = frozenset(
        {"formal_parameter", "parameter", "identifier"}
    )
    static_types: FrozenSet[str] = frozenset({"static"})
    modifier_types: FrozenSet[str] = frozenset({"modifier", "modifiers"})
    accessor_tokens: FrozenSet[str] = frozenset({"get", "set"})


_ECMASCRIPT_BINDINGS: Mapping[str, Tuple[str, ...]] = {
    "variable_declarator": ("identifier",),
    "assignment_expression": ("identifier", "member_expression"),
    "pair": ("property_identifier", "string"),
    "field_definition": ("property_identifier", "private_property_identifier"),
    "public_field_definition": ("property_identifier", "private_property_identifier"),
}

JAVASCRIPT = NodeCategories(
    function_types=frozenset(
        {
            "function_declaration",
            "generator_function_declaration",
            "function_expression",
            "arrow_function",
            "method_definition",
        }
    ),
    method_types=frozenset({"method_definition"}),
    name_children={
        "function_declaration": ("identifier",),
        "generator_function_declaration": ("identifier",),
        "function_expression": ("identifier",),
        "method_definition": ("property_identifier", "private_property_identifier"),
    },
    anonymous_types=frozenset({"arrow_function", "function_expression"}),
    binding_parents=_ECMASCRIPT_BINDINGS,
    parameter_types=frozenset(
        {
            "identifier",
            "assignment_pattern",
            "rest_pattern",
            "object_pattern",
            "array_pattern",
        }
    ),
)

TYPESCRIPT = NodeCategories(
    function_types=JAVASCRIPT.function_types,
    method_types=JAVASCRIPT.method_types,
    name_children=JAVASCRIPT.name_children,
    anonymous_types=JAVASCRIPT.anonymous_types,
    binding_parents=_ECMASCRIPT_BINDINGS,
    parameter_types=frozenset(
        {"identifier", "required_parameter", "optional_parameter", "rest_pattern"}
    ),
    modifier_types=frozenset({"modifier", "modifiers", "accessibility_modifier"}),
)

PYTHON = NodeCategories(
    function_types=frozenset({"function_definition", "lambda"}),
    name_children={"function_definition": ("identifier",)},
    anonymous_types=frozenset({"lambda"}),
    binding_parents={
        "assignment": ("identifier", "attribute"),
        "keyword_argument": ("identifier",),
        "pair": ("string",),
    },
    parameter_containers=frozenset({"parameters", "lambda_parameters"}),
    parameter_types=frozenset(
        {
            "identifier",
            "typed_parameter",
            "default_parameter",
            "typed_default_parameter",
            "list_splat_pattern",
            "dictionary_splat_pattern",
        }
    ),
)

JAVA = NodeCategories(
    function_types=frozenset(
        {"method_declaration", "constructor_declaration", "lambda_expression"}
    ),
    method_types=frozenset({"method_declaration"}),
    constructor_types=frozenset({"constructor_declaration"}),
    name_children={
        "method_declaration": ("identifier",),
        "constructor_declaration": ("identifier",),
    },
    anonymous_types=frozenset({"lambda_expression"}),
    binding_parents={
        "variable_declarator": ("identifier",),
        "assignment_expression": ("identifier", "field_access"),
    },
    parameter_containers=frozenset({"formal_parameters", "inferred_parameters"}),
    parameter_types=frozenset({"formal_parameter", "spread_parameter", "identifier"}),
)

GRAMMAR_CATEGORIES: Dict[str, NodeCategories] = {
    "javascript": JAVASCRIPT,
    "typescript": TYPESCRIPT,
    "tsx": TYPESCRIPT,
    "python": PYTHON,
    "java": JAVA,
}

EXTENSION_GRAMMARS: Dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".py": "python",
    ".java": "java",
}


def grammar_for_extension(extension: str) -> Optional[str]:
    """Map a file extension (with its leading dot) to a grammar id."""
    return EXTENSION_GRAMMARS.get(extension.lower())


def categories_for(grammar: str) -> NodeCategories:
    try:
        return GRAMMAR_CATEGORIES[grammar]
    except KeyError as exc:
        raise GrammarUnavailableError(f"No node categories for grammar: {grammar}") from exc


_LANGUAGE_CACHE: dict[str, Language] = {}


def load_language(grammar: str) -> Language:
    """
    Lazily load a prebuilt tree-sitter language.

    Grammars come from `tree_sitter_language_pack`, which bundles compiled
    parsers for every language in the registry.
    """
    if grammar in _LANGUAGE_CACHE:
        return _LANGUAGE_CACHE[grammar]

    try:
        from tree_sitter_language_pack import get_language  # type: ignore
    except ImportError as exc:
        raise GrammarUnavailableError(
            "tree_sitter_language_pack is required for prebuilt grammars. "
            "Install it via `pip install tree-sitter-language-pack`."
        ) from exc

    try:
        language = get_language(grammar)
    except Exception as exc:
        raise GrammarUnavailableError(f"Grammar failed to load: {grammar}") from exc
    _LANGUAGE_CACHE[grammar] = language
    log.debug("grammar_loaded", grammar=grammar)
    return language


def build_parser(grammar: str) -> Parser:
    return Parser(load_language(grammar))
