"""Named node kinds, operators and type tables used by the translator."""

from __future__ import annotations

SOURCE_LANGUAGE = "rust"

# ── type table ──────────────────────────────────────────────────

NUMBER_TYPE = "number"
BOOLEAN_TYPE = "boolean"
STRING_TYPE = "string"

NUMERIC_SOURCE_TYPES: frozenset[str] = frozenset(
    {
        "i8",
        "i16",
        "i32",
        "i64",
        "i128",
        "isize",
        "u8",
        "u16",
        "u32",
        "u64",
        "u128",
        "usize",
        "f32",
        "f64",
    }
)

TYPE_NAME_MAP: dict[str, str] = {
    **{name: NUMBER_TYPE for name in NUMERIC_SOURCE_TYPES},
    "bool": BOOLEAN_TYPE,
    "String": STRING_TYPE,
    "str": STRING_TYPE,
}

# ── operators ───────────────────────────────────────────────────

BINARY_OPERATORS: frozenset[str] = frozenset(
    {
        "+",
        "-",
        "*",
        "/",
        "%",
        "&&",
        "||",
        "^",
        "&",
        "|",
        "<<",
        ">>",
        "==",
        "<",
        "<=",
        "!=",
        ">=",
        ">",
    }
)

INCLUSIVE_RANGE_OPERATORS: frozenset[str] = frozenset({"..=", "..."})
RANGE_OPERATORS: frozenset[str] = frozenset({".."}) | INCLUSIVE_RANGE_OPERATORS

DEREF_OPERATOR = "*"
NEGATE_OPERATOR = "-"
NOT_OPERATOR = "!"

# ── literals ────────────────────────────────────────────────────

TRUE_LITERAL = "true"
LOOP_FOREVER_CONDITION = TRUE_LITERAL

INTEGER_SUFFIXES: tuple[str, ...] = (
    "i128",
    "u128",
    "isize",
    "usize",
    "i64",
    "u64",
    "i32",
    "u32",
    "i16",
    "u16",
    "i8",
    "u8",
)
FLOAT_SUFFIXES: tuple[str, ...] = ("f32", "f64")

# ── tree-sitter node groupings ──────────────────────────────────

COMMENT_TYPES: frozenset[str] = frozenset({"line_comment", "block_comment"})
SKIPPED_STATEMENT_TYPES: frozenset[str] = COMMENT_TYPES | frozenset(
    {"empty_statement"}
)

NUMERIC_LITERAL_TYPES: frozenset[str] = frozenset(
    {"integer_literal", "float_literal"}
)

# Trailing expressions of these kinds are never wrapped in an implicit return.
CONTROL_FLOW_TYPES: frozenset[str] = frozenset(
    {"if_expression", "for_expression", "while_expression", "loop_expression"}
)
# Unit-valued expressions; in return position they stay bare statements.
UNIT_EXPRESSION_TYPES: frozenset[str] = frozenset(
    {
        "return_expression",
        "break_expression",
        "continue_expression",
        "assignment_expression",
        "compound_assignment_expr",
    }
)

PATH_TYPE_NODES: frozenset[str] = frozenset(
    {"primitive_type", "type_identifier", "scoped_type_identifier", "generic_type"}
)
UNIT_TYPE_NODE = "unit_type"

UNSUPPORTED_PARAMETER_TYPES: frozenset[str] = frozenset(
    {"self_parameter", "variadic_parameter", "attribute_item"}
)
