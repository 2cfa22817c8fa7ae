"""Composable API functions for the Rust → Luau translation pipeline.

Each function corresponds to a CLI workflow but is callable programmatically
without argparse.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from tree_sitter import Node

from .ast_stats import count_node_kinds
from .luau_ast import Function
from .parser import Parser, TreeSitterParserFactory
from .translate_types import DEFAULT_CONFIG, TranslatorConfig
from .translator import Translator
from . import constants

logger = logging.getLogger(__name__)


def parse_source(source: str):
    """Parse Rust source text into a tree-sitter tree.

    Raises:
        MalformedInput: If the source contains syntax errors.
    """
    return Parser(TreeSitterParserFactory()).parse(source, constants.SOURCE_LANGUAGE)


def translate_source(
    source: str, config: TranslatorConfig = DEFAULT_CONFIG
) -> list[Function]:
    """Parse and translate Rust source to Luau function trees.

    Args:
        source: The Rust source text.
        config: Translator configuration.

    Returns:
        One translated ``Function`` per top-level ``fn`` item, in source order.

    Raises:
        UnsupportedConstruct: The source uses a construct with no translation.
        MalformedInput: The source does not parse or breaks a structural
            assumption.
    """
    logger.info("Translating %d bytes of %s source", len(source), constants.SOURCE_LANGUAGE)
    tree = parse_source(source)
    return Translator(config).translate(tree)


def _find_function_node(node: Node, name: str) -> Optional[Node]:
    """Recursively walk the AST to find a ``fn`` item named *name*."""
    if node.type == "function_item":
        name_node = node.child_by_field_name("name")
        if name_node is not None and name_node.text.decode("utf-8") == name:
            return node

    return next(
        (
            found
            for child in node.children
            if (found := _find_function_node(child, name)) is not None
        ),
        None,
    )


def translate_function_source(
    source: str,
    function_name: str,
    config: TranslatorConfig = DEFAULT_CONFIG,
) -> Function:
    """Translate only the ``fn`` named *function_name*.

    Nested functions are found as well as top-level ones.

    Raises:
        ValueError: If no function with the given name is found.
    """
    logger.info("Translating function '%s'", function_name)
    tree = parse_source(source)
    match = _find_function_node(tree.root_node, function_name)
    if match is None:
        raise ValueError(f"Function '{function_name}' not found in source")
    return Translator(config).translate_function(match)


def dump_ast(source: str, function_name: str = "", indent: int = 2) -> str:
    """Translate source and return the target tree as JSON text.

    Args:
        source: The Rust source text.
        function_name: If non-empty, dump only this function.
        indent: JSON indentation.

    Returns:
        A JSON document: one object for a single function, else an array.
    """
    if function_name:
        return translate_function_source(source, function_name).model_dump_json(
            indent=indent
        )
    functions = translate_source(source)
    return json.dumps([fn.model_dump() for fn in functions], indent=indent)


def ast_stats(source: str) -> dict[str, int]:
    """Translate source and return node-kind frequency counts."""
    return count_node_kinds(translate_source(source))
