"""Tree-Sitter Parsing Layer."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from . import constants
from .errors import MalformedInput, source_location_of

logger = logging.getLogger(__name__)


class ParserFactory(ABC):
    """Abstract factory for obtaining a language parser."""

    @abstractmethod
    def get_parser(self, language: str): ...


class TreeSitterParserFactory(ParserFactory):
    """Concrete factory that delegates to tree-sitter-language-pack."""

    def get_parser(self, language: str):
        import tree_sitter_language_pack as tslp

        return tslp.get_parser(language)


def _first_error_node(node):
    if node.type == "ERROR" or node.is_missing:
        return node
    return next(
        (
            found
            for child in node.children
            if child.has_error and (found := _first_error_node(child)) is not None
        ),
        None,
    )


class Parser:
    """Thin wrapper around a parser factory.

    A tree that contains syntax errors is rejected here so the translator
    only ever sees well-formed input.
    """

    def __init__(self, parser_factory: ParserFactory):
        self._factory = parser_factory

    def parse(self, source: str, language: str = constants.SOURCE_LANGUAGE):
        parser = self._factory.get_parser(language)
        tree = parser.parse(source.encode("utf-8"))
        if tree.root_node.has_error:
            bad = _first_error_node(tree.root_node) or tree.root_node
            logger.debug("Syntax error in %s source at %s", language, bad.start_point)
            raise MalformedInput(
                f"{language} source does not parse",
                node_type=bad.type,
                location=source_location_of(bad),
            )
        return tree
