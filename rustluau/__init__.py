"""Rust → Luau syntax-tree translator."""

from .api import (  # noqa: F401
    ast_stats,
    dump_ast,
    parse_source,
    translate_function_source,
    translate_source,
)
from .context import Context  # noqa: F401
from .errors import MalformedInput, TranslationError, UnsupportedConstruct  # noqa: F401
from .translator import Translator, map_type_name  # noqa: F401
