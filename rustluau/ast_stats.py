"""Pure functions for walking and summarising translated Luau trees."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Iterator

from pydantic import BaseModel

from rustluau.luau_ast import LuauNodeBase


def _children(node: BaseModel) -> Iterator[LuauNodeBase]:
    for field_name in type(node).model_fields:
        value = getattr(node, field_name)
        items = value if isinstance(value, list) else [value]
        yield from (item for item in items if isinstance(item, LuauNodeBase))


def iter_nodes(roots: Iterable[LuauNodeBase]) -> Iterator[LuauNodeBase]:
    """Yield every node of the given trees in pre-order."""
    stack = list(reversed(list(roots)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(_children(node))))


def count_node_kinds(roots: Iterable[LuauNodeBase]) -> dict[str, int]:
    """Return a frequency map of node kinds across the given trees.

    Args:
        roots: Top-level nodes, typically the translated functions.

    Returns:
        A dict mapping node kind strings to their occurrence counts.
        Empty dict for an empty input.
    """
    return dict(Counter(node.kind for node in iter_nodes(roots)))
