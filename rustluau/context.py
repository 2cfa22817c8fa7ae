"""Binding Context: scope-local name to type table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .luau_ast import LuauType


@dataclass
class Context:
    """Name → LuauType bindings for one scope.

    Rebinding a name overwrites it silently. ``fork`` hands a nested scope
    its own copy; whatever the nested scope binds is dropped with the fork.
    """

    bindings: dict[str, LuauType] = field(default_factory=dict)

    def add_binding(self, name: str, typ: LuauType) -> None:
        self.bindings[name] = typ

    def get_binding(self, name: str) -> Optional[LuauType]:
        return self.bindings.get(name)

    def fork(self) -> Context:
        # LuauType is frozen, so a shallow copy is fully independent.
        return Context(bindings=dict(self.bindings))
