"""Target AST: the Luau-side tree produced by the translator.

Every node is a frozen pydantic model carrying a literal ``kind`` tag, so a
whole tree can be dumped to JSON and validated back through the ``LuauNode``
discriminated union. Nodes own their children exclusively; a translated tree
never shares subtrees and never changes after construction.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class LuauType(BaseModel):
    """A destination type name plus reference metadata.

    Reference-ness and mutability are structural flags; they are never
    folded into ``type_name``.
    """

    model_config = ConfigDict(frozen=True)

    type_name: str
    is_ref: bool = False
    is_mut: bool = False


class LuauParam(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    typ: LuauType


class LuauNodeBase(BaseModel):
    model_config = ConfigDict(frozen=True)


class Value(LuauNodeBase):
    """Literal text: a number, boolean, quoted string or a plain name."""

    kind: Literal["Value"] = "Value"
    text: str


class Ref(LuauNodeBase):
    kind: Literal["Ref"] = "Ref"
    name: str
    mutable: bool = False


class Deref(LuauNodeBase):
    kind: Literal["Deref"] = "Deref"
    expr: LuauNode


class Block(LuauNodeBase):
    kind: Literal["Block"] = "Block"
    statements: list[LuauNode] = []


class Function(LuauNodeBase):
    kind: Literal["Function"] = "Function"
    name: str
    params: list[LuauParam] = []
    ret_type: Optional[LuauType] = None
    body: Block


class Let(LuauNodeBase):
    kind: Literal["Let"] = "Let"
    name: str
    expr: LuauNode


class Assign(LuauNodeBase):
    kind: Literal["Assign"] = "Assign"
    name: str
    expr: LuauNode


class Call(LuauNodeBase):
    kind: Literal["Call"] = "Call"
    func: str
    args: list[LuauNode] = []


class BinaryOp(LuauNodeBase):
    """Binary operation; ``op`` keeps the source spelling verbatim."""

    kind: Literal["BinaryOp"] = "BinaryOp"
    op: str
    left: LuauNode
    right: LuauNode


class If(LuauNodeBase):
    """Conditional. ``else_branch`` is another ``If`` (else-if), a ``Block``
    (plain else) or ``None``."""

    kind: Literal["If"] = "If"
    condition: LuauNode
    then_branch: Block
    else_branch: Optional[Union[If, Block]] = None


class For(LuauNodeBase):
    kind: Literal["For"] = "For"
    vars: list[str]
    iter: LuauNode
    body: Block


class While(LuauNodeBase):
    kind: Literal["While"] = "While"
    condition: LuauNode
    body: Block


class UnaryOp(LuauNodeBase):
    """Prefix operator other than dereference; ``op`` keeps the source spelling."""

    kind: Literal["UnaryOp"] = "UnaryOp"
    op: str
    operand: LuauNode


class Break(LuauNodeBase):
    kind: Literal["Break"] = "Break"


class Continue(LuauNodeBase):
    kind: Literal["Continue"] = "Continue"


class Range(LuauNodeBase):
    kind: Literal["Range"] = "Range"
    start: Optional[LuauNode] = None
    end: Optional[LuauNode] = None
    inclusive: bool = False


class Return(LuauNodeBase):
    kind: Literal["Return"] = "Return"
    value: Optional[LuauNode] = None


class Array(LuauNodeBase):
    kind: Literal["Array"] = "Array"
    elements: list[LuauNode] = []


LuauNode = Annotated[
    Union[
        Function,
        Let,
        Assign,
        Call,
        BinaryOp,
        UnaryOp,
        If,
        For,
        While,
        Range,
        Return,
        Break,
        Continue,
        Ref,
        Deref,
        Array,
        Value,
        Block,
    ],
    Field(discriminator="kind"),
]

for _model in (
    Deref,
    Block,
    Function,
    Let,
    Assign,
    Call,
    BinaryOp,
    UnaryOp,
    If,
    For,
    While,
    Range,
    Return,
    Array,
):
    _model.model_rebuild()
