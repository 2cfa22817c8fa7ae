"""Translator -- tree-sitter Rust AST -> Luau AST."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from . import constants
from .context import Context
from .errors import MalformedInput, UnsupportedConstruct
from .luau_ast import (
    Array,
    Assign,
    BinaryOp,
    Block,
    Break,
    Call,
    Continue,
    Deref,
    For,
    Function,
    If,
    Let,
    LuauNode,
    LuauParam,
    LuauType,
    Range,
    Ref,
    Return,
    UnaryOp,
    Value,
    While,
)
from .translate_types import DEFAULT_CONFIG, TranslatorConfig

logger = logging.getLogger(__name__)


def map_type_name(name: str) -> str:
    """Map a Rust type name to its Luau name; unknown names pass through."""
    return constants.TYPE_NAME_MAP.get(name, name)


def canonical_integer(text: str) -> str:
    """Base-10 digits of a Rust integer literal, suffix and separators dropped."""
    digits = text.replace("_", "")
    for suffix in constants.INTEGER_SUFFIXES:
        if digits.endswith(suffix):
            digits = digits[: -len(suffix)]
            break
    if digits[:2].lower() in ("0x", "0o", "0b"):
        return str(int(digits, 0))
    for suffix in constants.FLOAT_SUFFIXES:
        if digits.endswith(suffix):
            digits = digits[: -len(suffix)]
            break
    return str(int(digits, 10))


def canonical_float(text: str) -> str:
    digits = text.replace("_", "")
    for suffix in constants.FLOAT_SUFFIXES:
        if digits.endswith(suffix):
            digits = digits[: -len(suffix)]
            break
    if digits.endswith("."):
        digits += "0"
    return digits


class Translator:
    """Translates a Rust tree-sitter AST into the Luau target AST.

    The translator keeps no state between calls: the binding Context is
    created per function and passed down every recursive call, forked on
    entry to each nested scope.
    """

    def __init__(self, config: TranslatorConfig = DEFAULT_CONFIG):
        self._config = config
        self._STMT_DISPATCH: dict[str, Callable] = {
            "let_declaration": self._translate_let,
            "expression_statement": self._translate_expression_statement,
            "function_item": self._translate_nested_function,
        }
        self._EXPR_DISPATCH: dict[str, Callable] = {
            "identifier": self._translate_identifier,
            "integer_literal": self._translate_integer_literal,
            "float_literal": self._translate_float_literal,
            "boolean_literal": self._translate_const_literal,
            "string_literal": self._translate_const_literal,
            "raw_string_literal": self._translate_const_literal,
            "char_literal": self._translate_const_literal,
            "binary_expression": self._translate_binop,
            "unary_expression": self._translate_unary,
            "parenthesized_expression": self._translate_paren,
            "call_expression": self._translate_call,
            "reference_expression": self._translate_reference,
            "array_expression": self._translate_array,
            "range_expression": self._translate_range,
            "block": self.translate_block,
            "if_expression": self._translate_if,
            "for_expression": self._translate_for,
            "while_expression": self._translate_while,
            "loop_expression": self._translate_loop,
            "return_expression": self._translate_return,
            "break_expression": self._translate_break,
            "continue_expression": self._translate_continue,
            "assignment_expression": self._translate_assignment,
            "compound_assignment_expr": self._translate_compound_assignment,
        }

    # -- helpers -----------------------------------------------------------

    @staticmethod
    def _node_text(node) -> str:
        return node.text.decode("utf-8")

    @staticmethod
    def _named(node) -> list:
        return [
            c for c in node.named_children if c.type not in constants.COMMENT_TYPES
        ]

    def _required_field(self, node, field: str):
        child = node.child_by_field_name(field)
        if child is None:
            raise MalformedInput.at(node, f"{node.type} is missing its '{field}'")
        return child

    def _unsupported(self, node, message: str) -> UnsupportedConstruct:
        logger.debug("Unsupported %s: %s", node.type, message)
        return UnsupportedConstruct.at(node, message)

    def _placeholder(self) -> LuauType:
        return LuauType(type_name=self._config.placeholder_type)

    def _reject_label(self, node):
        if any(c.type == "label" for c in node.children):
            raise self._unsupported(node, "labeled loops and blocks")

    # -- entry points ------------------------------------------------------

    def translate(self, tree) -> list[Function]:
        """Translate every item of a parsed source file."""
        return [self.translate_item(item) for item in self._named(tree.root_node)]

    def translate_item(self, node) -> Function:
        if node.type != "function_item":
            raise self._unsupported(node, f"item kind '{node.type}'")
        return self.translate_function(node)

    def translate_function(self, node) -> Function:
        name = self._node_text(self._required_field(node, "name"))
        params_node = self._required_field(node, "parameters")
        body_node = self._required_field(node, "body")

        params = [self._translate_param(child) for child in self._named(params_node)]
        ret_node = node.child_by_field_name("return_type")
        ret_type = self._translate_return_type(ret_node) if ret_node else None
        logger.debug("Translating function %s (%d params)", name, len(params))

        ctx = Context()
        for param in params:
            ctx.add_binding(param.name, param.typ)
        body = self.translate_block(body_node, ctx, tail=True)
        return Function(name=name, params=params, ret_type=ret_type, body=body)

    def translate_block(self, node, ctx: Context, tail: bool = False) -> Block:
        """Translate a ``{ ... }`` block in a fork of *ctx*.

        With *tail* set the block sits in return position and its trailing
        bare expression becomes an explicit ``Return``.
        """
        scope = ctx.fork()
        items = [c for c in self._named(node) if c.type != "empty_statement"]
        statements: list[LuauNode] = []
        for i, child in enumerate(items):
            is_last = i == len(items) - 1
            stmt = self.translate_statement(child, scope, tail=tail and is_last)
            if stmt is not None:
                statements.append(stmt)
        return Block(statements=statements)

    def translate_statement(
        self, node, ctx: Context, tail: bool = False
    ) -> Optional[LuauNode]:
        if node.type in constants.SKIPPED_STATEMENT_TYPES:
            return None
        if tail:
            expr = self._bare_tail_expression(node)
            if expr is not None:
                return self._translate_tail(expr, ctx)
        handler = self._STMT_DISPATCH.get(node.type)
        if handler:
            return handler(node, ctx)
        return self.translate_expression(node, ctx)

    def translate_expression(self, node, ctx: Context) -> LuauNode:
        handler = self._EXPR_DISPATCH.get(node.type)
        if handler is None:
            raise self._unsupported(node, f"expression kind '{node.type}'")
        return handler(node, ctx)

    # -- implicit return ---------------------------------------------------

    def _bare_tail_expression(self, node):
        """The expression of *node* if it is not terminated by ``;``."""
        if node.type == "expression_statement":
            if any(c.type == ";" for c in node.children):
                return None
            named = self._named(node)
            return named[0] if named else None
        if node.type in self._EXPR_DISPATCH:
            return node
        return None

    def _translate_tail(self, expr, ctx: Context) -> LuauNode:
        if expr.type == "if_expression":
            return self._translate_if(expr, ctx, tail=True)
        if expr.type == "block":
            return self.translate_block(expr, ctx, tail=True)
        if (
            expr.type in constants.CONTROL_FLOW_TYPES
            or expr.type in constants.UNIT_EXPRESSION_TYPES
        ):
            return self.translate_expression(expr, ctx)
        return Return(value=self.translate_expression(expr, ctx))

    # -- types -------------------------------------------------------------

    def map_type(self, type_node) -> LuauType:
        if type_node.type == "reference_type":
            target = self.map_type(self._required_field(type_node, "type"))
            mutable = any(c.type == "mutable_specifier" for c in type_node.children)
            return LuauType(type_name=target.type_name, is_ref=True, is_mut=mutable)
        if type_node.type in constants.PATH_TYPE_NODES:
            return LuauType(type_name=map_type_name(self._path_type_name(type_node)))
        raise self._unsupported(type_node, f"non-path type '{type_node.type}'")

    def _path_type_name(self, type_node) -> str:
        if type_node.type == "scoped_type_identifier":
            return self._node_text(self._required_field(type_node, "name"))
        if type_node.type == "generic_type":
            return self._path_type_name(self._required_field(type_node, "type"))
        if type_node.type not in constants.PATH_TYPE_NODES:
            raise self._unsupported(type_node, f"non-path type '{type_node.type}'")
        return self._node_text(type_node)

    def _translate_return_type(self, type_node) -> Optional[LuauType]:
        if type_node.type == constants.UNIT_TYPE_NODE:
            return None
        return self.map_type(type_node)

    # -- parameters and bindings -------------------------------------------

    def _translate_param(self, node) -> LuauParam:
        if node.type in constants.UNSUPPORTED_PARAMETER_TYPES:
            raise self._unsupported(node, f"parameter kind '{node.type}'")
        if node.type != "parameter":
            # `fn f(x)` parses the bare name as a type with no binding
            raise MalformedInput.at(node, "parameter without a type annotation")
        pattern = node.child_by_field_name("pattern")
        type_node = node.child_by_field_name("type")
        if pattern is None or type_node is None:
            raise MalformedInput.at(node, "parameter without a type annotation")
        return LuauParam(name=self._binding_name(pattern), typ=self.map_type(type_node))

    def _binding_name(self, pattern) -> str:
        """Extract the identifier from a binding pattern, handling ``mut``."""
        if pattern.type == "identifier":
            return self._node_text(pattern)
        if pattern.type == "mut_pattern":
            inner = [c for c in self._named(pattern) if c.type != "mutable_specifier"]
            if len(inner) == 1:
                return self._binding_name(inner[0])
        raise self._unsupported(pattern, "binding pattern must be a simple name")

    # -- let declaration ---------------------------------------------------

    def _translate_let(self, node, ctx: Context) -> Let:
        if node.child_by_field_name("alternative") is not None:
            raise self._unsupported(node, "let-else")
        name = self._binding_name(self._required_field(node, "pattern"))
        value_node = node.child_by_field_name("value")
        type_node = node.child_by_field_name("type")

        if value_node is not None:
            expr = self.translate_expression(value_node, ctx)
        else:
            expr = Value(text=self._config.uninitialized_value)
        typ = (
            self.map_type(type_node)
            if type_node is not None
            else self._infer_binding_type(value_node, ctx)
        )
        ctx.add_binding(name, typ)
        return Let(name=name, expr=expr)

    def _infer_binding_type(self, value_node, ctx: Context) -> LuauType:
        """Read a binding's type off a trivial initializer, else the placeholder."""
        if value_node is None:
            return self._placeholder()
        ntype = value_node.type
        if ntype in constants.NUMERIC_LITERAL_TYPES:
            return LuauType(type_name=constants.NUMBER_TYPE)
        if ntype == "boolean_literal":
            return LuauType(type_name=constants.BOOLEAN_TYPE)
        if ntype in ("string_literal", "raw_string_literal"):
            return LuauType(type_name=constants.STRING_TYPE)
        if ntype == "parenthesized_expression":
            inner = self._named(value_node)
            return self._infer_binding_type(inner[0] if inner else None, ctx)
        if ntype == "identifier":
            return ctx.get_binding(self._node_text(value_node)) or self._placeholder()
        if ntype == "reference_expression":
            target = value_node.child_by_field_name("value")
            bound = (
                ctx.get_binding(self._node_text(target))
                if target is not None and target.type == "identifier"
                else None
            )
            mutable = any(c.type == "mutable_specifier" for c in value_node.children)
            return LuauType(
                type_name=(bound or self._placeholder()).type_name,
                is_ref=True,
                is_mut=mutable,
            )
        if ntype == "unary_expression":
            op = value_node.children[0].type
            operand = self._named(value_node)[-1]
            if op in (constants.NEGATE_OPERATOR, constants.NOT_OPERATOR):
                return self._infer_binding_type(operand, ctx)
            if op == constants.DEREF_OPERATOR and operand.type == "identifier":
                bound = ctx.get_binding(self._node_text(operand))
                if bound is not None:
                    return LuauType(type_name=bound.type_name)
        return self._placeholder()

    # -- statements --------------------------------------------------------

    def _translate_expression_statement(self, node, ctx: Context) -> LuauNode:
        named = self._named(node)
        if not named:
            raise MalformedInput.at(node, "empty expression statement")
        return self.translate_expression(named[0], ctx)

    def _translate_nested_function(self, node, ctx: Context) -> Function:
        # Nested fn items cannot capture locals; they start from a fresh Context.
        return self.translate_function(node)

    # -- literals and names ------------------------------------------------

    def _translate_identifier(self, node, ctx: Context) -> Value:
        return Value(text=self._node_text(node))

    def _translate_const_literal(self, node, ctx: Context) -> Value:
        return Value(text=self._node_text(node))

    def _translate_integer_literal(self, node, ctx: Context) -> Value:
        try:
            return Value(text=canonical_integer(self._node_text(node)))
        except ValueError as exc:
            raise MalformedInput.at(node, f"bad integer literal: {exc}") from exc

    def _translate_float_literal(self, node, ctx: Context) -> Value:
        return Value(text=canonical_float(self._node_text(node)))

    # -- operators ---------------------------------------------------------

    def _translate_binop(self, node, ctx: Context) -> BinaryOp:
        left = self._required_field(node, "left")
        right = self._required_field(node, "right")
        op_node = node.child_by_field_name("operator") or node.children[1]
        op = self._node_text(op_node)
        if op not in constants.BINARY_OPERATORS:
            raise self._unsupported(node, f"binary operator '{op}'")
        return BinaryOp(
            op=op,
            left=self.translate_expression(left, ctx),
            right=self.translate_expression(right, ctx),
        )

    def _translate_unary(self, node, ctx: Context) -> LuauNode:
        op = node.children[0].type
        operand = self._named(node)[-1]
        if op == constants.DEREF_OPERATOR:
            return Deref(expr=self.translate_expression(operand, ctx))
        if op == constants.NEGATE_OPERATOR and operand.type in constants.NUMERIC_LITERAL_TYPES:
            literal = self.translate_expression(operand, ctx)
            return Value(text=f"-{literal.text}")
        if op in (constants.NEGATE_OPERATOR, constants.NOT_OPERATOR):
            return UnaryOp(op=op, operand=self.translate_expression(operand, ctx))
        raise self._unsupported(node, f"unary operator '{op}'")

    def _translate_paren(self, node, ctx: Context) -> LuauNode:
        named = self._named(node)
        if not named:
            raise MalformedInput.at(node, "empty parentheses")
        return self.translate_expression(named[0], ctx)

    # -- calls -------------------------------------------------------------

    def _translate_call(self, node, ctx: Context) -> Call:
        func_node = self._required_field(node, "function")
        args_node = self._required_field(node, "arguments")
        if func_node.type != "identifier":
            raise self._unsupported(
                func_node, f"call target must be a simple name, got '{func_node.type}'"
            )
        return Call(
            func=self._node_text(func_node),
            args=[self.translate_expression(a, ctx) for a in self._named(args_node)],
        )

    # -- reference / dereference -------------------------------------------

    def _translate_reference(self, node, ctx: Context) -> Ref:
        if any(c.type == "raw" for c in node.children):
            raise self._unsupported(node, "raw borrow")
        target = self._required_field(node, "value")
        if target.type != "identifier":
            raise self._unsupported(node, "only a simple name can be borrowed")
        mutable = any(c.type == "mutable_specifier" for c in node.children)
        return Ref(name=self._node_text(target), mutable=mutable)

    # -- arrays and ranges -------------------------------------------------

    def _translate_array(self, node, ctx: Context) -> Array:
        if node.child_by_field_name("length") is not None:
            raise self._unsupported(node, "repeat array '[value; length]'")
        return Array(
            elements=[self.translate_expression(c, ctx) for c in self._named(node)]
        )

    def _translate_range(self, node, ctx: Context) -> Range:
        op_index = next(
            (
                i
                for i, c in enumerate(node.children)
                if c.type in constants.RANGE_OPERATORS
            ),
            None,
        )
        if op_index is None:
            raise MalformedInput.at(node, "range without a range operator")
        before = [
            c
            for c in node.children[:op_index]
            if c.is_named and c.type not in constants.COMMENT_TYPES
        ]
        after = [
            c
            for c in node.children[op_index + 1 :]
            if c.is_named and c.type not in constants.COMMENT_TYPES
        ]
        inclusive = node.children[op_index].type in constants.INCLUSIVE_RANGE_OPERATORS
        if inclusive and not after:
            raise MalformedInput.at(node, "inclusive range without an end")
        return Range(
            start=self.translate_expression(before[0], ctx) if before else None,
            end=self.translate_expression(after[0], ctx) if after else None,
            inclusive=inclusive,
        )

    # -- if expression -----------------------------------------------------

    def _translate_if(self, node, ctx: Context, tail: bool = False) -> If:
        cond_node = self._required_field(node, "condition")
        if cond_node.type in ("let_condition", "let_chain"):
            raise self._unsupported(node, "if let")
        alt_node = node.child_by_field_name("alternative")
        return If(
            condition=self.translate_expression(cond_node, ctx),
            then_branch=self.translate_block(
                self._required_field(node, "consequence"), ctx, tail=tail
            ),
            else_branch=self._translate_else(alt_node, ctx, tail) if alt_node else None,
        )

    def _translate_else(self, node, ctx: Context, tail: bool):
        """An else clause holds either a plain block or a chained ``if``."""
        named = self._named(node)
        inner = named[0] if named else None
        if inner is not None and inner.type == "if_expression":
            return self._translate_if(inner, ctx, tail=tail)
        if inner is not None and inner.type == "block":
            return self.translate_block(inner, ctx, tail=tail)
        raise MalformedInput.at(node, "else clause without a block or if")

    # -- loops -------------------------------------------------------------

    def _translate_for(self, node, ctx: Context) -> For:
        self._reject_label(node)
        var_name = self._binding_name(self._required_field(node, "pattern"))
        iterable = self.translate_expression(self._required_field(node, "value"), ctx)
        body_node = self._required_field(node, "body")

        scope = ctx.fork()
        var_type = (
            LuauType(type_name=constants.NUMBER_TYPE)
            if isinstance(iterable, Range)
            else self._placeholder()
        )
        scope.add_binding(var_name, var_type)
        return For(
            vars=[var_name], iter=iterable, body=self.translate_block(body_node, scope)
        )

    def _translate_while(self, node, ctx: Context) -> While:
        self._reject_label(node)
        cond_node = self._required_field(node, "condition")
        if cond_node.type in ("let_condition", "let_chain"):
            raise self._unsupported(node, "while let")
        return While(
            condition=self.translate_expression(cond_node, ctx),
            body=self.translate_block(self._required_field(node, "body"), ctx),
        )

    def _translate_loop(self, node, ctx: Context) -> While:
        """Lower ``loop { ... }`` to ``while true``."""
        self._reject_label(node)
        return While(
            condition=Value(text=constants.LOOP_FOREVER_CONDITION),
            body=self.translate_block(self._required_field(node, "body"), ctx),
        )

    # -- return / assignment -----------------------------------------------

    def _translate_return(self, node, ctx: Context) -> Return:
        named = self._named(node)
        return Return(value=self.translate_expression(named[0], ctx) if named else None)

    def _reject_loop_exit_extras(self, node, keyword: str):
        if any(c.type == "label" for c in node.children):
            raise self._unsupported(node, f"labeled {keyword}")
        if self._named(node):
            raise self._unsupported(node, f"{keyword} with a value")

    def _translate_break(self, node, ctx: Context) -> Break:
        self._reject_loop_exit_extras(node, "break")
        return Break()

    def _translate_continue(self, node, ctx: Context) -> Continue:
        self._reject_loop_exit_extras(node, "continue")
        return Continue()

    def _assignment_target(self, node) -> str:
        left = self._required_field(node, "left")
        if left.type != "identifier":
            raise self._unsupported(node, "assignment target must be a simple name")
        return self._node_text(left)

    def _translate_assignment(self, node, ctx: Context) -> Assign:
        name = self._assignment_target(node)
        right = self._required_field(node, "right")
        return Assign(name=name, expr=self.translate_expression(right, ctx))

    def _translate_compound_assignment(self, node, ctx: Context) -> Assign:
        name = self._assignment_target(node)
        right = self._required_field(node, "right")
        op_text = self._node_text(self._required_field(node, "operator"))
        op = op_text[:-1] if op_text.endswith("=") else op_text
        if op not in constants.BINARY_OPERATORS:
            raise self._unsupported(node, f"compound operator '{op_text}'")
        return Assign(
            name=name,
            expr=BinaryOp(
                op=op,
                left=Value(text=name),
                right=self.translate_expression(right, ctx),
            ),
        )
