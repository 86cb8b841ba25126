"""
Tree-sitter parser adapter for JavaScript/TypeScript test files.

This module implements the ParserPort on top of the TSX grammar, which covers
plain JavaScript, JSX, TypeScript, decorators and the modern operators test
files use. The concrete syntax tree is reduced to the small set of shapes in
``testlens.domain.syntax``; only callback and loop bodies are descended
into, since nothing else can hold a test declaration the tree builder accepts.
"""

import logging

import tree_sitter_typescript as tsts
from tree_sitter import Language, Node, Parser

from ...domain.models import ParseError
from ...domain.syntax import (
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionArgument,
    LoopKind,
    LoopStatement,
    OtherNode,
    OtherStatement,
    Program,
    Statement,
    StringArgument,
    TemplateArgument,
)
from .literals import cook_escapes, cook_template_head

logger = logging.getLogger(__name__)

TSX_LANGUAGE = Language(tsts.language_tsx())

_FUNCTION_NODES = {
    "arrow_function",
    "function",
    "function_expression",
    "generator_function",
}

_LOOP_NODES = {
    "for_statement": LoopKind.FOR,
    "for_in_statement": LoopKind.FOR_IN,
    "while_statement": LoopKind.WHILE,
    "do_statement": LoopKind.DO_WHILE,
}


class JsParseError(ParseError):
    """Raised when tree-sitter reports syntax errors in a document."""

    pass


class _OffsetMap:
    """Converts tree-sitter byte offsets to character offsets."""

    def __init__(self, source: str, data: bytes) -> None:
        self._data = data
        self._ascii = len(data) == len(source)
        self._cache: dict[int, int] = {}

    def char_offset(self, byte_offset: int) -> int:
        if self._ascii:
            return byte_offset
        if byte_offset not in self._cache:
            self._cache[byte_offset] = len(
                self._data[:byte_offset].decode("utf-8", errors="replace")
            )
        return self._cache[byte_offset]


class TreeSitterJsParser:
    """
    ParserPort implementation backed by tree-sitter.

    Babel-style strictness is the default: a document whose tree contains
    ``ERROR`` or ``MISSING`` nodes is rejected as a whole. With
    ``allow_partial`` the recovered tree is used instead and the broken
    regions are simply skipped.
    """

    def __init__(self, allow_partial: bool = False) -> None:
        self._parser = Parser(TSX_LANGUAGE)
        self.allow_partial = allow_partial

    def parse(self, source: str) -> Program:
        try:
            data = source.encode("utf-8")
            tree = self._parser.parse(data)
        except (UnicodeEncodeError, ValueError, TypeError) as e:
            raise JsParseError(f"Parser failed: {e}", cause=e) from e

        root = tree.root_node
        try:
            if root.has_error:
                self._report_error(root)
            converter = _ShapeConverter(_OffsetMap(source, data))
            return Program(body=converter.statements(root.named_children))
        except RecursionError as e:
            raise JsParseError("Document is nested too deeply", cause=e) from e

    def _report_error(self, root: Node) -> None:
        error_node = _first_error(root)
        if error_node is None:
            message = "Syntax error"
        else:
            line, column = error_node.start_point
            message = f"Syntax error at line {line + 1}, column {column + 1}"
        if not self.allow_partial:
            raise JsParseError(message)
        logger.warning(f"{message}; continuing with partial tree")


def _first_error(node: Node) -> Node | None:
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace")


class _ShapeConverter:
    """Reduces tree-sitter nodes to domain syntax shapes."""

    def __init__(self, offsets: _OffsetMap) -> None:
        self._offsets = offsets

    def statements(self, nodes: list[Node]) -> tuple[Statement, ...]:
        return tuple(
            self.statement(node) for node in nodes if node.type != "comment"
        )

    def statement(self, node: Node) -> Statement:
        start = self._offsets.char_offset(node.start_byte)

        if node.type == "expression_statement":
            inner = _named(node)
            if inner:
                return ExpressionStatement(
                    expression=self.expression(inner[0]), start=start
                )
            return OtherStatement(type=node.type, start=start)

        if node.type in _LOOP_NODES:
            body = node.child_by_field_name("body")
            return LoopStatement(
                kind=self._loop_kind(node),
                body=self._block(body),
                start=start,
            )

        return OtherStatement(type=node.type, start=start)

    def expression(self, node: Node) -> Expression:
        node = _unwrap_parentheses(node)
        if node.type == "call_expression":
            return self._call(node)
        return self._argument(node)

    def _argument(self, node: Node) -> Expression:
        """Convert a call argument; calls in argument position declare nothing."""
        node = _unwrap_parentheses(node)
        if node.type in ("parenthesized_expression", "call_expression"):
            return OtherNode(type=node.type)

        if node.type == "string":
            return StringArgument(value=cook_escapes(_text(node)[1:-1]))

        if node.type == "template_string":
            return TemplateArgument(head=self._template_head(node))

        if node.type in _FUNCTION_NODES:
            return FunctionArgument(body=self._block(node.child_by_field_name("body")))

        return OtherNode(type=node.type)

    def _call(self, node: Node) -> CallExpression:
        callee = node.child_by_field_name("function")
        name = ""
        member = False
        if callee is not None:
            if callee.type == "identifier":
                name = _text(callee)
            elif callee.type == "member_expression":
                member = True
                prop = callee.child_by_field_name("property")
                if prop is not None and prop.type == "property_identifier":
                    name = _text(prop)

        arguments: tuple[Expression, ...] = ()
        args_node = node.child_by_field_name("arguments")
        if args_node is not None and args_node.type == "arguments":
            arguments = tuple(self._argument(arg) for arg in _named(args_node))
        return CallExpression(callee_name=name, member=member, arguments=arguments)

    def _template_head(self, node: Node) -> str:
        raw = node.text
        end = len(raw) - 1
        for child in node.children:
            if child.type == "template_substitution":
                end = child.start_byte - node.start_byte
                break
        return cook_template_head(raw[1:end].decode("utf-8", errors="replace"))

    def _block(self, node: Node | None) -> tuple[Statement, ...] | None:
        if node is None or node.type != "statement_block":
            return None
        return self.statements(node.named_children)

    @staticmethod
    def _loop_kind(node: Node) -> LoopKind:
        if node.type != "for_in_statement":
            return _LOOP_NODES[node.type]
        operator = node.child_by_field_name("operator")
        if operator is not None:
            return LoopKind.FOR_OF if operator.type == "of" else LoopKind.FOR_IN
        if any(child.type == "of" for child in node.children):
            return LoopKind.FOR_OF
        return LoopKind.FOR_IN


def _named(node: Node) -> list[Node]:
    return [child for child in node.named_children if child.type != "comment"]


def _unwrap_parentheses(node: Node) -> Node:
    while node.type == "parenthesized_expression":
        inner = _named(node)
        if len(inner) != 1:
            break
        node = inner[0]
    return node
