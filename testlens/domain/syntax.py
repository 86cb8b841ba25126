"""
Syntax shapes inspected by the tree builder.

The parser adapter reduces a full JavaScript/TypeScript syntax tree to this
closed set of node shapes. Anything the tree builder does not look at becomes
an ``OtherStatement`` or ``OtherNode``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class LoopKind(str, Enum):
    FOR = "for"
    FOR_IN = "for-in"
    FOR_OF = "for-of"
    WHILE = "while"
    DO_WHILE = "do-while"


@dataclass(frozen=True)
class StringArgument:
    """A string literal; ``value`` has escapes already decoded."""

    value: str


@dataclass(frozen=True)
class TemplateArgument:
    """A template literal, reduced to its cooked text before the first ``${``."""

    head: str


@dataclass(frozen=True)
class FunctionArgument:
    """An arrow or plain function expression.

    ``body`` is ``None`` when the function has an expression body.
    """

    body: tuple[Statement, ...] | None


@dataclass(frozen=True)
class CallExpression:
    """A call; ``callee_name`` is the identifier or member property name.

    ``member`` is set when the callee is a property access such as
    ``items.forEach``.
    """

    callee_name: str
    member: bool = False
    arguments: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class OtherNode:
    """Any expression the tree builder does not inspect."""

    type: str


Expression = Union[
    CallExpression, StringArgument, TemplateArgument, FunctionArgument, OtherNode
]


@dataclass(frozen=True)
class ExpressionStatement:
    expression: Expression
    start: int


@dataclass(frozen=True)
class LoopStatement:
    """A loop; ``body`` is ``None`` unless the loop body is a block."""

    kind: LoopKind
    body: tuple[Statement, ...] | None
    start: int


@dataclass(frozen=True)
class OtherStatement:
    type: str
    start: int


Statement = Union[ExpressionStatement, LoopStatement, OtherStatement]


@dataclass(frozen=True)
class Program:
    body: tuple[Statement, ...] = field(default_factory=tuple)
