"""
Test tree builder.

Walks a parsed program and nested callback bodies, recognising module- and
test-declaring calls, and produces an ordered tree of TestNode objects rooted
at a synthetic ``Root`` module.
"""

import logging

from ...config.models import ExtractionConfig
from ...domain.models import NodeKind, TestNode
from ...domain.syntax import (
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionArgument,
    LoopStatement,
    Program,
    Statement,
    StringArgument,
    TemplateArgument,
)

logger = logging.getLogger(__name__)


def declared_name(argument: Expression) -> str:
    """Resolve a declaration name from the first call argument.

    Only literal text is read: a string's value, or the text of a template
    literal before its first interpolation. Anything else gives ``""``.
    """
    if isinstance(argument, StringArgument):
        return argument.value
    if isinstance(argument, TemplateArgument):
        return argument.head
    return ""


def _block_body(argument: Expression) -> tuple[Statement, ...] | None:
    if isinstance(argument, FunctionArgument):
        return argument.body
    return None


class TreeBuilder:
    """
    Builds a TestNode tree from a parsed program.

    Every visit returns a list: empty when the statement declares nothing,
    one node for a module or test call, and any number of nodes for loops
    and iteration callbacks, whose contents are spliced into the enclosing
    level.
    """

    def __init__(self, config: ExtractionConfig | None = None) -> None:
        self.config = config or ExtractionConfig()
        self._module_names = frozenset(self.config.module_keywords)
        self._test_names = frozenset(self.config.test_keywords)
        self._iteration_methods = frozenset(self.config.iteration_methods)

    def build(self, program: Program) -> TestNode | None:
        """Build the tree, or return ``None`` if the program declares nothing."""
        children = self._visit_statements(program.body)
        if not children:
            logger.debug("No modules or tests found in program")
            return None
        return TestNode.root(children)

    def _visit_statements(self, statements: tuple[Statement, ...]) -> list[TestNode]:
        nodes: list[TestNode] = []
        for statement in statements:
            nodes.extend(self._visit_statement(statement))
        return nodes

    def _visit_statement(self, statement: Statement) -> list[TestNode]:
        if isinstance(statement, ExpressionStatement):
            if isinstance(statement.expression, CallExpression):
                return self._visit_call(statement.expression, statement.start)
            return []

        if isinstance(statement, LoopStatement):
            if statement.body is None:
                return []
            return self._visit_statements(statement.body)

        return []

    def _visit_call(self, call: CallExpression, position: int) -> list[TestNode]:
        name = call.callee_name

        if name in self._module_names and call.arguments:
            children: list[TestNode] = []
            if len(call.arguments) > 1:
                body = _block_body(call.arguments[1])
                if body is not None:
                    children = self._visit_statements(body)
            module_name = declared_name(call.arguments[0])
            logger.debug(f"Found module call '{module_name}' at position {position}")
            return [
                TestNode(
                    kind=NodeKind.MODULE,
                    name=module_name,
                    position=position,
                    children=children,
                )
            ]

        if name in self._test_names and call.arguments:
            test_name = declared_name(call.arguments[0])
            logger.debug(f"Found test call '{test_name}' at position {position}")
            return [TestNode(kind=NodeKind.TEST, name=test_name, position=position)]

        if call.member and name in self._iteration_methods and call.arguments:
            body = _block_body(call.arguments[0])
            if body is not None:
                return self._visit_statements(body)

        return []
