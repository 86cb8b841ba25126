"""
Parser Port interface definition.

This module defines the interface for turning JavaScript/TypeScript source
text into the syntax shapes the tree builder walks.
"""

from typing_extensions import Protocol

from ..domain.syntax import Program


class ParserPort(Protocol):
    """
    Interface for structural parsing of test files.

    Implementations must accept module syntax, classes, decorators, optional
    chaining, nullish coalescing, dynamic import and JSX, and report start
    offsets as character offsets into the original text.
    """

    def parse(self, source: str) -> Program:
        """
        Parse a whole document.

        Args:
            source: Source text of the document

        Returns:
            The program body reduced to ``testlens.domain.syntax`` shapes

        Raises:
            ParseError: If the document cannot be parsed
        """
        ...
