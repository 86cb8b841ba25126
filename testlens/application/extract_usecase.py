"""
Extract Use Case - map the modules and tests declared in a test file.

Chooses the extraction path from the file variant: template-embedding files
go through the heuristic text extractor, everything else through the parser,
tree builder and flattener. Either way the caller receives one
ExtractionResult and never an extraction exception.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..adapters.io.enhanced_logging import operation_context
from ..adapters.parsing.flattener import flatten_tree
from ..adapters.parsing.glimmer_extractor import GlimmerExtractor
from ..adapters.parsing.js_parser import TreeSitterJsParser
from ..adapters.parsing.tree_builder import TreeBuilder
from ..config.models import TestLensConfig
from ..domain.models import ExtractionResult, FileVariant, ParseError
from ..ports.parser_port import ParserPort

logger = logging.getLogger(__name__)


class ExtractUseCaseError(Exception):
    """Exception for reading test files in the Extract Use Case."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ExtractUseCase:
    """
    Use case for extracting module and test paths from source text.

    Each call works on one document from scratch; nothing is carried over
    between calls.
    """

    def __init__(
        self,
        config: TestLensConfig | None = None,
        parser: ParserPort | None = None,
    ) -> None:
        """
        Initialize the Extract Use Case.

        Args:
            config: testlens configuration (defaults when None)
            parser: Structural parser (tree-sitter adapter when None)
        """
        self.config = config or TestLensConfig()
        self._parser = parser or TreeSitterJsParser(
            allow_partial=self.config.parsing.allow_partial
        )
        self._tree_builder = TreeBuilder(self.config.extraction)
        self._glimmer = GlimmerExtractor(self.config.extraction)

    def extract(self, text: str, variant: FileVariant) -> ExtractionResult:
        """
        Extract modules and tests from source text.

        Args:
            text: Full document text
            variant: Which extraction path to use

        Returns:
            ExtractionResult; on a parse failure both lists are empty and
            ``parse_error`` carries the reason
        """
        if variant == FileVariant.TEMPLATE:
            logger.debug("Using pattern matching for template-embedding file")
            modules, tests = self._glimmer.extract(text)
            return ExtractionResult(variant=variant, modules=modules, tests=tests)

        logger.debug("Using structural parsing")
        try:
            program = self._parser.parse(text)
        except ParseError as e:
            logger.error(f"Error parsing test file: {e}")
            return ExtractionResult(variant=variant, parse_error=str(e))

        tree = self._tree_builder.build(program)
        modules, tests = flatten_tree(tree)
        logger.debug(f"Extracted {len(modules)} modules and {len(tests)} tests")
        return ExtractionResult(variant=variant, modules=modules, tests=tests)

    def extract_file(self, file_path: str | Path) -> ExtractionResult:
        """
        Read a file and extract from it, picking the variant from its name.

        Raises:
            ExtractUseCaseError: If the file cannot be read
        """
        file_path = Path(file_path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ExtractUseCaseError(f"Failed to read {file_path}: {e}", cause=e) from e

        variant = FileVariant.from_path(file_path)
        with operation_context(logger, f"extracting {file_path.name}"):
            result = self.extract(text, variant)

        logger.info(
            f"{file_path.name}: {len(result.modules)} modules, "
            f"{len(result.tests)} tests ({variant.value})"
        )
        return result
