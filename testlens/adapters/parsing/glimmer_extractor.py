"""
Heuristic extractor for Glimmer (``.gjs``/``.gts``) test files.

These files embed ``<template>`` markup that a JavaScript parser cannot read,
so modules and tests are found by scanning the raw text. Without a syntax
tree there is no block structure: each test is attributed to the nearest
module call that precedes it in the document, and module paths are never
nested.
"""

import logging
import re
from bisect import bisect_left
from dataclasses import dataclass

from ...config.models import ExtractionConfig
from ...domain.models import TEST_SEPARATOR, ModuleEntry, TestEntry
from .literals import cook_escapes, cook_template_head

logger = logging.getLogger(__name__)

# Standalone <template> block running to the end of a line
_TRAILING_TEMPLATE_RE = re.compile(r"<template[^>]*>[\s\S]*?</template>\s*$", re.MULTILINE)
_HBS_TAGGED_RE = re.compile(r"hbs`[\s\S]*?`")
_INLINE_TEMPLATE_RE = re.compile(r"<template[^>]*>([\s\S]*?)</template>")
_TEMPLATE_PLACEHOLDER = "<div>/* template content */</div>"


@dataclass(frozen=True)
class TextMatch:
    """A keyword call found in raw text."""

    name: str
    position: int


def _keyword_pattern(keywords: list[str]) -> re.Pattern:
    alternatives = "|".join(
        re.escape(keyword) for keyword in sorted(keywords, key=len, reverse=True)
    )
    return re.compile(
        rf"(?<![\w$])(?:{alternatives})\s*\(\s*(['\"`])([^'\"`]+)['\"`]"
    )


class GlimmerExtractor:
    """
    Extracts modules and tests from template-embedding files by pattern
    matching.

    The keyword sets are the same ones the structural path uses, so a file
    reports the same declarations whichever path reads it, minus nesting.
    """

    def __init__(self, config: ExtractionConfig | None = None) -> None:
        self.config = config or ExtractionConfig()
        self._module_re = _keyword_pattern(self.config.module_keywords)
        self._test_re = _keyword_pattern(self.config.test_keywords)

    def find_modules(self, text: str) -> list[TextMatch]:
        matches = self._scan(self._module_re, text)
        logger.debug(f"Module pattern found {len(matches)} matches")
        return matches

    def find_tests(self, text: str) -> list[TextMatch]:
        matches = self._scan(self._test_re, text)
        logger.debug(f"Test pattern found {len(matches)} matches")
        return matches

    def extract(self, text: str) -> tuple[list[ModuleEntry], list[TestEntry]]:
        """
        Find modules and tests and attribute each test to a module.

        Args:
            text: Raw file content

        Returns:
            Tuple of (modules, tests) in document order. Tests with no
            preceding module are dropped.
        """
        module_matches = self.find_modules(text)
        test_matches = self.find_tests(text)

        modules = [
            ModuleEntry(path=match.name, position=match.position)
            for match in module_matches
        ]

        module_positions = [match.position for match in module_matches]
        tests: list[TestEntry] = []
        for test_match in test_matches:
            index = bisect_left(module_positions, test_match.position)
            if index == 0:
                logger.debug(
                    f"Could not find containing module for test '{test_match.name}'"
                )
                continue
            module_name = module_matches[index - 1].name
            tests.append(
                TestEntry(
                    path=f"{module_name}{TEST_SEPARATOR}{test_match.name}",
                    position=test_match.position,
                )
            )
            logger.debug(
                f"Associated test '{test_match.name}' with module '{module_name}'"
            )

        logger.debug(
            f"Glimmer file: found {len(modules)} modules and {len(tests)} tests "
            "using pattern matching"
        )
        return modules, tests

    @staticmethod
    def _scan(pattern: re.Pattern, text: str) -> list[TextMatch]:
        matches = []
        for match in pattern.finditer(text):
            quote, raw = match.group(1), match.group(2)
            name = cook_template_head(raw) if quote == "`" else cook_escapes(raw)
            matches.append(TextMatch(name=name, position=match.start()))
            logger.debug(f"Found '{name}' at position {match.start()}")
        return matches


def strip_template_markup(text: str) -> str:
    """
    Remove embedded template markup so the rest reads as plain JavaScript.

    Trailing ``<template>`` blocks and ``hbs`` tagged templates are dropped;
    inline ``<template>`` blocks are replaced by a JSX placeholder so
    surrounding calls such as ``render(...)`` keep their shape. Offsets in the
    result do not line up with the input.
    """
    stripped = _TRAILING_TEMPLATE_RE.sub("", text)
    stripped = _HBS_TAGGED_RE.sub("", stripped)
    stripped = _INLINE_TEMPLATE_RE.sub(_TEMPLATE_PLACEHOLDER, stripped)
    return stripped.strip()
