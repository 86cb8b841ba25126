"""
Parsing adapters for testlens.

This package contains the tree-sitter parser adapter, the test tree builder
and flattener used for structurally parseable files, and the pattern-based
extractor used for Glimmer files.
"""

from .flattener import flatten_tree
from .glimmer_extractor import GlimmerExtractor, strip_template_markup
from .js_parser import JsParseError, TreeSitterJsParser
from .tree_builder import TreeBuilder

__all__ = [
    "GlimmerExtractor",
    "JsParseError",
    "TreeBuilder",
    "TreeSitterJsParser",
    "flatten_tree",
    "strip_template_markup",
]
