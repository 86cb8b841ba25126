"""Flatten a TestNode tree into ordered module and test paths."""

import logging

from ...domain.models import (
    MODULE_SEPARATOR,
    TEST_SEPARATOR,
    ModuleEntry,
    TestEntry,
    TestNode,
)

logger = logging.getLogger(__name__)


def flatten_tree(
    tree: TestNode | None,
) -> tuple[list[ModuleEntry], list[TestEntry]]:
    """
    Walk a test tree depth-first and collect flattened entries.

    Module paths join ancestor names with ``" > "``; test paths append
    ``": <name>"`` to the enclosing module path. Tests without an enclosing
    module are dropped. The synthetic root is never emitted.

    Args:
        tree: Root of the tree, or ``None`` for a document with no declarations

    Returns:
        Tuple of (modules, tests) in document declaration order
    """
    modules: list[ModuleEntry] = []
    tests: list[TestEntry] = []
    if tree is not None:
        for child in tree.children:
            _walk(child, "", modules, tests)
    return modules, tests


def _walk(
    node: TestNode,
    prefix: str,
    modules: list[ModuleEntry],
    tests: list[TestEntry],
) -> None:
    if node.is_module:
        full_path = f"{prefix}{MODULE_SEPARATOR}{node.name}" if prefix else node.name
        modules.append(ModuleEntry(path=full_path, position=node.position))
        logger.debug(f"Found module: '{full_path}' at position {node.position}")
        for child in node.children:
            _walk(child, full_path, modules, tests)
        return

    # Only tests with a module prefix are kept
    if prefix:
        test_path = f"{prefix}{TEST_SEPARATOR}{node.name}"
        tests.append(TestEntry(path=test_path, position=node.position))
        logger.debug(f"Found test: '{test_path}' at position {node.position}")
