"""
Domain models for the testlens system.

This module contains the core domain models using Pydantic for validation
and serialization. They describe the test tree discovered in a JavaScript or
TypeScript test file and the flattened module/test entries handed to callers.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

ROOT_NODE_NAME = "Root"
MODULE_SEPARATOR = " > "
TEST_SEPARATOR = ": "


class TestLensError(Exception):
    """Base exception for testlens domain errors."""

    __test__ = False

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ParseError(TestLensError):
    """Raised when a whole document cannot be parsed."""

    pass


class NodeKind(str, Enum):
    """Kinds of nodes in a test tree."""

    MODULE = "module"
    TEST = "test"


class FileVariant(str, Enum):
    """Extraction path selected for a source file."""

    SCRIPT = "script"
    TEMPLATE = "template"

    @classmethod
    def from_path(cls, path: str | Path) -> FileVariant:
        """Pick the variant from a file name.

        Glimmer files (``.gjs``/``.gts``) embed ``<template>`` markup and use
        the heuristic extractor; everything else is parsed structurally.
        """
        suffix = Path(path).suffix.lower()
        if suffix in TEMPLATE_SUFFIXES:
            return cls.TEMPLATE
        return cls.SCRIPT


SCRIPT_SUFFIXES = frozenset(
    {".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts"}
)
TEMPLATE_SUFFIXES = frozenset({".gjs", ".gts"})


class TestNode(BaseModel):
    """
    A module or test declaration in the test tree.

    Module nodes own an ordered list of children; test nodes never have any.
    """

    __test__ = False

    model_config = ConfigDict(frozen=True)

    kind: NodeKind = Field(..., description="Whether the node is a module or a test")
    name: str = Field(..., description="Declared display name")
    position: int = Field(..., ge=0, description="Character offset of the declaring statement")
    children: list[TestNode] = Field(
        default_factory=list, description="Nested nodes, in declaration order"
    )

    @field_validator("children")
    @classmethod
    def validate_children(
        cls, v: list[TestNode], info: ValidationInfo
    ) -> list[TestNode]:
        """Tests are leaves."""
        if v and info.data.get("kind") == NodeKind.TEST:
            raise ValueError("Test nodes cannot have children")
        return v

    @classmethod
    def root(cls, children: list[TestNode]) -> TestNode:
        """Create the synthetic root that anchors a tree."""
        return cls(
            kind=NodeKind.MODULE, name=ROOT_NODE_NAME, position=0, children=children
        )

    @property
    def is_module(self) -> bool:
        return self.kind == NodeKind.MODULE


class ModuleEntry(BaseModel):
    """A flattened module path, e.g. ``"A > B"``."""

    model_config = ConfigDict(frozen=True)

    path: str
    position: int = Field(..., ge=0)


class TestEntry(BaseModel):
    """A flattened test path, ``"<modulePath>: <testName>"``."""

    __test__ = False

    model_config = ConfigDict(frozen=True)

    path: str
    position: int = Field(..., ge=0)

    @property
    def module_path(self) -> str:
        return self.path.rpartition(TEST_SEPARATOR)[0]

    @property
    def test_name(self) -> str:
        return self.path.rpartition(TEST_SEPARATOR)[2]


class SourceLocation(BaseModel):
    """Zero-based line and column of a character offset."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(..., ge=0)
    column: int = Field(..., ge=0)


class ExtractionResult(BaseModel):
    """
    Modules and tests found in one document.

    Both lists are in document declaration order. ``parse_error`` holds the
    parser message when structural parsing failed and the lists were left
    empty.
    """

    model_config = ConfigDict(frozen=True)

    variant: FileVariant
    modules: list[ModuleEntry] = Field(default_factory=list)
    tests: list[TestEntry] = Field(default_factory=list)
    parse_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.parse_error is None

    def module_tests(self) -> dict[str, list[str]]:
        """Map each module path to the names of the tests declared in it.

        Built fresh from the entry lists on every call.
        """
        mapping: dict[str, list[str]] = {entry.path: [] for entry in self.modules}
        for entry in self.tests:
            mapping.setdefault(entry.module_path, []).append(entry.test_name)
        return mapping
