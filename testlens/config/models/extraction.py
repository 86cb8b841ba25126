"""Extraction and parsing configuration models."""

import re

from pydantic import BaseModel, Field, field_validator, model_validator

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


class ExtractionConfig(BaseModel):
    """Call names recognised as module and test declarations.

    Both the structural and the heuristic extraction paths read these sets.
    """

    module_keywords: list[str] = Field(
        default=["describe", "module", "context"],
        description="Call names that declare a module (a named group of tests)",
    )

    test_keywords: list[str] = Field(
        default=["it", "test", "specify"],
        description="Call names that declare a single test",
    )

    iteration_methods: list[str] = Field(
        default=["forEach", "map", "filter", "every", "some"],
        description="Array methods whose callback bodies are searched in place",
    )

    @field_validator("module_keywords", "test_keywords", "iteration_methods")
    @classmethod
    def validate_identifiers(cls, v: list[str]) -> list[str]:
        """Keywords must be non-empty lists of JavaScript identifiers."""
        if not v:
            raise ValueError("keyword list cannot be empty")
        for keyword in v:
            if not _IDENTIFIER_RE.match(keyword):
                raise ValueError(f"'{keyword}' is not a valid identifier")
        return v

    @model_validator(mode="after")
    def validate_disjoint(self) -> "ExtractionConfig":
        """A call name cannot declare both a module and a test."""
        overlap = set(self.module_keywords) & set(self.test_keywords)
        if overlap:
            raise ValueError(
                f"module_keywords and test_keywords overlap: {sorted(overlap)}"
            )
        return self


class ParsingConfig(BaseModel):
    """Configuration for structural parsing."""

    allow_partial: bool = Field(
        default=False,
        description="Extract from the recovered tree when a file has syntax errors "
        "instead of reporting no modules and tests",
    )
