"""Main testlens configuration model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .discovery import TestPatternConfig
from .extraction import ExtractionConfig, ParsingConfig
from .runner import RunnerConfig
from .ui import LoggingConfig


def deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``updates`` merged in, section by section."""
    merged = dict(base)
    for key, value in updates.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class TestLensConfig(BaseModel):
    """Main configuration model for testlens."""

    __test__ = False

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    extraction: ExtractionConfig = Field(
        default_factory=ExtractionConfig,
        description="Module and test declaration keywords",
    )

    parsing: ParsingConfig = Field(
        default_factory=ParsingConfig,
        description="Structural parser behavior",
    )

    discovery: TestPatternConfig = Field(
        default_factory=TestPatternConfig,
        description="Which files count as test files",
    )

    runner: RunnerConfig = Field(
        default_factory=RunnerConfig,
        description="Browser test runner that filtered runs open",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging verbosity",
    )
