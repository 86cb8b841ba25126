"""Configuration management for testlens."""

from .loader import ConfigLoader, ConfigurationError, load_config
from .models import (
    ExtractionConfig,
    LoggingConfig,
    ParsingConfig,
    RunnerConfig,
    TestLensConfig,
    TestPatternConfig,
)

__all__ = [
    "TestLensConfig",
    "ExtractionConfig",
    "ParsingConfig",
    "TestPatternConfig",
    "RunnerConfig",
    "LoggingConfig",
    "ConfigLoader",
    "ConfigurationError",
    "load_config",
]
