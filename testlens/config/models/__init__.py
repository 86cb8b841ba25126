"""Configuration models for testlens.

This package contains all configuration models organized by concern.
"""

# Main configuration model
from .main import TestLensConfig

# Discovery and patterns
from .discovery import TestPatternConfig

# Extraction and parsing
from .extraction import ExtractionConfig, ParsingConfig

# Test runner
from .runner import RunnerConfig

# Logging configuration
from .ui import LoggingConfig

__all__ = [
    # Main configuration
    "TestLensConfig",

    # Discovery and patterns
    "TestPatternConfig",

    # Extraction and parsing
    "ExtractionConfig",
    "ParsingConfig",

    # Test runner
    "RunnerConfig",

    # Logging
    "LoggingConfig",
]
