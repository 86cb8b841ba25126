"""
IO adapters for file operations.

This module provides adapters for locating test files on disk and for
configuring Rich-based logging.
"""

from .enhanced_logging import (
    LoggerManager,
    LogMode,
    operation_context,
    setup_enhanced_logging,
)
from .file_discovery import FileDiscoveryError, FileDiscoveryService

__all__ = [
    "LoggerManager",
    "LogMode",
    "operation_context",
    "setup_enhanced_logging",
    "FileDiscoveryService",
    "FileDiscoveryError",
]
