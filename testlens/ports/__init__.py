"""
Port interfaces for the testlens system.

This module contains the interface definitions using Python Protocols
to define contracts between the application layer and adapters.
"""

from .parser_port import ParserPort

__all__ = [
    "ParserPort",
]
