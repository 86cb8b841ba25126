"""
Adapters for the testlens system.

This module contains the adapter implementations that provide concrete
implementations of the port interfaces defined in the ports module.
"""

from . import io, parsing

__all__ = [
    "io",
    "parsing",
]
