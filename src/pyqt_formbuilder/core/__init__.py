"""
Core PyQt6 utilities.

Pure PyQt6 helpers with no form-specific logic.
"""

from .change_coalescer import ChangeCoalescer

__all__ = [
    "ChangeCoalescer",
]
