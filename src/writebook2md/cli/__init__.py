"""
writebook2md CLI module.

This module provides the Click-based command-line interface for writebook2md.
"""

from .commands import cli, main


__all__ = ["cli", "main"]
