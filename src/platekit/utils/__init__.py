"""Utility functions for PlateKit.

This module provides utility functions including:

- Logging setup and configuration
- Run statistics for the CLI summary
"""

from platekit.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
