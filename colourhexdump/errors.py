"""
Exceptions raised by colourhexdump.

Configuration problems are reported before any output is produced, read
failures abort the source being dumped.
"""

from __future__ import annotations

from typing import Optional


class ColourHexdumpError(Exception):
    """Base class for all colourhexdump errors"""


class ConfigurationError(ColourHexdumpError):
    """Bad layout values or an unknown/invalid colour profile"""


class IOReadError(ColourHexdumpError):
    """The input source failed while being read"""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source
