"""
Shared utility functions.

This package contains logging setup and XML escaping used across
the renderer, the expander and the client.
"""

from .escaping import escape_xml, unescape_xml
from .logging import JsonlFormatter, log_event, setup_logging

__all__ = [
    "setup_logging",
    "log_event",
    "JsonlFormatter",
    "escape_xml",
    "unescape_xml",
]
