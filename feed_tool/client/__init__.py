"""
Feed server clients.

This package contains the client interface used by the CLI and its
HTTP implementation.
"""

from .atom import build_entry_xml, parse_entity_xml, parse_feed_xml
from .base import FeedClient
from .http import HttpFeedClient

__all__ = [
    "FeedClient",
    "HttpFeedClient",
    "build_entry_xml",
    "parse_entity_xml",
    "parse_feed_xml",
]
