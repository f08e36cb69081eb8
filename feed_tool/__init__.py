"""
Feed Tool - command-line client for entity feed servers.

This package reads, inserts, updates and deletes entries on a feed server
and prints the resulting entities as indented XML. Entry documents may embed
other files with the ">@path<" placeholder convention.

Main entry point is the CLI via the `feed-tool` command.

Example:
    $ feed-tool get-feed https://feeds.example.com/feeds/contacts
    $ feed-tool insert https://feeds.example.com/feeds/contacts -e entry.xml
"""

__all__ = [
    "__version__",
    "Entity",
    "Repeated",
    "Scalar",
    "EmbeddingExpander",
    "load",
    "render_entity",
    "render_feed",
]
__version__ = "0.1.0"

from .core.types import Entity, Repeated, Scalar
from .input.embedding import EmbeddingExpander
from .input.loader import load
from .output.renderer import render_entity, render_feed
