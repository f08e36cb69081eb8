"""Entry document loading and embedded file expansion."""

from .embedding import EmbeddingExpander, Placeholder, find_placeholders
from .loader import load

__all__ = ["EmbeddingExpander", "Placeholder", "find_placeholders", "load"]
