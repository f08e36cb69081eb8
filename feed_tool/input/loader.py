"""Entry document loading with embedded file expansion."""

from __future__ import annotations

from pathlib import Path

from .embedding import EmbeddingExpander


def load(path: Path | str, expander: EmbeddingExpander | None = None) -> str:
    """Read an entry document and resolve its embedded files.

    Args:
        path: Document to read; embedded paths resolve against its directory
        expander: Expander to use, defaults to one with default settings

    Returns:
        The fully expanded document text

    Raises:
        OSError: If the document or an embedded file cannot be read
    """
    expander = expander or EmbeddingExpander()
    return expander.load(Path(path))
