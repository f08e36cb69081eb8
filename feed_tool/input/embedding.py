"""
Embedded file expansion for entry documents.

An entry document may pull the content of another file into an element by
writing its relative path after an "@" as the element's whole text:

    <xyz>@abc.xml</xyz>

If abc.xml contains "<abc>value</abc>" the element becomes

    <xyz>&lt;abc&gt;value&lt;/abc&gt;</xyz>

Embedded files are expanded recursively, each relative to its own directory,
before being escaped.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Iterator

from ..errors import EmbeddingCycleError, EmbeddingDecodeError, EmbeddingDepthError
from ..utils.escaping import escape_xml
from ..utils.logging import log_event

logger = logging.getLogger(__name__)

PLACEHOLDER_START = ">@"
PLACEHOLDER_END = "<"
DEFAULT_MAX_DEPTH = 32
# a path ends at "<" and may not cross a line terminator
_PATH_STOPS = "<\r\n\u0085\u2028\u2029"


@dataclass(frozen=True)
class Placeholder:
    """An embedded file reference found in a document.

    Attributes:
        start: Index of the "@" that opens the reference
        end: Index of the "<" that terminates it
        path: Relative path between the two
    """

    start: int
    end: int
    path: str


def find_placeholders(text: str) -> Iterator[Placeholder]:
    """Yield non-overlapping placeholders from left to right.

    A path never spans a line terminator; a candidate running into one (or into the
    end of the text) is skipped and scanning resumes after its ">".
    """
    pos = 0
    length = len(text)
    while True:
        marker = text.find(PLACEHOLDER_START, pos)
        if marker < 0:
            return
        start = marker + 1
        cursor = start + 1
        while cursor < length and text[cursor] not in _PATH_STOPS:
            cursor += 1
        if cursor >= length or text[cursor] != PLACEHOLDER_END:
            pos = marker + 1
            continue
        yield Placeholder(start=start, end=cursor, path=text[start + 1 : cursor])
        pos = cursor + 1


class EmbeddingExpander:
    """Resolves embedded file placeholders against the filesystem.

    Attributes:
        encoding: Text encoding of embedded files
        max_depth: Maximum nesting of embedded files, or None for no limit
    """

    def __init__(self, encoding: str = "utf-8", max_depth: int | None = DEFAULT_MAX_DEPTH):
        self.encoding = encoding
        self.max_depth = max_depth

    def expand(self, text: str, base_dir: Path) -> str:
        """Replace every placeholder with the escaped content of its file.

        Args:
            text: Document text
            base_dir: Directory that relative paths are resolved against

        Returns:
            The document with all placeholders expanded

        Raises:
            OSError: If an embedded file cannot be read
            EmbeddingCycleError: If a file embeds itself
            EmbeddingDepthError: If files nest deeper than max_depth
            EmbeddingDecodeError: If a file is not valid in the configured encoding
        """
        return self._expand(text, Path(base_dir), (), 0)

    def load(self, path: Path) -> str:
        """Read a document and expand it relative to its own directory."""
        return self._read(Path(path), (), 0)

    def _expand(self, text: str, base_dir: Path, chain: tuple[Path, ...], depth: int) -> str:
        parts: list[str] = []
        last = 0
        for placeholder in find_placeholders(text):
            parts.append(text[last : placeholder.start])
            embedded = self._read(base_dir / placeholder.path, chain, depth + 1)
            parts.append(escape_xml(embedded))
            last = placeholder.end
        if not parts:
            return text
        parts.append(text[last:])
        return "".join(parts)

    def _read(self, path: Path, chain: tuple[Path, ...], depth: int) -> str:
        # depth 0 is the loaded document itself, embeds start at 1
        resolved = path.resolve()
        if resolved in chain:
            raise EmbeddingCycleError(f"Embedded file includes itself: {path}", chain + (resolved,))
        if self.max_depth is not None and depth > self.max_depth:
            raise EmbeddingDepthError(
                f"Embedded files nest deeper than {self.max_depth}: {path}", chain + (resolved,)
            )
        try:
            content = path.read_bytes().decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise EmbeddingDecodeError(
                f"Cannot decode {path} as {self.encoding}: {exc.reason} at byte {exc.start}", path
            ) from exc
        if depth:
            log_event(
                logger, "embedded file resolved", level=logging.DEBUG, path=str(path), depth=depth
            )
        return self._expand(content, path.parent, chain + (resolved,), depth)
