"""Exception types raised by feed-tool."""

from __future__ import annotations

from pathlib import Path


class FeedToolError(Exception):
    """Base class for feed-tool errors."""


class EmbeddingError(FeedToolError):
    """Embedded file placeholders could not be resolved."""


class EmbeddingRecursionError(EmbeddingError):
    """Embedded files nest without bound.

    Attributes:
        chain: Files being expanded when the limit was hit, outermost first
    """

    def __init__(self, message: str, chain: tuple[Path, ...]):
        super().__init__(message)
        self.chain = chain


class EmbeddingCycleError(EmbeddingRecursionError):
    """A file embeds itself, directly or through other files."""


class EmbeddingDepthError(EmbeddingRecursionError):
    """Embedded files nest deeper than the configured maximum."""


class EmbeddingDecodeError(EmbeddingError):
    """A document or embedded file is not valid in the configured encoding.

    Attributes:
        path: File that failed to decode
    """

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path


class FeedClientError(FeedToolError):
    """A feed server request failed or returned an unusable payload.

    Attributes:
        status_code: HTTP status code, or None for transport and parse failures
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
