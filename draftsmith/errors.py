"""
Error taxonomy for the drafting pipeline.

Nothing here is recovered locally: every error propagates to the CLI,
which stops the run and leaves already-written artifacts in place.
"""

from __future__ import annotations


class DraftsmithError(Exception):
    """Base class for every pipeline failure."""


class FormatError(DraftsmithError):
    """Generated text does not follow the expected textual layout."""


class ChapterCountMismatch(DraftsmithError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} chapters, parsed {actual}")


class SceneCountMismatch(DraftsmithError):
    def __init__(self, chapter: int, expected: int, actual: int):
        self.chapter = chapter
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"chapter {chapter}: expected at least {expected} scenes, got {actual}"
        )


class GenerationBackendError(DraftsmithError):
    """The backend call failed or returned no usable text."""


class PersistenceError(DraftsmithError):
    """An artifact could not be written."""
