"""Data models for the crawl pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NewType, Optional

# Opaque page handle.  Index, listing and entry URLs differ only in which
# stage consumes them.
URL = NewType("URL", str)


class ProficiencyLevel(Enum):
    """CEFR proficiency level shown on an entry page."""

    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"
    # Level text that matched none of the labels above.  This marks a
    # data-quality defect and is never coerced to a real level.
    UNPARSEABLE = "unparseable"

    @classmethod
    def parse(cls, text: str) -> "ProficiencyLevel":
        """Return the level labelled *text*, or :attr:`UNPARSEABLE`."""
        try:
            return cls(text.strip())
        except ValueError:
            return cls.UNPARSEABLE

    @property
    def is_valid(self) -> bool:
        return self is not ProficiencyLevel.UNPARSEABLE


# Level assumed when an entry page carries no level marker at all.
DEFAULT_LEVEL = ProficiencyLevel.B2


@dataclass(frozen=True)
class VocabEntry:
    """One harvested dictionary entry."""

    word: str
    definition: str
    level: ProficiencyLevel = DEFAULT_LEVEL
    example_usage: str = ""

    def __post_init__(self) -> None:
        if not self.word:
            raise ValueError("VocabEntry.word must not be empty")
        if not self.definition:
            raise ValueError("VocabEntry.definition must not be empty")

    def __str__(self) -> str:
        return (
            f"Word: {self.word}, Definition: {self.definition}, "
            f"ExampleUsage: {self.example_usage}"
        )


class CrawlError(Exception):
    """Base class for entry-level crawl failures.

    These are carried inside a :class:`CrawlResult`, never raised by the
    pipeline.
    """


class WordNotFoundError(CrawlError):
    def __init__(self, message: str = "failed to find word") -> None:
        super().__init__(message)


class DefinitionNotFoundError(CrawlError):
    def __init__(self, message: str = "failed to find definition") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class CrawlResult:
    """Outcome of crawling one entry page: an entry or a typed failure."""

    url: str
    entry: Optional[VocabEntry] = None
    error: Optional[CrawlError] = None

    def __post_init__(self) -> None:
        if (self.entry is None) == (self.error is None):
            raise ValueError("CrawlResult needs exactly one of entry or error")

    @classmethod
    def success(cls, url: str, entry: VocabEntry) -> "CrawlResult":
        return cls(url=url, entry=entry)

    @classmethod
    def failure(cls, url: str, error: CrawlError) -> "CrawlResult":
        return cls(url=url, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.error is not None:
            return f"Failed when crawl, error: {self.error}"
        return str(self.entry)
