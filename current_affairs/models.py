"""
Data models shared by the extractors, the deduplicator and the downloader.
"""

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .scrapers.base import BaseExtractor


@dataclass(frozen=True)
class RawCandidate:
    """A (label, link) pair pulled off a rendered source page."""

    label: str      # Visible link text, e.g. "Weekly Current Affairs (28 Oct - 03 Nov 2024)"
    link: str       # Absolute URL of the PDF


@dataclass(frozen=True)
class CanonicalDocument:
    """The single retained representative of one weekly edition."""

    label: str
    link: str
    date: date      # End date parsed from the label
    key: int        # UTC-midnight epoch seconds of `date`

    @property
    def filename(self) -> str:
        return f"{self.key} {self.date.year}-{self.date.month:02d}-{self.date.day:02d}.pdf"


@dataclass(frozen=True)
class SourceDescriptor:
    """A known site and the rule used to pull candidates off it."""

    name: str
    location: str
    extractor: "BaseExtractor"
