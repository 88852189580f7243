"""
Domain entities for the PDF translation feature.

All entities are transient: they live for the duration of one request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


# A4 in PDF points
A4_WIDTH = 595.28
A4_HEIGHT = 841.89

RGB = Tuple[float, float, float]


@dataclass(frozen=True)
class PageSize:
    width: float = A4_WIDTH
    height: float = A4_HEIGHT


A4 = PageSize()


@dataclass
class ExtractedText:
    """Plain text recovered from a source PDF."""

    text: str
    page_count: int


@dataclass
class Segment:
    """A 1-indexed piece of extracted text submitted as one unit to translation."""

    index: int
    text: str


@dataclass
class TranslatedSegment:
    """Order-preserving counterpart of a Segment."""

    index: int
    source: str
    text: str


@dataclass
class DrawnText:
    """
    A run of text placed on a page.

    Coordinates use the PDF convention: origin bottom-left, y grows upward,
    (x, y) is the baseline start.
    """

    text: str
    x: float
    y: float
    size: float
    color: RGB = (0.0, 0.0, 0.0)


@dataclass
class Page:
    """A fixed-size canvas holding a header, body lines and a footer."""

    number: int
    size: PageSize = A4
    header: Optional[DrawnText] = None
    lines: List[DrawnText] = field(default_factory=list)
    footer: Optional[DrawnText] = None

    def drawn(self) -> List[DrawnText]:
        """Everything on the page, top to bottom."""
        items: List[DrawnText] = []
        if self.header is not None:
            items.append(self.header)
        items.extend(self.lines)
        if self.footer is not None:
            items.append(self.footer)
        return items
