"""
Text layout: line wrapping and pagination onto fixed-size pages.

There are no real font metrics here. A glyph is assumed to be
``font_size * CHAR_WIDTH_FACTOR`` points wide, so line breaks are approximate.

Coordinates follow the PDF convention (origin bottom-left, y grows upward).
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import List, Optional

from features.translate.domain.entities import A4, DrawnText, Page, PageSize, RGB

logger = logging.getLogger(__name__)

CHAR_WIDTH_FACTOR = 0.6

DEFAULT_MARGIN = 50.0
BODY_FONT_SIZE = 12.0
HEADER_FONT_SIZE = 16.0
FOOTER_FONT_SIZE = 10.0

HEADER_TEXT = "Translated Document"
HEADER_COLOR: RGB = (0.2, 0.2, 0.2)
BODY_COLOR: RGB = (0.0, 0.0, 0.0)
FOOTER_COLOR: RGB = (0.5, 0.5, 0.5)

# Space between the header baseline and the first body line
HEADER_GAP = 40.0
# Body lines never start below margin + BOTTOM_RESERVE
BOTTOM_RESERVE = 20.0
LINE_SPACING = 4.0
FOOTER_Y = 30.0


def max_chars_per_line(max_width: float, font_size: float) -> int:
    """Character budget of a line under the fixed-width approximation."""
    if font_size <= 0:
        raise ValueError("font_size must be > 0")
    return math.floor(max_width / (font_size * CHAR_WIDTH_FACTOR))


def wrap_text(text: str, max_width: float, font_size: float) -> List[str]:
    """
    Greedy word wrap on single spaces.

    A word longer than the budget is emitted alone on its own line, unbroken.
    Runs of spaces collapse to one.
    """
    limit = max_chars_per_line(max_width, font_size)
    lines: List[str] = []
    current = ""

    for word in text.split(" "):
        if not word:
            continue
        if len(current) + len(word) > limit:
            if current:
                lines.append(current.rstrip())
            current = word + " "
        else:
            current += word + " "

    if current:
        lines.append(current.rstrip())

    return lines


def wrap_paragraphs(text: str, max_width: float, font_size: float) -> List[str]:
    """
    Wrap multi-line text. Newlines are hard breaks, blank lines are kept as "".
    """
    lines: List[str] = []
    for source_line in text.splitlines():
        wrapped = wrap_text(source_line, max_width, font_size)
        lines.extend(wrapped or [""])
    return lines


def format_footer(today: date, provider_name: str) -> str:
    return f"Translated on {today.strftime('%m/%d/%Y')} | Powered by {provider_name}"


class _PageFlow:
    """Keeps the current page and vertical cursor in step."""

    def __init__(self, page_size: PageSize, margin: float, font_size: float) -> None:
        self.page_size = page_size
        self.margin = margin
        self.font_size = font_size
        self.pages: List[Page] = []
        self.current = self._new_page()
        self.cursor = page_size.height - margin - HEADER_GAP

    def _new_page(self) -> Page:
        page = Page(number=len(self.pages) + 1, size=self.page_size)
        self.pages.append(page)
        return page

    def place(self, line: str) -> None:
        if self.cursor < self.margin + BOTTOM_RESERVE:
            self.current = self._new_page()
            self.cursor = self.page_size.height - self.margin

        self.current.lines.append(
            DrawnText(
                text=line,
                x=self.margin,
                y=self.cursor,
                size=self.font_size,
                color=BODY_COLOR,
            )
        )
        self.cursor -= self.font_size + LINE_SPACING


def paginate(
    lines: List[str],
    page_size: PageSize = A4,
    margin: float = DEFAULT_MARGIN,
    font_size: float = BODY_FONT_SIZE,
    header_text: str = HEADER_TEXT,
    footer_text: Optional[str] = None,
) -> List[Page]:
    """
    Flow lines top-down onto pages, opening a new page when space runs out.

    The first page carries the header. The footer, when given, is stamped on
    every page. At least one page is always returned.
    """
    flow = _PageFlow(page_size, margin, font_size)
    flow.current.header = DrawnText(
        text=header_text,
        x=margin,
        y=page_size.height - margin,
        size=HEADER_FONT_SIZE,
        color=HEADER_COLOR,
    )

    for line in lines:
        flow.place(line)

    if footer_text:
        for page in flow.pages:
            page.footer = DrawnText(
                text=footer_text,
                x=margin,
                y=FOOTER_Y,
                size=FOOTER_FONT_SIZE,
                color=FOOTER_COLOR,
            )

    logger.debug("Laid out %d lines on %d pages", len(lines), len(flow.pages))
    return flow.pages


def layout_document(
    text: str,
    footer_text: Optional[str] = None,
    page_size: PageSize = A4,
    margin: float = DEFAULT_MARGIN,
    font_size: float = BODY_FONT_SIZE,
) -> List[Page]:
    """Wrap text to the printable width and paginate it."""
    max_width = page_size.width - 2 * margin
    lines = wrap_paragraphs(text, max_width, font_size)
    return paginate(lines, page_size, margin, font_size, footer_text=footer_text)
