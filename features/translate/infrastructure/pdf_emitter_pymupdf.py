"""
PDF emission with PyMuPDF.

Pages come in fully laid out (see text_layout). Layout uses PDF coordinates
with a bottom-left origin, while PyMuPDF places text from a top-left origin,
so y is flipped here.

The Base-14 fonts only cover Latin-1, so text is drawn with embedded Unicode
fonts: Noto Sans for Latin, Greek and Cyrillic, Droid Sans Fallback for CJK.
Each character goes to the first font that has a glyph for it, and consecutive
characters sharing a font are drawn as one run.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, List, Set, Tuple

import fitz  # PyMuPDF

from features.translate.domain.entities import DrawnText, Page
from features.translate.domain.errors import EmissionError
from features.translate.domain.interfaces import IPdfEmitter

logger = logging.getLogger(__name__)

# Page-level resource name -> PyMuPDF font name, in lookup order
FONT_SOURCES: Dict[str, str] = {
    "F0": "notos",  # Noto Sans, from pymupdf-fonts
    "F1": "cjk",  # Droid Sans Fallback, bundled with PyMuPDF
}
DEFAULT_FONT = "F0"


@lru_cache(maxsize=None)
def _load_font(resource_name: str) -> "fitz.Font":
    return fitz.Font(FONT_SOURCES[resource_name])


def _font_for(ch: str) -> str:
    for resource_name in FONT_SOURCES:
        if _load_font(resource_name).has_glyph(ord(ch)):
            return resource_name
    return DEFAULT_FONT


def split_font_runs(text: str) -> List[Tuple[str, str]]:
    """Cut text into (font resource name, run) pairs, keeping order."""
    runs: List[Tuple[str, str]] = []
    for ch in text:
        resource_name = DEFAULT_FONT if ch.isspace() else _font_for(ch)
        if runs and runs[-1][0] == resource_name:
            runs[-1] = (resource_name, runs[-1][1] + ch)
        else:
            runs.append((resource_name, ch))
    return runs


def _draw(
    pdf_page: "fitz.Page",
    item: DrawnText,
    page_height: float,
    embedded: Set[str],
) -> None:
    if not item.text:
        return

    x = item.x
    y = page_height - item.y
    for resource_name, run in split_font_runs(item.text):
        font = _load_font(resource_name)
        if resource_name not in embedded:
            pdf_page.insert_font(fontname=resource_name, fontbuffer=font.buffer)
            embedded.add(resource_name)
        pdf_page.insert_text(
            fitz.Point(x, y),
            run,
            fontsize=item.size,
            fontname=resource_name,
            color=item.color,
        )
        x += font.text_length(run, fontsize=item.size)


def render_pages(pages: List[Page]) -> bytes:
    """
    Serialize laid-out pages into a PDF document.

    Raises:
        EmissionError: PyMuPDF failed to build or save the document.
    """
    try:
        with fitz.open() as doc:
            for page in pages:
                pdf_page = doc.new_page(width=page.size.width, height=page.size.height)
                embedded: Set[str] = set()
                for item in page.drawn():
                    _draw(pdf_page, item, page.size.height, embedded)
            data = doc.tobytes(garbage=3, deflate=True)
    except Exception as exc:
        logger.exception("PDF emission failed")
        raise EmissionError() from exc

    logger.debug("Emitted %d pages, %d bytes", len(pages), len(data))
    return data


class PyMuPdfEmitter(IPdfEmitter):
    """IPdfEmitter adapter backed by PyMuPDF."""

    def emit(self, pages: List[Page]) -> bytes:
        return render_pages(pages)
