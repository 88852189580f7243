"""
Plain-text extraction from PDF bytes with PyMuPDF.

Text is read block by block in reading order. The lines of one block are
joined with spaces into a single paragraph; blocks and pages are separated by
a blank line so the segmenter sees them as paragraph boundaries.

Image-only pages yield no text. There is no OCR here and no fallback content:
callers decide what an empty result means.
"""

from __future__ import annotations

import logging
from typing import List

import fitz  # PyMuPDF

from features.translate.domain.entities import ExtractedText
from features.translate.domain.errors import ExtractionError
from features.translate.domain.interfaces import ITextExtractor
from features.translate.infrastructure.chunk_segmenter import PARAGRAPH_SEPARATOR

logger = logging.getLogger(__name__)


def _block_to_paragraph(raw_text: str) -> str:
    lines = [ln.strip() for ln in (raw_text or "").splitlines()]
    return " ".join(ln for ln in lines if ln)


def _extract_page_paragraphs(page: "fitz.Page") -> List[str]:
    """
    Text blocks of one page, in reading order.

    block format: (x0, y0, x1, y1, text, block_no, block_type, ...)
    """
    paragraphs: List[str] = []
    for block in page.get_text("blocks", sort=True) or []:
        if len(block) < 7:
            continue

        text, block_type = block[4], block[6]
        # 0 = text block according to PyMuPDF
        if block_type != 0:
            continue

        paragraph = _block_to_paragraph(text)
        if paragraph:
            paragraphs.append(paragraph)
    return paragraphs


def extract_pdf_text(pdf_bytes: bytes) -> ExtractedText:
    """
    Extract the text of every page of an in-memory PDF.

    Raises:
        ExtractionError: not a PDF, corrupt, or password protected.
    """
    try:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    except Exception as exc:
        logger.warning("PyMuPDF could not open document: %s", exc)
        raise ExtractionError() from exc

    with doc:
        if doc.needs_pass:
            logger.warning("Document is password protected")
            raise ExtractionError(
                "Could not extract text from PDF: the document is password protected."
            )
        if doc.page_count == 0:
            logger.warning("Document has no pages")
            raise ExtractionError()

        page_texts: List[str] = []
        try:
            for page in doc:
                paragraphs = _extract_page_paragraphs(page)
                logger.debug("Page %d: %d text blocks", page.number + 1, len(paragraphs))
                if paragraphs:
                    page_texts.append(PARAGRAPH_SEPARATOR.join(paragraphs))
        except Exception as exc:
            logger.warning("PyMuPDF failed while reading pages: %s", exc)
            raise ExtractionError() from exc

        page_count = doc.page_count

    return ExtractedText(text=PARAGRAPH_SEPARATOR.join(page_texts), page_count=page_count)


class PyMuPdfTextExtractor(ITextExtractor):
    """ITextExtractor adapter backed by PyMuPDF."""

    def extract_text(self, pdf_bytes: bytes) -> ExtractedText:
        return extract_pdf_text(pdf_bytes)
