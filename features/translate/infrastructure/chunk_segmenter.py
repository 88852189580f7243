"""
Segmenting extracted text into translation-sized pieces.

Remote translation providers cap the size of a single request, so the text is
cut into ordered segments of at most ``max_size`` characters:

  - Paragraphs (split on a blank line) are accumulated greedily.
  - A paragraph that alone exceeds the limit is split on ". " and its
    sentences are accumulated the same way.
  - A sentence that alone exceeds the limit is emitted verbatim as its own
    segment. No further splitting happens below sentence level.

Joining the segments with PARAGRAPH_SEPARATOR gives back the source text up to
whitespace at segment boundaries.
"""

from __future__ import annotations

import logging
from typing import List

from features.translate.domain.entities import Segment

logger = logging.getLogger(__name__)

PARAGRAPH_SEPARATOR = "\n\n"
SENTENCE_SEPARATOR = ". "
DEFAULT_MAX_SEGMENT_CHARS = 5000


class _SegmentAccumulator:
    """Greedy buffer that flushes into a shared output list."""

    def __init__(self, max_size: int) -> None:
        self.max_size = max_size
        self.buffer = ""
        self.segments: List[str] = []

    def flush(self) -> None:
        text = self.buffer.strip()
        if text:
            self.segments.append(text)
        self.buffer = ""

    def fits(self, piece: str) -> bool:
        return len(self.buffer) + len(piece) <= self.max_size

    def add_paragraph(self, paragraph: str) -> None:
        if not self.fits(paragraph) and self.buffer:
            self.flush()

        if len(paragraph) > self.max_size:
            self._add_sentences(paragraph)
        else:
            self.buffer += paragraph
        self.buffer += PARAGRAPH_SEPARATOR

    def _add_sentences(self, paragraph: str) -> None:
        sentences = paragraph.split(SENTENCE_SEPARATOR)
        # Keep the separator on every sentence but the last so nothing is lost.
        pieces = [s + SENTENCE_SEPARATOR for s in sentences[:-1]] + [sentences[-1]]

        for piece in pieces:
            if self.fits(piece):
                self.buffer += piece
                continue

            if self.buffer:
                self.flush()

            if len(piece) > self.max_size:
                logger.warning(
                    "Sentence of %d chars exceeds segment limit %d, emitting as-is",
                    len(piece),
                    self.max_size,
                )
                self.buffer = piece
                self.flush()
            else:
                self.buffer = piece


def split_text_into_chunks(text: str, max_size: int = DEFAULT_MAX_SEGMENT_CHARS) -> List[str]:
    """
    Split text into ordered, trimmed, non-empty chunks of at most max_size chars.

    Single sentences longer than max_size are the only chunks allowed to exceed it.
    """
    if max_size <= 0:
        raise ValueError("max_size must be > 0")
    if not text or not text.strip():
        return []

    acc = _SegmentAccumulator(max_size)
    for paragraph in text.split(PARAGRAPH_SEPARATOR):
        acc.add_paragraph(paragraph)
    acc.flush()

    logger.debug("Split %d chars into %d chunks (max %d)", len(text), len(acc.segments), max_size)
    return acc.segments


def segment_text(text: str, max_size: int = DEFAULT_MAX_SEGMENT_CHARS) -> List[Segment]:
    """Same as split_text_into_chunks, wrapped into 1-indexed Segment entities."""
    return [
        Segment(index=i, text=chunk)
        for i, chunk in enumerate(split_text_into_chunks(text, max_size), start=1)
    ]
