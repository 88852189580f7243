"""
Application use cases for the PDF translation feature.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional

from features.translate.domain.entities import Segment, TranslatedSegment
from features.translate.domain.errors import (
    ConfigurationError,
    EmptyInputError,
    ExtractionError,
    PdfTranslationError,
    TranslationError,
)
from features.translate.domain.interfaces import IPdfEmitter, ITextExtractor, ITranslator
from features.translate.infrastructure.chunk_segmenter import (
    DEFAULT_MAX_SEGMENT_CHARS,
    PARAGRAPH_SEPARATOR,
    segment_text,
)
from features.translate.infrastructure.settings import DEFAULT_MIN_EXTRACTED_CHARS
from features.translate.infrastructure.text_layout import format_footer, layout_document
from .dtos import TranslatePdfRequestDTO, TranslatePdfResponseDTO

logger = logging.getLogger(__name__)


def translate_segments(
    segments: List[Segment],
    translator: ITranslator,
    target_language: str,
) -> List[TranslatedSegment]:
    """
    Translate segments one at a time, in order.

    The first failure aborts the whole run; no partial result is returned.
    """
    translated: List[TranslatedSegment] = []
    for segment in segments:
        logger.info(
            "Translating segment %d/%d (%d chars)",
            segment.index,
            len(segments),
            len(segment.text),
        )
        try:
            text = translator.translate(segment.text, target_language)
        except PdfTranslationError:
            raise
        except Exception as exc:
            logger.exception("Translator raised on segment %d", segment.index)
            raise TranslationError() from exc
        translated.append(TranslatedSegment(index=segment.index, source=segment.text, text=text))
    return translated


@dataclass
class TranslatePdfUseCase:
    """
    Full translation pipeline:

    1. Validate input and configuration
    2. Extract text from the uploaded PDF
    3. Segment the text under the provider's size limit
    4. Translate each segment in order
    5. Lay out the joined translation on fresh A4 pages and emit the PDF

    Follows clean architecture: depends on ports, not concrete adapters. A missing
    translator means the service has no credential configured.
    """

    extractor: ITextExtractor
    emitter: IPdfEmitter
    translator: Optional[ITranslator] = None
    max_segment_chars: int = DEFAULT_MAX_SEGMENT_CHARS
    min_extracted_chars: int = DEFAULT_MIN_EXTRACTED_CHARS
    today: Callable[[], date] = field(default=date.today)

    def execute(self, request: TranslatePdfRequestDTO) -> TranslatePdfResponseDTO:
        start = time.perf_counter()

        if not request.pdf_bytes:
            raise EmptyInputError()

        if self.translator is None:
            logger.error("No translation credential configured")
            raise ConfigurationError()

        extracted = self.extractor.extract_text(request.pdf_bytes)
        text = extracted.text.strip()
        logger.info("Extracted %d chars from %d pages", len(text), extracted.page_count)
        if len(text) < self.min_extracted_chars:
            logger.warning(
                "Extracted text too short (%d < %d chars), refusing to translate",
                len(text),
                self.min_extracted_chars,
            )
            raise ExtractionError()

        segments = segment_text(text, self.max_segment_chars)
        logger.info("Split text into %d segments", len(segments))

        translated = translate_segments(segments, self.translator, request.target_language)
        translated_text = PARAGRAPH_SEPARATOR.join(t.text for t in translated)

        footer = format_footer(self.today(), self.translator.provider_name)
        pages = layout_document(translated_text, footer_text=footer)
        pdf_bytes = self.emitter.emit(pages)

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            "Translated %d pages into %d pages (%d segments) in %d ms",
            extracted.page_count,
            len(pages),
            len(segments),
            elapsed_ms,
        )

        return TranslatePdfResponseDTO(
            pdf_bytes=pdf_bytes,
            original_pages=extracted.page_count,
            translated_pages=len(pages),
            segments=len(segments),
            processing_time_ms=elapsed_ms,
        )
