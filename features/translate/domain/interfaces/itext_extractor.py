"""
Interface for recovering plain text from PDF bytes.

Infrastructure adapters (e.g., PyMuPdfTextExtractor) implement this interface.
"""

from abc import ABC, abstractmethod

from features.translate.domain.entities import ExtractedText


class ITextExtractor(ABC):
    """Port for PDF text extraction."""

    @abstractmethod
    def extract_text(self, pdf_bytes: bytes) -> ExtractedText:
        """
        Extract the text of every page, pages separated by a blank line.

        Raises:
            ExtractionError: the bytes are not a readable PDF.
        """
        raise NotImplementedError
