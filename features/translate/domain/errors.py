"""
Error taxonomy for the PDF translation pipeline.

Every failure is terminal for the request. Each error carries the message shown
to the caller and the HTTP status it maps to.
"""

from __future__ import annotations


class PdfTranslationError(Exception):
    """Base class for all user-visible pipeline failures."""

    status_code: int = 500
    default_message: str = "Internal server error during PDF translation"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class EmptyInputError(PdfTranslationError):
    status_code = 400
    default_message = "No PDF data provided in request body"


class UnsupportedMediaTypeError(PdfTranslationError):
    status_code = 400
    default_message = "Only PDF files are allowed"


class PayloadTooLargeError(PdfTranslationError):
    status_code = 413
    default_message = "PDF exceeds the maximum upload size"


class ConfigurationError(PdfTranslationError):
    """Operator-fixable: the translation credential is missing."""

    status_code = 500
    default_message = "Translation API key not configured"


class ExtractionError(PdfTranslationError):
    status_code = 400
    default_message = (
        "Could not extract text from PDF. "
        "Please make sure the PDF contains selectable text."
    )


class TranslationError(PdfTranslationError):
    status_code = 500
    default_message = "Translation failed"


class EmissionError(PdfTranslationError):
    status_code = 500
    default_message = "Failed to generate translated PDF"
