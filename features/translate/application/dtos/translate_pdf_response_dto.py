"""
DTO for a PDF translation result.
"""

from dataclasses import dataclass


@dataclass
class TranslatePdfResponseDTO:
    """
    Output of the translation pipeline.

    Only pdf_bytes is sent to the caller; the counters are for logging.
    """

    pdf_bytes: bytes
    original_pages: int
    translated_pages: int
    segments: int
    processing_time_ms: int
