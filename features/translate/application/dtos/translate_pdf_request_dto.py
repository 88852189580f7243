"""
DTO for a PDF translation request.
"""

from dataclasses import dataclass


@dataclass
class TranslatePdfRequestDTO:
    """Raw uploaded bytes and the language to translate into."""

    pdf_bytes: bytes
    target_language: str
