"""
Interface for serializing laid-out pages into PDF bytes.

Infrastructure adapters (e.g., PyMuPdfEmitter) implement this interface.
"""

from abc import ABC, abstractmethod
from typing import List

from features.translate.domain.entities import Page


class IPdfEmitter(ABC):
    """Port for PDF emission."""

    @abstractmethod
    def emit(self, pages: List[Page]) -> bytes:
        """
        Render pages in order and return the serialized document.

        Raises:
            EmissionError: the document could not be assembled.
        """
        raise NotImplementedError
