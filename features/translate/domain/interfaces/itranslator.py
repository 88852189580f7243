"""
Interface for the remote translation provider.

Infrastructure adapters (e.g., DeepLTranslator) implement this interface.
"""

from abc import ABC, abstractmethod


class ITranslator(ABC):
    """Port for translating a single piece of text."""

    #: Shown in the footer of generated documents.
    provider_name: str = "Translation API"

    @abstractmethod
    def translate(self, text: str, target_language: str) -> str:
        """
        Translate text into target_language.

        Raises:
            TranslationError: the provider call failed for any reason.
        """
        raise NotImplementedError
