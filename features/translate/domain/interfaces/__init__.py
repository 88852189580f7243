"""
Domain interfaces (ports) for the PDF translation feature.

Following clean architecture principles:
- Domain defines interfaces (ports)
- Infrastructure implements interfaces (adapters)
- Application orchestrates via interfaces

Each interface is defined in its own file for better organization.
"""

from .itext_extractor import ITextExtractor
from .itranslator import ITranslator
from .ipdf_emitter import IPdfEmitter

__all__ = ["ITextExtractor", "ITranslator", "IPdfEmitter"]
