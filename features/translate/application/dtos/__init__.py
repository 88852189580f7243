"""
DTOs (Data Transfer Objects) used by the PDF translation use case and API.

Following clean architecture principles:
- DTOs are organized by feature/domain
- Each DTO is in its own file for better organization
"""

from .translate_pdf_request_dto import TranslatePdfRequestDTO
from .translate_pdf_response_dto import TranslatePdfResponseDTO

__all__ = [
    "TranslatePdfRequestDTO",
    "TranslatePdfResponseDTO",
]
