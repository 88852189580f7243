"""
FastAPI routes for the PDF translation feature.

Feature: synchronous "extract + translate + re-layout" of an uploaded PDF.
The request body is the raw PDF; the response is the translated PDF as a
download, or a JSON error body.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from features.translate.application.dtos import TranslatePdfRequestDTO, TranslatePdfResponseDTO
from features.translate.application.use_cases import TranslatePdfUseCase
from features.translate.domain.errors import (
    EmptyInputError,
    PayloadTooLargeError,
    PdfTranslationError,
    UnsupportedMediaTypeError,
)
from features.translate.domain.interfaces import ITranslator
from features.translate.infrastructure.pdf_emitter_pymupdf import PyMuPdfEmitter
from features.translate.infrastructure.pdf_text_extractor_pymupdf import PyMuPdfTextExtractor
from features.translate.infrastructure.settings import TranslationSettings
from features.translate.infrastructure.translator_deepl import DeepLTranslator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["translate"])

OUTPUT_FILENAME = "translated-document.pdf"
INTERNAL_ERROR_MESSAGE = "Internal server error during PDF translation"
PDF_MEDIA_TYPE = "application/pdf"
MEGABYTE = 1024 * 1024


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class PingResponse(BaseModel):
    message: str


@lru_cache(maxsize=1)
def get_settings() -> TranslationSettings:
    """Settings are read once per process."""
    return TranslationSettings.from_env()


@lru_cache(maxsize=1)
def get_translator() -> Optional[ITranslator]:
    """
    Process-wide translation client, built on first use.

    Returns None when no credential is configured; the use case reports that
    per request.
    """
    settings = get_settings()
    if not settings.has_api_key:
        logger.warning("DEEPL_API_KEY is not set; translation requests will fail")
        return None
    return DeepLTranslator(
        api_key=settings.api_key,
        source_lang=settings.source_lang,
        api_url=settings.api_url,
        timeout=settings.timeout_seconds,
    )


def build_translate_pdf_use_case(
    settings: TranslationSettings,
    translator: Optional[ITranslator],
) -> TranslatePdfUseCase:
    """Build PDF translation use case with PyMuPDF extraction and emission."""
    return TranslatePdfUseCase(
        extractor=PyMuPdfTextExtractor(),
        emitter=PyMuPdfEmitter(),
        translator=translator,
        max_segment_chars=settings.max_segment_chars,
        min_extracted_chars=settings.min_extracted_chars,
    )


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def _check_declared_size(request: Request, max_bytes: int) -> None:
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise PayloadTooLargeError(_too_large_message(max_bytes))


def _too_large_message(max_bytes: int) -> str:
    if max_bytes >= MEGABYTE:
        return f"PDF exceeds the maximum upload size of {max_bytes // MEGABYTE} MB"
    return f"PDF exceeds the maximum upload size of {max_bytes} bytes"


async def read_limited_body(request: Request, max_bytes: int) -> bytes:
    """
    Read the request body, giving up as soon as it grows past max_bytes.

    Chunked uploads carry no Content-Length, so the cap is enforced while
    streaming.
    """
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise PayloadTooLargeError(_too_large_message(max_bytes))
    return bytes(body)


def _check_content_type(request: Request) -> None:
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if media_type != PDF_MEDIA_TYPE:
        raise UnsupportedMediaTypeError()


@router.get("/ping", response_model=PingResponse)
def ping() -> PingResponse:
    return PingResponse(message="PDF translation service is running")


@router.post(
    "/translate-pdf",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Translated PDF"},
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def translate_pdf(
    request: Request,
    settings: TranslationSettings = Depends(get_settings),
    translator: Optional[ITranslator] = Depends(get_translator),
) -> Response:
    """
    Translate an uploaded PDF (raw application/pdf body).

    Runs:
      - Text extraction (PyMuPDF, selectable text only)
      - Segmentation under the provider's request size limit
      - Sequential translation of every segment
      - Re-layout onto fresh A4 pages and PDF emission
    """
    try:
        _check_declared_size(request, settings.max_upload_bytes)
        body = await read_limited_body(request, settings.max_upload_bytes)
        if not body:
            raise EmptyInputError()
        _check_content_type(request)

        use_case = build_translate_pdf_use_case(settings, translator)
        dto_in = TranslatePdfRequestDTO(pdf_bytes=body, target_language=settings.target_lang)
        dto_out: TranslatePdfResponseDTO = await run_in_threadpool(use_case.execute, dto_in)
    except PdfTranslationError as e:
        logger.warning("PDF translation rejected (%s): %s", type(e).__name__, e.message)
        return _error_response(e.status_code, e.message)
    except Exception:
        logger.exception("PDF translation error")
        return _error_response(500, INTERNAL_ERROR_MESSAGE)

    logger.info(
        "Sending translated PDF: %d bytes, %d pages, %d ms",
        len(dto_out.pdf_bytes),
        dto_out.translated_pages,
        dto_out.processing_time_ms,
    )
    return Response(
        content=dto_out.pdf_bytes,
        media_type=PDF_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{OUTPUT_FILENAME}"',
            "Content-Length": str(len(dto_out.pdf_bytes)),
        },
    )
