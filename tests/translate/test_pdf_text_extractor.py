from __future__ import annotations

import fitz
import pytest

from features.translate.domain.errors import ExtractionError
from features.translate.infrastructure.pdf_text_extractor_pymupdf import (
    PyMuPdfTextExtractor,
    extract_pdf_text,
)


def test_extracts_single_page_text(hello_pdf: bytes) -> None:
    result = PyMuPdfTextExtractor().extract_text(hello_pdf)

    assert result.text == "Hello world."
    assert result.page_count == 1


def test_pages_are_separated_by_blank_line(make_pdf) -> None:
    pdf = make_pdf(["Page one text"], ["Page two text"])

    result = extract_pdf_text(pdf)

    assert result.text == "Page one text\n\nPage two text"
    assert result.page_count == 2


def test_page_without_text_contributes_nothing(make_pdf) -> None:
    pdf = make_pdf([], ["Only the second page has text"])

    result = extract_pdf_text(pdf)

    assert result.text == "Only the second page has text"
    assert result.page_count == 2


def test_blank_document_yields_empty_text(make_pdf) -> None:
    result = extract_pdf_text(make_pdf([]))
    assert result.text == ""


def test_garbage_bytes_raise_extraction_error() -> None:
    with pytest.raises(ExtractionError):
        extract_pdf_text(b"this is definitely not a pdf")


def test_password_protected_pdf_is_rejected() -> None:
    with fitz.open() as doc:
        page = doc.new_page()
        page.insert_text(fitz.Point(72, 72), "Secret text", fontsize=12)
        data = doc.tobytes(
            encryption=fitz.PDF_ENCRYPT_AES_256,
            owner_pw="owner",
            user_pw="user",
        )

    with pytest.raises(ExtractionError) as excinfo:
        extract_pdf_text(data)
    assert "password" in excinfo.value.message
