from __future__ import annotations

import asyncio
from datetime import date

import pytest
from fastapi.testclient import TestClient

from features.translate.domain.errors import PayloadTooLargeError
from features.translate.infrastructure.settings import TranslationSettings
from features.translate.presentation import api
from features.translate.presentation.api import get_settings, get_translator, read_limited_body
from main import app

PDF_HEADERS = {"Content-Type": "application/pdf"}


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def configure(client):
    """Override settings and translator for the duration of a test."""

    def _configure(translator=None, **settings_kwargs) -> None:
        settings = TranslationSettings(api_key="test-key" if translator else None, **settings_kwargs)
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_translator] = lambda: translator

    return _configure


def test_health_and_ping(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}
    assert "message" in client.get("/api/ping").json()


def test_empty_body_is_rejected(client, configure, fake_translator) -> None:
    configure(fake_translator)

    response = client.post("/api/translate-pdf", content=b"", headers=PDF_HEADERS)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "No PDF data provided in request body"}


def test_missing_credential_is_reported(client, configure, hello_pdf) -> None:
    configure(None)

    response = client.post("/api/translate-pdf", content=hello_pdf, headers=PDF_HEADERS)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Translation API key not configured"}


def test_successful_translation_returns_pdf(
    client, configure, fake_translator, hello_pdf, read_pdf_text
) -> None:
    configure(fake_translator)

    response = client.post("/api/translate-pdf", content=hello_pdf, headers=PDF_HEADERS)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="translated-document.pdf"'
    assert response.headers["content-length"] == str(len(response.content))

    pages = read_pdf_text(response.content)
    assert len(pages) >= 1
    assert "Translated Document" in pages[0]
    assert "Bonjour le monde." in pages[0]
    assert date.today().strftime("%m/%d/%Y") in pages[0]
    assert fake_translator.calls == [("Hello world.", "FR")]


def test_target_language_comes_from_settings(client, configure, fake_translator, hello_pdf) -> None:
    configure(fake_translator, target_lang="DE")

    client.post("/api/translate-pdf", content=hello_pdf, headers=PDF_HEADERS)

    assert fake_translator.calls == [("Hello world.", "DE")]


def test_unreadable_pdf_is_an_extraction_error(client, configure, fake_translator) -> None:
    configure(fake_translator)

    response = client.post("/api/translate-pdf", content=b"not a pdf at all", headers=PDF_HEADERS)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "selectable text" in body["error"]
    assert fake_translator.calls == []


def test_image_only_pdf_is_not_replaced_with_placeholder(client, configure, fake_translator, make_pdf) -> None:
    configure(fake_translator)

    response = client.post("/api/translate-pdf", content=make_pdf([]), headers=PDF_HEADERS)

    assert response.status_code == 400
    assert fake_translator.calls == []


def test_translation_failure_returns_json_error(client, configure, translator_factory, hello_pdf) -> None:
    configure(translator_factory(fail_on=1))

    response = client.post("/api/translate-pdf", content=hello_pdf, headers=PDF_HEADERS)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Translation failed"}


def test_oversized_body_is_rejected(client, configure, fake_translator, hello_pdf) -> None:
    configure(fake_translator, max_upload_bytes=16)

    response = client.post("/api/translate-pdf", content=hello_pdf, headers=PDF_HEADERS)

    assert response.status_code == 413
    assert response.json()["success"] is False
    assert fake_translator.calls == []


def test_unexpected_error_is_formatted(client, configure, fake_translator, hello_pdf, monkeypatch) -> None:
    configure(fake_translator)

    def _boom(*args, **kwargs):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(
        "features.translate.presentation.api.build_translate_pdf_use_case", _boom
    )

    response = client.post("/api/translate-pdf", content=hello_pdf, headers=PDF_HEADERS)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Internal server error during PDF translation",
    }


class _StreamingRequest:
    """Minimal stand-in exposing Starlette's Request.stream()."""

    def __init__(self, chunks: list[bytes]) -> None:
        self.chunks = chunks
        self.consumed = 0

    async def stream(self):
        for chunk in self.chunks:
            self.consumed += 1
            yield chunk


def test_body_reading_stops_once_limit_is_passed() -> None:
    request = _StreamingRequest([b"x" * 1024] * 50)

    with pytest.raises(PayloadTooLargeError):
        asyncio.run(read_limited_body(request, 16))
    assert request.consumed == 1


def test_body_within_limit_is_read_whole() -> None:
    request = _StreamingRequest([b"%PDF", b"-1.7", b""])
    assert asyncio.run(read_limited_body(request, 16)) == b"%PDF-1.7"


def test_chunked_upload_over_limit_is_rejected(client, configure, fake_translator) -> None:
    configure(fake_translator, max_upload_bytes=16)

    def _chunks():
        for _ in range(50):
            yield b"x" * 1024

    response = client.post("/api/translate-pdf", content=_chunks(), headers=PDF_HEADERS)

    assert response.status_code == 413
    assert response.json() == {
        "success": False,
        "error": "PDF exceeds the maximum upload size of 16 bytes",
    }
    assert fake_translator.calls == []


def test_size_message_uses_megabytes_for_large_limits() -> None:
    assert api._too_large_message(50 * 1024 * 1024).endswith("of 50 MB")
    assert api._too_large_message(1000).endswith("of 1000 bytes")


@pytest.mark.parametrize("content_type", ["text/plain", "application/json", "image/png"])
def test_non_pdf_content_type_is_rejected(client, configure, fake_translator, hello_pdf, content_type) -> None:
    configure(fake_translator)

    response = client.post("/api/translate-pdf", content=hello_pdf, headers={"Content-Type": content_type})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Only PDF files are allowed"}
    assert fake_translator.calls == []


def test_pdf_content_type_with_parameters_is_accepted(client, configure, fake_translator, hello_pdf) -> None:
    configure(fake_translator)

    response = client.post(
        "/api/translate-pdf",
        content=hello_pdf,
        headers={"Content-Type": "Application/PDF; name=doc.pdf"},
    )

    assert response.status_code == 200
