from __future__ import annotations

from typing import Callable, List

import fitz
import pytest

from features.translate.domain.errors import TranslationError
from features.translate.domain.interfaces import ITranslator


class FakeTranslator(ITranslator):
    """Translates through a lookup table, falling back to an upper-cased copy."""

    provider_name = "FakeProvider"

    def __init__(self, table: dict[str, str] | None = None, fail_on: int | None = None) -> None:
        self.table = table or {}
        self.fail_on = fail_on
        self.calls: List[tuple[str, str]] = []

    def translate(self, text: str, target_language: str) -> str:
        self.calls.append((text, target_language))
        if self.fail_on is not None and len(self.calls) == self.fail_on:
            raise TranslationError()
        return self.table.get(text, text.upper())


def _build_pdf(pages: List[List[str]]) -> bytes:
    with fitz.open() as doc:
        for page_lines in pages:
            page = doc.new_page(width=595.28, height=841.89)
            y = 72.0
            for line in page_lines:
                page.insert_text(fitz.Point(72, y), line, fontsize=12, fontname="helv")
                y += 120.0
        return doc.tobytes()


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Build an in-memory PDF; each argument is the list of text lines of one page."""

    def _make(*pages: List[str]) -> bytes:
        return _build_pdf(list(pages) or [[]])

    return _make


@pytest.fixture
def hello_pdf(make_pdf) -> bytes:
    return make_pdf(["Hello world."])


@pytest.fixture
def fake_translator() -> FakeTranslator:
    return FakeTranslator({"Hello world.": "Bonjour le monde."})


@pytest.fixture
def read_pdf_text() -> Callable[[bytes], List[str]]:
    """Text of every page of a serialized PDF."""

    def _read(pdf_bytes: bytes) -> List[str]:
        with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
            return [page.get_text() for page in doc]

    return _read


@pytest.fixture
def translator_factory() -> Callable[..., FakeTranslator]:
    return FakeTranslator
