"""Runtime configuration for the PDF translation service."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping, Optional

from features.translate.infrastructure.chunk_segmenter import DEFAULT_MAX_SEGMENT_CHARS


DEFAULT_TARGET_LANG = "FR"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MIN_EXTRACTED_CHARS = 10
DEFAULT_MAX_UPLOAD_BYTES = 50 * 1024 * 1024


def _parse_positive_int(*, name: str, raw_value: str, minimum: int = 1) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _parse_positive_float(*, name: str, raw_value: str, minimum: float = 0.001) -> float:
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw_value!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


@dataclass(frozen=True, slots=True)
class TranslationSettings:
    """
    Validated translation settings.

    A missing API key is not a load error: it is reported per request so the
    service can still start and answer health checks.
    """

    api_key: Optional[str] = None
    target_lang: str = DEFAULT_TARGET_LANG
    source_lang: Optional[str] = None
    api_url: Optional[str] = None
    max_segment_chars: int = DEFAULT_MAX_SEGMENT_CHARS
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    min_extracted_chars: int = DEFAULT_MIN_EXTRACTED_CHARS
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "TranslationSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        api_key = source.get("DEEPL_API_KEY", "").strip() or None

        target_lang = source.get("TRANSLATION_TARGET_LANG", DEFAULT_TARGET_LANG).strip().upper()
        if not target_lang:
            raise ValueError("TRANSLATION_TARGET_LANG cannot be empty")
        source_lang = source.get("TRANSLATION_SOURCE_LANG", "").strip().upper() or None

        api_url = source.get("DEEPL_API_URL", "").strip() or None
        if api_url is not None and not (api_url.startswith("http://") or api_url.startswith("https://")):
            raise ValueError("DEEPL_API_URL must start with http:// or https://")

        return cls(
            api_key=api_key,
            target_lang=target_lang,
            source_lang=source_lang,
            api_url=api_url.rstrip("/") if api_url else None,
            max_segment_chars=_parse_positive_int(
                name="TRANSLATION_MAX_SEGMENT_CHARS",
                raw_value=source.get("TRANSLATION_MAX_SEGMENT_CHARS", str(DEFAULT_MAX_SEGMENT_CHARS)),
            ),
            timeout_seconds=_parse_positive_float(
                name="TRANSLATION_TIMEOUT_SECONDS",
                raw_value=source.get("TRANSLATION_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)),
            ),
            min_extracted_chars=_parse_positive_int(
                name="MIN_EXTRACTED_CHARS",
                raw_value=source.get("MIN_EXTRACTED_CHARS", str(DEFAULT_MIN_EXTRACTED_CHARS)),
            ),
            max_upload_bytes=_parse_positive_int(
                name="MAX_UPLOAD_BYTES",
                raw_value=source.get("MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES)),
            ),
        )
