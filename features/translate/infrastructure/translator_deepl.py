"""
DeepL REST API v2 adapter.

One DeepLTranslator is built per process from settings and reused across
requests; it holds a requests.Session and no per-request state.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from features.translate.domain.errors import TranslationError
from features.translate.domain.interfaces import ITranslator

logger = logging.getLogger(__name__)

DEEPL_FREE_API_URL = "https://api-free.deepl.com/v2"
DEEPL_PRO_API_URL = "https://api.deepl.com/v2"


def resolve_api_url(api_key: str, override: Optional[str] = None) -> str:
    """Free-tier keys end with ':fx' and must use the free endpoint."""
    if override:
        return override.rstrip("/")
    return DEEPL_FREE_API_URL if api_key.endswith(":fx") else DEEPL_PRO_API_URL


class DeepLTranslator(ITranslator):
    """ITranslator adapter calling DeepL's /translate endpoint."""

    provider_name = "DeepL"

    def __init__(
        self,
        api_key: str,
        source_lang: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self.source_lang = source_lang
        self.base_url = resolve_api_url(api_key, api_url)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"DeepL-Auth-Key {api_key}"})

    def translate(self, text: str, target_language: str) -> str:
        if not text.strip():
            return ""

        payload: Dict[str, Any] = {"text": [text], "target_lang": target_language.upper()}
        if self.source_lang:
            payload["source_lang"] = self.source_lang

        try:
            response = self.session.post(
                f"{self.base_url}/translate",
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.error("DeepL request failed: %s", exc)
            raise TranslationError() from exc

        if response.status_code != 200:
            # 403 bad key, 413 too large, 456 quota exceeded, 429 rate limited
            logger.error("DeepL returned status %s: %s", response.status_code, response.text[:500])
            raise TranslationError()

        try:
            data = response.json()
            translated = data["translations"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error("Unexpected DeepL response body: %s", response.text[:500])
            raise TranslationError() from exc

        return translated
