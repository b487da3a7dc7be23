"""Google Cloud Translation (v3) with chunking for large texts."""
from __future__ import annotations

import logging
from typing import Any, Optional

from google.cloud import translate_v3

from docbridge.errors import TranslationError
from docbridge.utils.concurrency import gather_all
from docbridge.utils.text import chunk_text

logger = logging.getLogger(__name__)

MAX_TRANSLATE_CHUNK = 25_000  # Google's per-request character limit


class GoogleTranslator:
    def __init__(
        self,
        project_id: str,
        location: str = "global",
        client: Optional[Any] = None,
        max_chars: int = MAX_TRANSLATE_CHUNK,
    ):
        self.project_id = project_id
        self.location = location
        self.max_chars = max_chars
        self._client = client
        self._owns_client = client is None

    @property
    def parent(self) -> str:
        return f"projects/{self.project_id}/locations/{self.location}"

    @property
    def client(self):
        # The gRPC asyncio channel binds to the running loop, so build it lazily.
        if self._client is None:
            self._client = translate_v3.TranslationServiceAsyncClient()
        return self._client

    async def aclose(self) -> None:
        """Close the gRPC channel if this translator opened it."""
        if self._owns_client and self._client is not None:
            await self._client.transport.close()
            self._client = None

    async def translate_chunk(self, text: str, target_code: str, source_code: str = "en") -> str:
        if not self.project_id:
            raise TranslationError("GOOGLE_CLOUD_PROJECT_ID is missing")
        try:
            response = await self.client.translate_text(
                request={
                    "parent": self.parent,
                    "contents": [text],
                    "mime_type": "text/plain",
                    "source_language_code": source_code,
                    "target_language_code": target_code,
                }
            )
        except Exception as e:
            raise TranslationError(f"Translation failed: {type(e).__name__}: {e}") from e

        translations = list(getattr(response, "translations", None) or [])
        translated = translations[0].translated_text if translations else ""
        if not translated:
            raise TranslationError("Translation API returned empty result")
        return translated

    async def translate(self, text: str, target_code: str, source_code: str = "en") -> str:
        if len(text) <= self.max_chars:
            return await self.translate_chunk(text, target_code, source_code)

        chunks = chunk_text(text, self.max_chars)
        if not chunks:
            raise TranslationError("Translation API returned empty result")
        logger.info("Translating %d characters in %d chunks", len(text), len(chunks))
        translated = await gather_all(
            *(self.translate_chunk(chunk, target_code, source_code) for chunk in chunks)
        )
        return " ".join(translated)
