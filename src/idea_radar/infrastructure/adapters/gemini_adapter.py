"""Google Gemini Adapter (LanguageModel-Implementierung via google-genai)."""

from __future__ import annotations

import logging
import time
from typing import Any

from google import genai
from google.genai import errors as genai_errors

from idea_radar.domain.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class GeminiAdapter:
    """Async-Adapter fuer die Gemini API.

    Der Client wird erst beim ersten Aufruf erzeugt, damit die App auch
    ohne API-Key startet (Health, Trends).
    """

    TEMPERATURE = 0.7

    def __init__(self, api_key: str = "", model: str = "gemini-2.0-flash") -> None:
        self._api_key = api_key
        self._model = model
        self._client: genai.Client | None = None

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _get_client(self) -> genai.Client:
        if not self._api_key:
            raise UpstreamError("GEMINI_API_KEY is not configured")
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate(self, prompt: str) -> str:
        """Prompt senden, Antworttext zurueckgeben."""
        client = self._get_client()
        config: dict[str, Any] = {"temperature": self.TEMPERATURE}

        t0 = time.monotonic()
        try:
            response = await client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as e:
            elapsed_ms = int((time.monotonic() - t0) * 1000)
            logger.warning("Gemini %s -> %s (%dms)", self._model, e.code, elapsed_ms)
            if e.code == 429:
                raise UpstreamError(f"Gemini rate limit exceeded: {e}") from e
            raise UpstreamError(f"Gemini request failed: {e}") from e

        elapsed_ms = int((time.monotonic() - t0) * 1000)
        text = response.text or ""
        logger.info(
            "Gemini %s -> %d chars (%dms)", self._model, len(text), elapsed_ms
        )
        if not text:
            raise UpstreamError("Gemini returned an empty response")
        return text
