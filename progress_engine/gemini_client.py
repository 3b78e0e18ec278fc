"""
Gemini text model client.

The engine consumes one capability from the model API:
``generate_content(prompt) -> text``. Anything with that coroutine
(see TextModel) can stand in for Gemini, which is how tests run
without network access.
"""

import logging
from typing import Optional, Protocol

from google import genai

from .config import GEMINI_MODEL
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class TextModel(Protocol):
    async def generate_content(self, prompt: str) -> str:
        ...


class GeminiTextModel:
    """Async Gemini client returning plain reply text."""

    def __init__(self, api_key: str, model_name: Optional[str] = None):
        if not api_key:
            raise ConfigurationError("API key is required for progress tracking")
        self.model_name = model_name or GEMINI_MODEL
        self.client = genai.Client(api_key=api_key)
        logger.info(f"Gemini enabled with {self.model_name} model")

    async def generate_content(self, prompt: str) -> str:
        response = await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=prompt,
        )
        text = response.text or ""
        logger.debug(f"Gemini generated response ({len(text)} chars)")
        return text
