"""
LLM service for text generation using Gemini.

Provides an abstraction layer over the generateContent endpoint
with proper error handling and configuration.
"""

from typing import Optional

from ragbot.core.config import get_settings
from ragbot.core.exceptions import UpstreamError
from ragbot.core.logging import get_logger
from ragbot.services.gemini_client import GeminiClient

logger = get_logger(__name__)


class LLMService:
    """
    Gemini-based LLM service for text generation.
    """

    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        model: Optional[str] = None,
    ):
        settings = get_settings()
        self.client = client or GeminiClient()
        self.model = model or settings.generation_model

    async def generate(
        self,
        prompt: str,
        system_instruction: Optional[str] = None,
    ) -> str:
        """
        Generate text completion.

        Args:
            prompt: User prompt
            system_instruction: Optional system instruction

        Returns:
            Generated text
        """
        payload: dict = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }

        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        result = await self.client.call(self.model, "generateContent", payload)

        try:
            parts = result["candidates"][0]["content"]["parts"]
            return "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError):
            feedback = result.get("promptFeedback", {}) if isinstance(result, dict) else {}
            raise UpstreamError(
                message="Generation response contains no candidates",
                details={"prompt_feedback": feedback},
            )

    async def health_check(self) -> bool:
        """Check if the generation model is reachable."""
        return await self.client.get_model(self.model)
