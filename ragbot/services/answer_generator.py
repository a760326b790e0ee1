"""
Answer generation from retrieved context.

Builds the question/context prompt, calls the LLM and cleans
its output for plain-text display.
"""

from typing import Optional

from ragbot.core.config import get_settings
from ragbot.core.logging import get_logger
from ragbot.services.llm_service import LLMService

logger = get_logger(__name__)


PROMPT_TEMPLATE = "Question: {question}\n\nContext:\n{context}\n\nAnswer:"


def build_context(context_texts: list[str]) -> str:
    """Join context snippets with blank-line separators."""
    return "\n\n".join(context_texts)


def build_prompt(question: str, context_texts: list[str]) -> str:
    return PROMPT_TEMPLATE.format(
        question=question,
        context=build_context(context_texts),
    )


def clean_answer(text: str) -> str:
    """Strip bold markers and collapse newlines to spaces."""
    return text.replace("**", "").replace("\n", " ")


class AnswerGenerator:
    """
    Generate a final answer from a question and ranked context.
    """

    def __init__(
        self,
        llm_service: Optional[LLMService] = None,
        system_instruction: Optional[str] = None,
    ):
        settings = get_settings()
        self.llm_service = llm_service or LLMService()
        self.system_instruction = (
            system_instruction
            if system_instruction is not None
            else settings.system_instruction
        )

    async def generate_answer(self, question: str, context_texts: list[str]) -> str:
        """
        Generate an answer to the question using the context texts.

        Args:
            question: User question
            context_texts: Corpus snippets, most relevant first

        Returns:
            Cleaned answer text

        Raises:
            UpstreamError: If the generation call fails
        """
        prompt = build_prompt(question, context_texts)

        raw = await self.llm_service.generate(
            prompt=prompt,
            system_instruction=self.system_instruction or None,
        )

        return clean_answer(raw)
