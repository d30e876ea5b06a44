"""Poster and promotional copy derived from an approved summary."""

from promoposter.generation.client_base import BaseGenerationClient
from promoposter.generation.exceptions import GenerationServiceError
from promoposter.generation.prompt_loader import load_prompt_template
from promoposter.logging.logger import Log

FALLBACK_POSTER_TEXT = "- 텍스트 생성 실패"


class Copywriter:
    def __init__(
        self,
        *,
        client: BaseGenerationClient,
        model: str,
        temperature: float | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature

    async def create_poster_text(self, summary: str) -> str:
        """Short ``-`` separated poster lines. Falls back to ``FALLBACK_POSTER_TEXT``."""
        try:
            return await self._complete("poster_text_prompt.txt", summary, "Poster text")
        except GenerationServiceError as exc:
            Log.error(f"Poster text generation failed: {exc}")
            return FALLBACK_POSTER_TEXT

    async def create_promotion_text(self, summary: str) -> str:
        """Promotional message body sent alongside the poster."""
        return await self._complete("promotion_prompt.txt", summary, "Promotion text")

    async def _complete(self, template_name: str, summary: str, stage: str) -> str:
        prompt = load_prompt_template(template_name).format(summary=summary)
        with Log.timed(stage):
            content = await self._client.create_chat_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt="",
                user_prompt=prompt,
            )
        return content.strip()
