"""Summarizes extracted document text into poster bullets."""

from promoposter.errors import AppError
from promoposter.generation.client_base import BaseGenerationClient
from promoposter.generation.exceptions import GenerationServiceError
from promoposter.generation.models import SummaryResult
from promoposter.generation.prompt_loader import load_prompt_template
from promoposter.logging.logger import Log

FALLBACK_SUMMARY = "요약을 처리하는 동안 문제가 발생했습니다. 다시 시도해 주세요."


class Summarizer:
    """Single-shot summarization that degrades to a fixed fallback on service errors."""

    TEMPLATE_NAME = "summary_prompt.txt"

    def __init__(
        self,
        *,
        client: BaseGenerationClient,
        model: str,
        temperature: float | None = None,
        fallback_text: str = FALLBACK_SUMMARY,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._fallback_text = fallback_text

    async def summarize(self, text: str, directive: str = "") -> SummaryResult:
        try:
            prompt = self._build_prompt(text, directive)
        except AppError as exc:
            Log.error(f"Summary prompt unavailable: {exc}")
            return SummaryResult.failed(exc)
        Log.debug(f"Summary prompt:\n{prompt}")

        try:
            with Log.timed("Summarization"):
                content = await self._client.create_chat_completion(
                    model=self._model,
                    temperature=self._temperature,
                    system_prompt="",
                    user_prompt=prompt,
                )
        except GenerationServiceError as exc:
            Log.warning(f"Summarization failed, returning fallback: {exc}")
            return SummaryResult.degraded(self._fallback_text, exc)

        summary = content.strip()
        Log.info(f"Summary ready: {len(summary.splitlines())} lines")
        return SummaryResult.ok(summary)

    def _build_prompt(self, text: str, directive: str) -> str:
        template = load_prompt_template(self.TEMPLATE_NAME)
        return template.format(directive=directive.strip(), text=text.strip())
