from promoposter.errors import InvalidRequestError
from promoposter.generation.client_base import BaseGenerationClient
from promoposter.generation.exceptions import GenerationServiceError, PromptError
from promoposter.generation.models import ImagePrompt
from promoposter.generation.prompt_loader import load_prompt_template
from promoposter.logging.logger import Log


class PromptSynthesizer:
    """Turns a summary into a text-free, abstract image-generation prompt."""

    def __init__(
        self,
        *,
        client: BaseGenerationClient,
        model: str,
        max_chars: int = 1000,
        temperature: float | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._max_chars = max_chars
        self._temperature = temperature

    async def synthesize(self, summary: str) -> ImagePrompt:
        if not summary.strip():
            raise InvalidRequestError("Cannot build an image prompt from an empty summary")

        system_prompt = load_prompt_template("image_prompt_system.txt").format(
            max_chars=self._max_chars
        )
        user_prompt = load_prompt_template("image_prompt_user.txt").format(
            summary=summary.strip()
        )
        try:
            with Log.timed("Image prompt synthesis"):
                content = await self._client.create_chat_completion(
                    model=self._model,
                    temperature=self._temperature,
                    system_prompt=system_prompt,
                    user_prompt=user_prompt,
                )
        except GenerationServiceError as exc:
            raise PromptError(f"Image prompt generation failed: {exc.detail}") from exc

        text = self._truncate(content.strip())
        if not text:
            raise PromptError("Image prompt generation returned an empty prompt")
        Log.info(f"Generated image prompt: {text}")
        return ImagePrompt(text=text, source_summary=summary)

    def _truncate(self, text: str) -> str:
        if len(text) <= self._max_chars:
            return text
        cut = text[: self._max_chars]
        space = cut.rfind(" ")
        return (cut[:space] if space > 0 else cut).rstrip()
