from typing import Any

import httpx
import openai

from promoposter.generation.client_base import BaseGenerationClient
from promoposter.generation.exceptions import GenerationNetworkError, GenerationServiceError


class OpenAIClientAdapter(BaseGenerationClient):
    """Generation client built on the OpenAI-compatible chat and images APIs."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float | None,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        kwargs: dict[str, Any] = {"model": model, "messages": messages}
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            response = await self._client.chat.completions.create(**kwargs)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise GenerationNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise GenerationNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise GenerationServiceError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None or not content.strip():
            raise GenerationServiceError("AI returned empty response")
        return content

    async def generate_images(
        self,
        *,
        model: str,
        prompt: str,
        count: int,
        size: str,
        quality: str,
        style: str,
    ) -> list[str]:
        try:
            response = await self._client.images.generate(
                model=model,
                prompt=prompt,
                n=count,
                size=size,  # type: ignore[arg-type]
                quality=quality,  # type: ignore[arg-type]
                style=style,  # type: ignore[arg-type]
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise GenerationNetworkError(f"Image provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise GenerationNetworkError(f"Image provider API error: {exc}") from exc

        urls = [item.url for item in (response.data or []) if item.url]
        if not urls:
            raise GenerationServiceError("Image provider returned no image URLs")
        return urls
