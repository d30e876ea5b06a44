"""Offline generation client.

Returns canned completions and placeholder image URLs so the service can be
exercised end to end without provider credentials. Register new providers in
GenerationClientFactory the same way.
"""

from typing import ClassVar

from promoposter.generation.client_base import BaseGenerationClient


class ExampleClientAdapter(BaseGenerationClient):
    """Canned responses, no calls to a generation provider."""

    DEFAULT_COMPLETION: ClassVar[str] = (
        "- 봄맞이 플리마켓\n"
        "- 2025년 4월 12일 토요일 오전 10시\n"
        "- 시민공원 잔디광장\n"
        "- 입장 무료"
    )
    PLACEHOLDER_URL: ClassVar[str] = "https://placehold.co/{size}.png"

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float | None,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        return self.DEFAULT_COMPLETION

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
        _ = model, prompt, quality, style
        return [self.PLACEHOLDER_URL.format(size=size) for _ in range(count)]
