from abc import ABC, abstractmethod


class BaseGenerationClient(ABC):
    """Contract for provider-specific text and image generation clients."""

    @abstractmethod
    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float | None,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Return the completion text for one chat exchange."""

    @abstractmethod
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
        """Return the URLs of ``count`` freshly generated images."""
