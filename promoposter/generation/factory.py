from dataclasses import dataclass
from typing import ClassVar

from promoposter.config.settings import Settings
from promoposter.generation.client_base import BaseGenerationClient
from promoposter.generation.example_client_adapter import ExampleClientAdapter
from promoposter.generation.openai_client_adapter import OpenAIClientAdapter
from promoposter.logging.logger import Log


@dataclass(frozen=True)
class ProviderProfile:
    base_url: str | None
    has_images_endpoint: bool


class GenerationClientFactory:
    """Creates the configured generation client.

    Every provider speaks the OpenAI wire format; only the base URL differs.
    Providers without an images endpoint can still summarize, but background
    generation against them fails at request time.
    """

    PROVIDERS: ClassVar[dict[str, ProviderProfile]] = {
        "openai": ProviderProfile(None, True),
        "together": ProviderProfile("https://api.together.xyz/v1", True),
        "openrouter": ProviderProfile("https://openrouter.ai/api/v1", False),
        "groq": ProviderProfile("https://api.groq.com/openai/v1", False),
        "deepseek": ProviderProfile("https://api.deepseek.com/v1", False),
        "ollama": ProviderProfile("http://localhost:11434/v1", False),
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseGenerationClient:
        provider = settings.generation_provider.strip().lower()
        if provider == "example":
            return ExampleClientAdapter()

        profile = cls._profile(provider, settings)
        if not profile.has_images_endpoint:
            Log.warning(f"Provider '{provider}' has no images endpoint; /create will fail")
        return OpenAIClientAdapter(
            api_key=settings.openai_api_key,
            timeout_seconds=settings.generation_timeout_seconds,
            base_url=profile.base_url,
        )

    @classmethod
    def _profile(cls, provider: str, settings: Settings) -> ProviderProfile:
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for "
                    "generation_provider=openai_compatible"
                )
            return ProviderProfile(url, True)

        profile = cls.PROVIDERS.get(provider)
        if profile is None:
            supported = ["example", "openai_compatible", *sorted(cls.PROVIDERS)]
            raise ValueError(f"Unknown generation provider '{provider}'. Choose from: {supported}")
        return profile
