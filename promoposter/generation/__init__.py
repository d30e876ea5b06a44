from promoposter.generation.client_base import BaseGenerationClient
from promoposter.generation.copywriter import Copywriter
from promoposter.generation.factory import GenerationClientFactory
from promoposter.generation.prompt_synthesizer import PromptSynthesizer
from promoposter.generation.summarizer import Summarizer

__all__ = [
    "BaseGenerationClient",
    "Copywriter",
    "GenerationClientFactory",
    "PromptSynthesizer",
    "Summarizer",
]
