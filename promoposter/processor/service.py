import asyncio
from dataclasses import dataclass
from pathlib import Path

from promoposter.concurrency import run_all
from promoposter.config.settings import Settings
from promoposter.dispatch.dispatcher import Dispatcher
from promoposter.dispatch.gateway_client import MmsGatewayClient
from promoposter.dispatch.models import DispatchRequest, DispatchResult
from promoposter.errors import InvalidRequestError
from promoposter.generation.copywriter import Copywriter
from promoposter.generation.factory import GenerationClientFactory
from promoposter.generation.models import SummaryResult
from promoposter.generation.prompt_synthesizer import PromptSynthesizer
from promoposter.generation.summarizer import Summarizer
from promoposter.imaging.acquirer import ImageAcquirer
from promoposter.imaging.compositor import Compositor
from promoposter.imaging.encoder import reencode_jpeg
from promoposter.imaging.fonts import FontContext
from promoposter.imaging.models import StoredImage
from promoposter.imaging.storage import ArtifactStore
from promoposter.imaging.style import CompositionStyle, LayoutVariant
from promoposter.logging.logger import Log
from promoposter.pdf.extractor import TextExtractor
from promoposter.processor.models import CreateResult, EditedImageResult


@dataclass
class PosterService:
    """Stage operations behind the HTTP endpoints.

    Every collaborator is built once at start-up by ``build_service`` and only
    read afterwards; stages hand each other strings, bytes and paths.
    """

    settings: Settings
    store: ArtifactStore
    extractor: TextExtractor
    summarizer: Summarizer
    prompt_synthesizer: PromptSynthesizer
    copywriter: Copywriter
    acquirer: ImageAcquirer
    compositor: Compositor
    dispatcher: Dispatcher

    def save_upload(self, data: bytes, original_name: str) -> Path:
        suffix = Path(original_name).suffix.lower() or ".pdf"
        return self.store.save("uploads", data, prefix="", suffix=suffix).path

    async def summarize_upload(self, path: Path, directive: str) -> SummaryResult:
        text = await asyncio.to_thread(self.extractor.extract, path)
        return await self.summarizer.summarize(text, directive)

    async def create_images(self, text: str, count: int | None = None) -> CreateResult:
        """Generate backgrounds and poster copy for a human-edited summary."""
        text = text.replace("\n", "").strip()
        if not text:
            raise InvalidRequestError("Summary text is required")

        images, poster_text = await run_all(
            self._generate_backgrounds(text, count or self.settings.image_count),
            self.copywriter.create_poster_text(text),
        )
        return CreateResult(images=images, poster_text=poster_text)

    async def store_edited_image(self, data: bytes, summary_text: str) -> EditedImageResult:
        try:
            encoded = await asyncio.to_thread(
                reencode_jpeg, data, self.settings.edited_jpeg_quality
            )
        except ValueError as exc:
            raise InvalidRequestError(f"Uploaded file is not an image: {exc}") from exc

        image = self.store.save("edit-images", encoded, prefix="", suffix=".jpeg")
        Log.info(f"Stored edited poster {image.name}")
        promotion_text = await self.copywriter.create_promotion_text(summary_text)
        return EditedImageResult(
            image=image,
            file_path=f"/edit-images/{image.name}",
            promotion_text=promotion_text,
        )

    async def compose_poster(
        self,
        background: Path,
        text: str,
        layout_variant: LayoutVariant | str | None = None,
    ) -> StoredImage:
        style = (
            CompositionStyle.from_settings(self.settings, layout_variant)
            if layout_variant
            else self.compositor.style
        )
        with Log.timed("Poster composition"):
            data = await asyncio.to_thread(self.compositor.compose, background, text, style)
        return self.store.save("posters", data, prefix="poster", suffix=style.file_suffix)

    async def dispatch(self, request: DispatchRequest) -> DispatchResult:
        return await self.dispatcher.dispatch(request)

    async def _generate_backgrounds(self, text: str, count: int) -> list[StoredImage]:
        prompt = await self.prompt_synthesizer.synthesize(text)
        return await self.acquirer.acquire(prompt, count)


def build_service(settings: Settings) -> PosterService:
    """Build a PosterService with all adapters wired from settings."""
    store = ArtifactStore.from_settings(settings)
    store.ensure_dirs()
    client = GenerationClientFactory.create(settings)
    temperature = settings.generation_temperature
    return PosterService(
        settings=settings,
        store=store,
        extractor=TextExtractor.from_settings(settings),
        summarizer=Summarizer(
            client=client, model=settings.summary_model, temperature=temperature
        ),
        prompt_synthesizer=PromptSynthesizer(
            client=client,
            model=settings.prompt_model,
            max_chars=settings.max_prompt_chars,
            temperature=temperature,
        ),
        copywriter=Copywriter(client=client, model=settings.copy_model, temperature=temperature),
        acquirer=ImageAcquirer(
            client=client,
            store=store,
            model=settings.image_model,
            size=settings.image_size,
            quality=settings.image_quality,
            style=settings.image_style,
            jpeg_quality=settings.image_jpeg_quality,
            download_timeout_seconds=settings.download_timeout_seconds,
        ),
        compositor=Compositor(
            FontContext.from_settings(settings), CompositionStyle.from_settings(settings)
        ),
        dispatcher=Dispatcher(MmsGatewayClient.from_settings(settings)),
    )
