import asyncio

from promoposter.concurrency import run_all
from promoposter.dispatch.dispatcher import Dispatcher
from promoposter.dispatch.exceptions import DispatchError
from promoposter.dispatch.models import DispatchRequest
from promoposter.generation.copywriter import Copywriter
from promoposter.generation.exceptions import GenerationServiceError
from promoposter.generation.models import SummaryStatus
from promoposter.generation.prompt_synthesizer import PromptSynthesizer
from promoposter.generation.summarizer import Summarizer
from promoposter.generation.summary_parser import parse_summary
from promoposter.imaging.acquirer import ImageAcquirer
from promoposter.imaging.compositor import Compositor
from promoposter.imaging.storage import ArtifactStore
from promoposter.logging.logger import Log
from promoposter.pdf.extractor import TextExtractor
from promoposter.processor.pipeline import PipelineContext, PipelineStep


class ExtractTextStep(PipelineStep):
    def __init__(self, extractor: TextExtractor) -> None:
        self._extractor = extractor

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.extracted_text = await asyncio.to_thread(
            self._extractor.extract, context.document_path
        )
        return context


class SummarizeStep(PipelineStep):
    def __init__(self, summarizer: Summarizer) -> None:
        self._summarizer = summarizer

    async def run(self, context: PipelineContext) -> PipelineContext:
        result = await self._summarizer.summarize(context.extracted_text, context.directive)
        context.summary_result = result
        if result.status is SummaryStatus.FAILED or (
            context.strict and result.status is SummaryStatus.DEGRADED
        ):
            raise result.error or GenerationServiceError("Summarization failed")
        context.summary = parse_summary(result.text)
        Log.info(f"Summary has {len(context.summary)} bullet lines ({result.status.value})")
        return context


class SynthesizePromptStep(PipelineStep):
    def __init__(self, synthesizer: PromptSynthesizer) -> None:
        self._synthesizer = synthesizer

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.image_prompt = await self._synthesizer.synthesize(context.summary.as_text())
        return context


class PosterTextStep(PipelineStep):
    def __init__(self, copywriter: Copywriter) -> None:
        self._copywriter = copywriter

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.poster_text = await self._copywriter.create_poster_text(context.summary.as_text())
        return context


class PromotionTextStep(PipelineStep):
    def __init__(self, copywriter: Copywriter) -> None:
        self._copywriter = copywriter

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.promotion_text = await self._copywriter.create_promotion_text(
            context.summary.as_text()
        )
        return context


class ParallelStep(PipelineStep):
    """Runs independent steps concurrently; fails as a whole if any of them fails."""

    def __init__(self, *steps: PipelineStep) -> None:
        self._steps = steps

    async def run(self, context: PipelineContext) -> PipelineContext:
        await run_all(*(step.run(context) for step in self._steps))
        return context


class AcquireImagesStep(PipelineStep):
    def __init__(self, acquirer: ImageAcquirer, count: int = 1) -> None:
        self._acquirer = acquirer
        self._count = count

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.image_prompt is None:
            raise ValueError("PipelineContext.image_prompt must be set before image acquisition")
        context.backgrounds = await self._acquirer.acquire(context.image_prompt, self._count)
        return context


class ComposePosterStep(PipelineStep):
    def __init__(self, compositor: Compositor, store: ArtifactStore) -> None:
        self._compositor = compositor
        self._store = store

    async def run(self, context: PipelineContext) -> PipelineContext:
        if not context.backgrounds:
            raise ValueError("PipelineContext.backgrounds must be set before composition")
        copy = parse_summary(context.poster_text) if context.poster_text else context.summary
        text = "\n".join(copy.lines)
        with Log.timed("Poster composition"):
            data = await asyncio.to_thread(
                self._compositor.compose, context.backgrounds[0].path, text
            )
        context.poster = self._store.save(
            "posters", data, prefix="poster", suffix=self._compositor.style.file_suffix
        )
        Log.info(f"Poster written to {context.poster.path}")
        return context


class DispatchStep(PipelineStep):
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.poster is None:
            raise ValueError("PipelineContext.poster must be set before dispatch")
        request = DispatchRequest(
            sender=context.sender,
            recipients=context.recipients,
            message=context.promotion_text or context.summary.as_text(),
            poster_path=context.poster.path,
        )
        result = await self._dispatcher.dispatch(request)
        context.dispatch_result = result
        if not result.succeeded:
            raise result.error or DispatchError("Dispatch failed")
        return context


class MarkFailedStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        Log.error(f"Poster pipeline failed for {context.document_path.name}: {context.error_message}")
        return context
