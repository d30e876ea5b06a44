from pathlib import Path

from promoposter.dispatch.models import Recipient
from promoposter.logging.logger import Log
from promoposter.processor.pipeline import PipelineContext, PipelineStep
from promoposter.processor.service import PosterService
from promoposter.processor.steps import (
    AcquireImagesStep,
    ComposePosterStep,
    DispatchStep,
    ExtractTextStep,
    MarkFailedStep,
    ParallelStep,
    PosterTextStep,
    PromotionTextStep,
    SummarizeStep,
    SynthesizePromptStep,
)


class Processor:
    """Runs the batch pipeline: extract -> summarize -> (prompt | copy) -> acquire -> compose -> dispatch."""

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    async def process(
        self,
        document_path: Path,
        directive: str = "",
        *,
        strict: bool = False,
        sender: str = "",
        recipients: tuple[Recipient, ...] = (),
    ) -> PipelineContext:
        """Run every step in order; on failure record the error, run the failure step, re-raise."""
        Log.info(f"Processing document {document_path.name}")
        context = PipelineContext(
            document_path=document_path,
            directive=directive,
            strict=strict,
            sender=sender,
            recipients=recipients,
        )
        try:
            for step in self._steps:
                context = await step.run(context)
        except Exception as exc:
            context.error_message = str(exc)
            await self._failed_step.run(context)
            raise
        Log.info(f"Finished document {document_path.name}")
        return context


def build_processor(
    service: PosterService,
    *,
    with_dispatch: bool = False,
    image_count: int = 1,
) -> Processor:
    """Build the batch Processor from an already-wired PosterService."""
    copy_steps: list[PipelineStep] = [
        SynthesizePromptStep(service.prompt_synthesizer),
        PosterTextStep(service.copywriter),
    ]
    if with_dispatch:
        copy_steps.append(PromotionTextStep(service.copywriter))

    steps: list[PipelineStep] = [
        ExtractTextStep(service.extractor),
        SummarizeStep(service.summarizer),
        ParallelStep(*copy_steps),
        AcquireImagesStep(service.acquirer, image_count),
        ComposePosterStep(service.compositor, service.store),
    ]
    if with_dispatch:
        steps.append(DispatchStep(service.dispatcher))
    return Processor(steps=steps, failed_step=MarkFailedStep())
