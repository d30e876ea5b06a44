from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from promoposter.dispatch.models import DispatchResult, Recipient
from promoposter.generation.models import ImagePrompt, Summary, SummaryResult
from promoposter.imaging.models import StoredImage


@dataclass(slots=True)
class PipelineContext:
    document_path: Path
    directive: str = ""
    strict: bool = False
    sender: str = ""
    recipients: tuple[Recipient, ...] = ()
    extracted_text: str = ""
    summary_result: SummaryResult | None = None
    summary: Summary = field(default_factory=Summary)
    image_prompt: ImagePrompt | None = None
    poster_text: str = ""
    promotion_text: str = ""
    backgrounds: list[StoredImage] = field(default_factory=list)
    poster: StoredImage | None = None
    dispatch_result: DispatchResult | None = None
    error_message: str = ""


class PipelineStep(ABC):
    """One stage of the batch pipeline.

    Steps that may run side by side inside a ``ParallelStep`` must write
    disjoint context fields.
    """

    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
