from dataclasses import dataclass, field
from enum import Enum

from promoposter.errors import AppError
from promoposter.generation.exceptions import GenerationServiceError


class SummaryStatus(str, Enum):
    OK = "ok"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass(frozen=True)
class Summary:
    """Ordered bullet lines, one self-contained fact each."""

    lines: tuple[str, ...] = ()

    def as_text(self) -> str:
        return "\n".join(f"- {line}" for line in self.lines)

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class SummaryResult:
    """Outcome of one summarization call.

    ``DEGRADED`` carries the fixed fallback text and the service error that
    caused it; ``FAILED`` carries an error and no usable text.
    """

    status: SummaryStatus
    text: str
    error: AppError | None = None

    @classmethod
    def ok(cls, text: str) -> "SummaryResult":
        return cls(status=SummaryStatus.OK, text=text)

    @classmethod
    def degraded(cls, fallback: str, error: GenerationServiceError) -> "SummaryResult":
        return cls(status=SummaryStatus.DEGRADED, text=fallback, error=error)

    @classmethod
    def failed(cls, error: AppError) -> "SummaryResult":
        return cls(status=SummaryStatus.FAILED, text="", error=error)

    @property
    def usable(self) -> bool:
        return self.status is not SummaryStatus.FAILED


@dataclass(frozen=True)
class ImagePrompt:
    """Description handed to the image service; never rendered on the poster."""

    text: str
    source_summary: str = field(default="", repr=False)

    def __str__(self) -> str:
        return self.text
