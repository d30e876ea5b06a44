from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class CandidateImage:
    """A generated image fetched from the provider, not yet re-encoded."""

    url: str
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class StoredImage:
    """An artifact written to local storage and exposed under a public URL."""

    path: Path
    url: str

    @property
    def name(self) -> str:
        return self.path.name
