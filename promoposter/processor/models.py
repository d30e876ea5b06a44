from dataclasses import dataclass, field

from promoposter.imaging.models import StoredImage


@dataclass(frozen=True)
class CreateResult:
    """Background candidates plus the poster copy generated alongside them."""

    images: list[StoredImage] = field(default_factory=list)
    poster_text: str = ""

    @property
    def image_urls(self) -> list[str]:
        return [image.url for image in self.images]


@dataclass(frozen=True)
class EditedImageResult:
    """A user-edited poster stored for dispatch, with its promotional message."""

    image: StoredImage
    file_path: str
    promotion_text: str
