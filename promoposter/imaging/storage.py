import secrets
import time
from pathlib import Path
from typing import ClassVar

from promoposter.config.settings import Settings
from promoposter.imaging.exceptions import StorageError
from promoposter.imaging.models import StoredImage
from promoposter.logging.logger import Log


class ArtifactStore:
    """Append-only file store for uploads and generated images.

    Every write gets a fresh ``<prefix>_<epoch-ms>_<random>`` name and is opened
    in exclusive-create mode, so concurrent requests never clobber each other
    and an existing artifact is never rewritten in place.
    """

    CATEGORIES: ClassVar[dict[str, str]] = {
        "uploads": "/uploads",
        "images": "/images",
        "edit-images": "/edit-images",
        "posters": "/posters",
    }

    def __init__(self, root: Path, public_base_url: str) -> None:
        self._root = root
        self._public_base_url = public_base_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> "ArtifactStore":
        return cls(settings.storage_root, settings.public_base_url)

    def ensure_dirs(self) -> None:
        for category in self.CATEGORIES:
            self.directory(category).mkdir(parents=True, exist_ok=True)

    def directory(self, category: str) -> Path:
        if category not in self.CATEGORIES:
            raise ValueError(f"Unknown storage category '{category}'")
        return self._root / category

    def public_url(self, category: str, name: str) -> str:
        self.directory(category)
        return f"{self._public_base_url}{self.CATEGORIES[category]}/{name}"

    def resolve(self, category: str, name: str) -> Path:
        """Map a client-supplied file name to a path inside ``category``."""
        safe_name = Path(name).name
        if not safe_name or safe_name in {".", ".."}:
            raise ValueError(f"Invalid file name '{name}'")
        return self.directory(category) / safe_name

    def save(self, category: str, data: bytes, *, prefix: str, suffix: str) -> StoredImage:
        directory = self.directory(category)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self._unique_name(prefix, suffix)
        try:
            with path.open("xb") as handle:
                handle.write(data)
        except OSError as exc:
            raise StorageError(f"Failed to write {path.name}: {exc}") from exc
        Log.debug(f"Stored {len(data)} bytes at {path}")
        return StoredImage(path=path, url=self.public_url(category, path.name))

    @staticmethod
    def _unique_name(prefix: str, suffix: str) -> str:
        timestamp = int(time.time() * 1000)
        token = secrets.token_hex(4)
        stem = f"{prefix}_{timestamp}_{token}" if prefix else f"{timestamp}_{token}"
        return f"{stem}{suffix}"
