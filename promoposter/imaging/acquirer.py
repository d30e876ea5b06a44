import asyncio

import httpx

from promoposter.concurrency import run_all
from promoposter.generation.client_base import BaseGenerationClient
from promoposter.generation.exceptions import GenerationServiceError
from promoposter.generation.models import ImagePrompt
from promoposter.imaging.encoder import reencode_jpeg
from promoposter.imaging.exceptions import AcquisitionError, StorageError
from promoposter.imaging.models import CandidateImage, StoredImage
from promoposter.imaging.storage import ArtifactStore
from promoposter.logging.logger import Log

MAX_IMAGES = 4


class ImageAcquirer:
    """Generates, downloads and stores background candidates, all or nothing."""

    def __init__(
        self,
        *,
        client: BaseGenerationClient,
        store: ArtifactStore,
        model: str,
        size: str = "1024x1024",
        quality: str = "hd",
        style: str = "natural",
        jpeg_quality: int = 50,
        download_timeout_seconds: int = 60,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = client
        self._store = store
        self._model = model
        self._size = size
        self._quality = quality
        self._style = style
        self._jpeg_quality = jpeg_quality
        self._timeout = download_timeout_seconds
        self._transport = transport

    async def acquire(self, prompt: ImagePrompt | str, count: int = 1) -> list[StoredImage]:
        if not 1 <= count <= MAX_IMAGES:
            raise ValueError(f"Image count must be between 1 and {MAX_IMAGES}, got {count}")

        try:
            with Log.timed("Image generation"):
                urls = await self._client.generate_images(
                    model=self._model,
                    prompt=str(prompt),
                    count=count,
                    size=self._size,
                    quality=self._quality,
                    style=self._style,
                )
        except GenerationServiceError as exc:
            raise AcquisitionError(f"Image generation failed: {exc.detail}") from exc
        if len(urls) != count:
            raise AcquisitionError(f"Requested {count} images, provider returned {len(urls)}")

        with Log.timed(f"Downloading {count} images"):
            candidates = await self._download_all(urls)

        # Nothing is written until every image downloaded and decoded.
        encoded = await run_all(*(self._encode(candidate) for candidate in candidates))
        stored = self._save_all(encoded)
        Log.info(f"Stored {len(stored)} background images")
        return stored

    def _save_all(self, encoded: list[bytes]) -> list[StoredImage]:
        stored: list[StoredImage] = []
        try:
            for data in encoded:
                stored.append(
                    self._store.save("images", data, prefix="poster_image", suffix=".jpeg")
                )
        except StorageError as exc:
            for image in stored:
                image.path.unlink(missing_ok=True)
            Log.warning(f"Removed {len(stored)} partially stored background images")
            raise AcquisitionError(f"Failed to store generated images: {exc.detail}") from exc
        return stored

    async def _download_all(self, urls: list[str]) -> list[CandidateImage]:
        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as http:
            return await run_all(*(self._download(http, url) for url in urls))

    async def _download(self, http: httpx.AsyncClient, url: str) -> CandidateImage:
        try:
            response = await http.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise AcquisitionError(f"Failed to download generated image: {exc}") from exc
        return CandidateImage(url=url, data=response.content)

    async def _encode(self, candidate: CandidateImage) -> bytes:
        try:
            return await asyncio.to_thread(reencode_jpeg, candidate.data, self._jpeg_quality)
        except ValueError as exc:
            raise AcquisitionError(f"Generated image could not be re-encoded: {exc}") from exc
