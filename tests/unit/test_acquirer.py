import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from promoposter.generation.client_base import BaseGenerationClient
from promoposter.generation.exceptions import GenerationNetworkError
from promoposter.generation.models import ImagePrompt
from promoposter.imaging.acquirer import ImageAcquirer
from promoposter.imaging.exceptions import AcquisitionError, StorageError
from promoposter.imaging.storage import ArtifactStore


def _make_client(urls: list[str]) -> MagicMock:
    client = MagicMock(spec=BaseGenerationClient)
    client.generate_images = AsyncMock(return_value=urls)
    return client


def _transport(png: bytes, failing: set[str] = frozenset(), garbage: set[str] = frozenset()):
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        requested.append(url)
        if url in failing:
            return httpx.Response(500)
        if url in garbage:
            return httpx.Response(200, content=b"<html>nope</html>")
        return httpx.Response(200, content=png)

    return httpx.MockTransport(handler), requested


def _stored_images(store: ArtifactStore) -> list[Path]:
    return sorted(store.directory("images").iterdir())


def _acquirer(client: MagicMock, store: ArtifactStore, transport: httpx.MockTransport) -> ImageAcquirer:
    return ImageAcquirer(client=client, store=store, model="dall-e-3", transport=transport)


class TestImageAcquirer:
    @pytest.mark.asyncio
    async def test_stores_requested_number_of_jpegs(
        self, store: ArtifactStore, png_bytes: bytes
    ) -> None:
        urls = [f"https://img.test/{i}.png" for i in range(3)]
        transport, requested = _transport(png_bytes)
        images = await _acquirer(_make_client(urls), store, transport).acquire(
            ImagePrompt("abstract waves"), 3
        )
        assert len(images) == 3
        assert sorted(requested) == sorted(urls)
        for image in images:
            assert image.name.startswith("poster_image_")
            assert image.path.read_bytes()[:2] == b"\xff\xd8"
            assert image.url.endswith(f"/images/{image.name}")

    @pytest.mark.asyncio
    async def test_passes_prompt_and_options(self, store: ArtifactStore, png_bytes: bytes) -> None:
        client = _make_client(["https://img.test/0.png"])
        transport, _ = _transport(png_bytes)
        await _acquirer(client, store, transport).acquire("waves", 1)
        kwargs = client.generate_images.call_args.kwargs
        assert kwargs["prompt"] == "waves"
        assert kwargs["count"] == 1
        assert kwargs["size"] == "1024x1024"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, 5])
    async def test_rejects_out_of_range_count(self, store: ArtifactStore, count: int) -> None:
        client = _make_client([])
        with pytest.raises(ValueError, match="between 1 and 4"):
            await _acquirer(client, store, httpx.MockTransport(lambda r: httpx.Response(200))).acquire(
                "p", count
            )
        client.generate_images.assert_not_called()

    @pytest.mark.asyncio
    async def test_generation_failure_raises_acquisition_error(self, store: ArtifactStore) -> None:
        client = _make_client([])
        client.generate_images.side_effect = GenerationNetworkError("Image provider API error")
        with pytest.raises(AcquisitionError, match="Image generation failed"):
            await _acquirer(client, store, httpx.MockTransport(lambda r: httpx.Response(200))).acquire(
                "p", 1
            )

    @pytest.mark.asyncio
    async def test_short_url_list_fails(self, store: ArtifactStore, png_bytes: bytes) -> None:
        transport, _ = _transport(png_bytes)
        with pytest.raises(AcquisitionError, match="Requested 2 images"):
            await _acquirer(_make_client(["https://img.test/0.png"]), store, transport).acquire("p", 2)

    @pytest.mark.asyncio
    async def test_one_failed_download_stores_nothing(
        self, store: ArtifactStore, png_bytes: bytes
    ) -> None:
        urls = [f"https://img.test/{i}.png" for i in range(3)]
        transport, _ = _transport(png_bytes, failing={urls[1]})
        with pytest.raises(AcquisitionError, match="Failed to download"):
            await _acquirer(_make_client(urls), store, transport).acquire("p", 3)
        assert _stored_images(store) == []

    @pytest.mark.asyncio
    async def test_undecodable_download_stores_nothing(
        self, store: ArtifactStore, png_bytes: bytes
    ) -> None:
        urls = ["https://img.test/0.png", "https://img.test/1.png"]
        transport, _ = _transport(png_bytes, garbage={urls[0]})
        with pytest.raises(AcquisitionError, match="could not be re-encoded"):
            await _acquirer(_make_client(urls), store, transport).acquire("p", 2)
        assert _stored_images(store) == []

    @pytest.mark.asyncio
    async def test_four_images_all_or_nothing(self, store: ArtifactStore, png_bytes: bytes) -> None:
        urls = [f"https://img.test/{i}.png" for i in range(4)]
        transport, _ = _transport(png_bytes)
        images = await _acquirer(_make_client(urls), store, transport).acquire("p", 4)
        assert len(images) == 4
        assert len(_stored_images(store)) == 4

    @pytest.mark.asyncio
    async def test_failed_download_cancels_slower_downloads(
        self, store: ArtifactStore, png_bytes: bytes
    ) -> None:
        finished: list[str] = []

        async def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/fail":
                return httpx.Response(500)
            await asyncio.sleep(0.2)
            finished.append(str(request.url))
            return httpx.Response(200, content=png_bytes)

        urls = ["https://img.test/fail", "https://img.test/slow"]
        with pytest.raises(AcquisitionError, match="Failed to download"):
            await _acquirer(_make_client(urls), store, httpx.MockTransport(handler)).acquire("p", 2)
        await asyncio.sleep(0.3)
        assert finished == []
        assert _stored_images(store) == []

    @pytest.mark.asyncio
    async def test_storage_failure_removes_images_already_written(
        self, store: ArtifactStore, png_bytes: bytes, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        real_save = store.save
        written = []

        def save_two_then_fail(*args, **kwargs):
            if len(written) == 2:
                raise StorageError("Failed to write poster_image.jpeg: disk full")
            image = real_save(*args, **kwargs)
            written.append(image)
            return image

        monkeypatch.setattr(store, "save", save_two_then_fail)
        urls = [f"https://img.test/{i}.png" for i in range(3)]
        transport, _ = _transport(png_bytes)
        with pytest.raises(AcquisitionError, match="Failed to store generated images"):
            await _acquirer(_make_client(urls), store, transport).acquire("p", 3)
        assert len(written) == 2
        assert _stored_images(store) == []
