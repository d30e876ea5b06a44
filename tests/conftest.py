import io
from pathlib import Path

import httpx
import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from promoposter.config.settings import Settings
from promoposter.generation.factory import GenerationClientFactory
from promoposter.imaging.acquirer import ImageAcquirer
from promoposter.imaging.storage import ArtifactStore
from promoposter.processor.service import PosterService, build_service


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Spring Flea Market")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


def make_png(size: tuple[int, int] = (400, 300), color: tuple[int, int, int] = (30, 90, 160)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        storage_root=tmp_path / "data",
        public_base_url="http://testserver",
        generation_provider="example",
        mms_api_url="https://gateway.test",
        mms_account="acct",
        mms_api_key="secret",
    )


@pytest.fixture()
def store(settings: Settings) -> ArtifactStore:
    store = ArtifactStore.from_settings(settings)
    store.ensure_dirs()
    return store


@pytest.fixture()
def image_transport(png_bytes: bytes) -> httpx.MockTransport:
    """Serves the same PNG for every generated-image URL."""
    return httpx.MockTransport(lambda request: httpx.Response(200, content=png_bytes))


@pytest.fixture()
def service(settings: Settings, image_transport: httpx.MockTransport) -> PosterService:
    """Fully wired service on the offline example provider; no network traffic."""
    service = build_service(settings)
    service.acquirer = ImageAcquirer(
        client=GenerationClientFactory.create(settings),
        store=service.store,
        model=settings.image_model,
        transport=image_transport,
    )
    return service
