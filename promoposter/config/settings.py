from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3030
    public_base_url: str = "http://localhost:3030"
    cors_allow_origins: list[str] = ["http://localhost:3000"]

    storage_root: Path = Path("./data")

    pdf_engine: str = "pdfplumber"

    generation_provider: str = "openai"
    openai_api_key: str = ""
    openai_compatible_base_url: str = ""
    generation_timeout_seconds: int = 60
    generation_temperature: float = 0.7
    summary_model: str = "gpt-4o-mini"
    prompt_model: str = "gpt-4o"
    copy_model: str = "gpt-4o-mini"
    max_prompt_chars: int = 1000

    image_model: str = "dall-e-3"
    image_size: str = "1024x1024"
    image_quality: str = "hd"
    image_style: str = "natural"
    image_count: int = Field(default=1, ge=1, le=4)
    download_timeout_seconds: int = 60
    image_jpeg_quality: int = Field(default=50, ge=1, le=100)
    edited_jpeg_quality: int = Field(default=100, ge=1, le=100)

    font_path: Path | None = None
    layout_variant: Literal["centered", "left"] = "centered"
    font_size_ratio: float | None = None
    min_font_size: int | None = None
    max_width_ratio: float | None = None
    line_height_multiplier: float | None = None
    box_opacity: float | None = None
    poster_quality: int | None = None

    mms_api_url: str = "https://message.ppurio.com"
    mms_account: str = ""
    mms_api_key: str = ""
    mms_timeout_seconds: int = 30
    mms_ref_key: str = "ref_key"
