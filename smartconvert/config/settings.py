from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"

    raster_scale: float = Field(default=2.0, gt=0)
    raster_quality: float = Field(default=0.9, ge=0, le=1)
    convert_quality: float = Field(default=0.92, ge=0, le=1)
    compress_quality: float = Field(default=0.6, ge=0, le=1)

    merge_page_width_mm: float = Field(default=210.0, gt=0)
    merge_page_height_mm: float = Field(default=297.0, gt=0)
    merge_margin_mm: float = Field(default=10.0, ge=0)
    merged_file_name: str = "merged_images.pdf"

    archive_file_name: str = "SmartConvert_Files.zip"
    archive_folder_name: str = "Converted_Files"

    ocr_language: str = "eng"
    tesseract_cmd: str = ""

    insight_provider: str = "openai"
    insight_api_key: str = ""
    insight_model_name: str = "gpt-4o-mini"
    insight_base_url: str = ""
    insight_timeout_seconds: int = 30
    insight_temperature: float = 0.2
    insight_max_pages: int = Field(default=5, gt=0)
    insight_max_chars: int = Field(default=10_000, gt=0)
