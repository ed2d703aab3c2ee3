"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from cat_gallery.services.decision import OutputMode

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    google_maps_api_key: str
    google_vision_api_key: str | None = None
    places_base_url: str = "https://maps.googleapis.com/maps/api/place"
    storage_dir: str = "storage/public"
    output_mode: OutputMode = OutputMode.CROP
    photo_max_width: int = 1600
    vision_max_results: int = 50
    min_detection_size: int = 20
    jpeg_quality: int = 90
    max_search_attempts: int = 10
    request_timeout_seconds: float = 20.0
    default_limit: int = 50
    gallery_extract_limit: int = 50
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
