"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings with env var overrides."""

    # Batch scan
    audio_dir: Path = Path("test")
    audio_extensions: tuple[str, ...] = (".wav", ".mp3")  # matched case-sensitively
    workers: int = 1

    # Track metadata
    api_base_url: str = "https://api.soundcloud.com"
    client_id: str | None = None
    http_timeout: float = 30.0

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    max_upload_mb: int = 50

    model_config = {"env_prefix": "TEMPOMETER_"}


settings = Settings()
