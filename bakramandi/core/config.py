from pathlib import Path
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


ENV_PATH = Path(__file__).resolve().parents[2] / ".env"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_PATH, env_file_encoding="utf-8", extra="ignore")

    # App
    env: str = "dev"
    service_name: str = "bakramandi-api"
    port: int = 3001
    log_level: str = "INFO"

    # Database (unset => in-memory stores)
    database_url: str | None = None

    # Uploads
    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"
    max_upload_files: int = 5
    max_upload_bytes: int = 5 * 1024 * 1024
    allowed_image_extensions: list[str] = [".jpg", ".jpeg", ".png"]
    allowed_image_media_types: list[str] = ["image/jpeg", "image/png"]

    # Listings
    default_listing_rating: float = 4.5

    # Password reset
    reset_token_pepper: SecretStr = SecretStr("IN_ENV")
    reset_token_ttl_minutes: int = 60
    password_min_length: int = 8

    # Admin
    internal_admin_key: str | None = None
    orders_seed_file: str | None = None

    # Payments view client
    payments_api_url: str = "http://localhost:3001"
    payments_timeout_seconds: float = 20.0

    # Telemetry (unset => tracing disabled)
    otlp_endpoint: str | None = None


settings = Settings()
