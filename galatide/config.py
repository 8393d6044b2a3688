from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import Optional

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Galatide"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Public site
    base_url: str = "https://ocean.galatide.com"

    # Database settings (no URL means the store is unavailable)
    database_url: Optional[str] = None
    db_connect_max_retries: int = 3
    db_connect_base_delay: float = 1.0
    db_connect_max_delay: float = 5.0
    db_connect_timeout: float = 10.0
    db_unavailable_cooldown: float = 30.0

    # i18n settings
    default_language: str = "en"
    supported_languages: list[str] = ["en", "ar", "zh", "ru", "de", "fr", "hi"]

    # Placeholder role check: treat anonymous requests as ADMIN
    admin_bypass: bool = False

    # Logging settings
    log_level: str = "INFO"
    log_json: bool = True

    # CORS settings
    allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
