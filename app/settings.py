from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Backend (json-server style REST API)
    BLOG_API_URL: str = "http://localhost:3000"
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    # Admin panel
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin"

    # Site
    SITE_TITLE: str = "My Blog"
    NAV_PAGES: str = "about"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def nav_page_slugs(self) -> List[str]:
        return [slug.strip() for slug in self.NAV_PAGES.split(",") if slug.strip()]


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
