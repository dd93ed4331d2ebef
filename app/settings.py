from pathlib import Path
from urllib.parse import urlparse

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

    # Prismic
    PRISMIC_API_ENDPOINT: str = "https://nar0nblog.cdn.prismic.io/api/v2"
    PRISMIC_ACCESS_TOKEN: str = ""
    POSTS_DOCUMENT_TYPE: str = "posts"
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Listing
    PAGE_SIZE: int = 1

    # Pages
    SITE_NAME: str = "nar0nBlog"
    REVALIDATE_SECONDS: int = 60 * 60 * 24  # 24 hours
    REVALIDATE_SECRET: str = ""

    # Preview
    PREVIEW_COOKIE_NAME: str = "io.prismic.preview"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def api_host(self) -> str:
        return urlparse(self.PRISMIC_API_ENDPOINT).netloc

    @property
    def search_url(self) -> str:
        return f"{self.PRISMIC_API_ENDPOINT.rstrip('/')}/documents/search"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
