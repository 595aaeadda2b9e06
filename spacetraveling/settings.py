from pathlib import Path

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
    PRISMIC_API_ENDPOINT: str = "https://spacetraveling.cdn.prismic.io/api/v2"
    PRISMIC_ACCESS_TOKEN: str = ""
    PRISMIC_TIMEOUT: float = 10.0

    # Pagination
    POSTS_PAGE_SIZE: int = 1
    PATHS_PAGE_SIZE: int = 100

    # Presentation
    SITE_NAME: str = "spacetraveling"
    DATE_LOCALE: str = "pt_BR"
    DATE_FORMAT: str = "dd MMM yyyy"
    TIME_FORMAT: str = "HH:mm"
    WORDS_PER_MINUTE: int = 200
    UTTERANCES_REPO: str = ""

    # Preview
    PREVIEW_COOKIE_NAME: str = "spacetraveling.preview"

    # Static generation
    PRERENDER_ON_STARTUP: bool = True
    STATIC_EXPORT_DIR: str = "out"

    # Logging
    LOG_LEVEL: str = "INFO"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
