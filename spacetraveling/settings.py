from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from spacetraveling.utils import DateFormat


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

    # Pages
    SITE_NAME: str = "Spacetraveling"
    POSTS_PAGE_SIZE: int = 2
    LISTING_REVALIDATE_SECONDS: int = 10
    POST_REVALIDATE_SECONDS: int = 60 * 30
    PRERENDER_ON_STARTUP: bool = True

    # Dates
    DATE_LOCALE: str = "pt-BR"
    DATE_TIMEZONE: str = "America/Sao_Paulo"
    SUMMARY_DATE_PATTERN: str = "%d %b %Y"
    EDITED_DATE_PATTERN: str = "%d %b %Y, às %H:%M"

    # Comments
    UTTERANCES_REPO: str = "Ricmaloy/desafio05-ignite-react"
    UTTERANCES_THEME: str = "github-dark"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def summary_date_format(self) -> DateFormat:
        return DateFormat(
            pattern=self.SUMMARY_DATE_PATTERN,
            locale=self.DATE_LOCALE,
            timezone=self.DATE_TIMEZONE,
        )

    @property
    def edited_date_format(self) -> DateFormat:
        return self.summary_date_format.with_pattern(self.EDITED_DATE_PATTERN)


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings
