# app/config.py

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.
    Read from environment variables and `.env`, exposed as attributes.
    """

    # ---------- OpenAI ----------
    # OPENAI_API_KEY=sk-xxxx... in .env
    openai_api_key: str | None = None

    # model / temperature for the homepage report
    openai_model: str = "gpt-4.1-mini"
    report_temperature: float = 0.2

    # model / temperature for the brand-awareness report
    brand_model: str = "gpt-4o-mini"
    brand_temperature: float = 0.3

    # ---------- Supabase ----------
    # service-role key; never sent to browsers
    supabase_url: str | None = None
    supabase_key: str | None = None

    # ---------- Page fetch ----------
    fetch_user_agent: str = "AriClearBot/0.1 (+https://ariclear.com)"
    fetch_timeout: float = 15.0

    # ---------- Extraction ----------
    max_snippet_len: int = 5000
    max_h2s: int = 6

    log_level: str = "INFO"

    # ---------- Pydantic Settings ----------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # unknown env vars are not an error
    )


@lru_cache
def get_settings() -> Settings:
    """Process-wide Settings instance."""
    return Settings()
