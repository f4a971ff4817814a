from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
import yaml
from pathlib import Path
from typing import Dict

# Translation table for lines the bot pins; used when PINNED_PATH is absent
DEFAULT_PINNED: Dict[str, str] = {
    "⚠️ Официальный кат! - https://stream.radio-t.com/": "⚠️ Вещание подкаста началось - https://stream.radio-t.com/",
}

class Settings(BaseSettings):
    LISTEN_PORT: int = Field(18001, description="TCP port for incoming rtjc lines")

    TELEGRAM_TOKEN: str = Field("", description="Telegram Bot API token")
    TELEGRAM_CHAT_ID: str = Field("", description="Chat (or @channel) to relay into")
    TELEGRAM_API_URL: str = "https://api.telegram.org"

    OPENAI_API_KEY: str = Field("", description="OpenAI API Key")
    MODEL_SUMMARY: str = "gpt-4o"
    SUMMARY_MAX_TOKENS: int = 1024

    # Content extraction
    EXTRACTOR_BACKEND: str = Field("remote", description="'remote' (extraction service) or 'local' (trafilatura)")
    UR_API: str = "https://ukeeper.com/api/content/v1/extract"
    UR_TOKEN: str = ""
    EXTRACTOR_TITLE_FIELD: str = "title"
    EXTRACTOR_CONTENT_FIELD: str = "content"

    # Remark42 comment threads
    REMARK_API: str = "https://remark42.radio-t.com/api/v1/find"
    REMARK_SITE: str = "radiot"
    THREAD_HOST_DOMAIN: str = "radio-t.com"
    THREAD_LINK_PATTERN: str = r"https?://radio-t.com/p/[^\s\"'<>]+/prep-[0-9]+/"
    EXCLUDE_NEGATIVE_COMMENTS: bool = True

    SUMMARY_MARKER: str = "⚠"

    CACHE_PERSIST: bool = Field(False, description="Load and save summaries to CACHE_PATH")
    CACHE_PATH: str = "cache_openai.json"
    PINNED_PATH: str = "data/pinned.yaml"

    HTTP_TIMEOUT: float = 30.0
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

@lru_cache()
def get_settings() -> Settings:
    return Settings()

def load_pinned(path: str) -> Dict[str, str]:
    """Pin translation table from YAML, falling back to DEFAULT_PINNED."""
    p = Path(path)
    if not p.exists():
        return dict(DEFAULT_PINNED)
    with open(p, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return {str(k): "" if v is None else str(v) for k, v in data.items()}
