from typing import Literal

from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = "127.0.0.1"
    port: int = 3100
    debug: bool = False
    access_log: bool = True  # uvicorn request log lines
    cors_origins: list[str] = []

    storage_backend: Literal["file", "memory", "mongo"] = "file"
    data_dir: str = "data"  # Directory holding one JSON document per collection (file backend)
    database_url: str | None = None  # mongodb://host:port/dbname (mongo backend)

    session_ttl_days: int = 30  # Also the lifetime of the auth cookie
    secure_cookies: bool = False  # Send the auth cookie over HTTPS only
    seed_welcome_note: bool = True  # Create the welcome note for newly registered users

    # Summaries. With no API key only the local extractive summary is used.
    llm_provider: Literal["litellm", "http"] = "litellm"
    llm_model: str = "gpt-4.1-mini"
    llm_api_key: str = ""
    llm_api_base: str | None = None  # Required for the http provider, e.g. https://api.example.com/v1/chat/completions
    summary_sentences: str = "3-5"
    summary_max_tokens: int = 550
    summary_temperature: float = 0.7
    summary_timeout_seconds: float = 30.0

    model_config = {
        "env_file": [".env"],
        "env_prefix": "AINOTES_",
        "extra": "ignore",
    }
