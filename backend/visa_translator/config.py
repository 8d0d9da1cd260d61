"""Application configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Visa Translator"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    frontend_port: int = 3000

    # CORS - dynamically built based on frontend_port
    cors_origins: list[str] = []

    # Authentication for the glossary admin endpoints.
    # Set API_AUTH_TOKEN to require a token; unset means local dev mode.
    api_auth_token: Optional[str] = None

    # Translation capability (OpenAI-compatible endpoint via LiteLLM)
    llm_provider: str = "openai"
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    translation_temperature: float = 0.1
    translation_max_tokens: int = 1024
    request_timeout: float = 30.0  # seconds, per sentence call
    max_retries: int = 3
    retry_delay: float = 1.0

    # Pipeline
    max_concurrency: int = 8  # concurrent sentence calls per request
    max_text_length: int = 5000

    # Glossary (proper-noun knowledge base)
    glossary_path: Path = Path(__file__).parent.parent.parent / "data" / "glossary.json"
    glossary_category_priority: list[str] = [
        "person_names",
        "organizations",
        "places",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Build CORS origins based on frontend port
        if not self.cors_origins:
            self.cors_origins = [
                f"http://localhost:{self.frontend_port}",
                f"http://127.0.0.1:{self.frontend_port}",
            ]


settings = Settings()
