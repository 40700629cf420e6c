"""Application configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Thai Master"
    debug: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    frontend_port: int = 5173

    # CORS - dynamically built based on frontend_port
    cors_origins: list[str] = []

    # Vocabulary storage (single JSON blob)
    data_dir: Path = Path(__file__).parent.parent.parent / "data"
    vocab_file_name: str = "storage.json"

    # LLM used for analysis, synonyms and the quick-translate fallback
    llm_provider: str = "gemini"
    llm_model: str = "gemini-2.5-flash"

    # LLM API Keys (loaded from environment)
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    dashscope_api_key: Optional[str] = None  # Alibaba Qwen
    deepseek_api_key: Optional[str] = None

    # Google endpoints
    google_translate_url: str = "https://translate.googleapis.com/translate_a/single"
    google_tts_url: str = "https://translate.google.com/translate_tts"
    http_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )

    # Lookup pipeline (seconds; None or 0 disables the bound)
    translate_timeout: Optional[float] = 10.0
    analysis_timeout: Optional[float] = 45.0
    enrichment_timeout: Optional[float] = 30.0
    synonym_segment_limit: int = 8  # Segments sent to the synonym stage

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Build CORS origins based on frontend port
        if not self.cors_origins:
            self.cors_origins = [
                f"http://localhost:{self.frontend_port}",
                f"http://127.0.0.1:{self.frontend_port}",
            ]

    @property
    def vocab_file(self) -> Path:
        """Path of the vocabulary blob."""
        return self.data_dir / self.vocab_file_name


settings = Settings()
