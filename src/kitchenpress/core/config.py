"""Configuration models."""

from pathlib import Path
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from kitchenpress.core.enums import TieBreakPolicy


class PromptConfig(BaseModel):
    """Prompt template configuration."""

    system_prompt: str
    user_prompt_template: str
    output_schema: Dict = Field(default_factory=dict)


class DetectorConfig(BaseModel):
    """Duplicate detector tuning."""

    similarity_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    default_lookback_days: int = Field(default=30, gt=0)
    tie_break_policy: TieBreakPolicy = TieBreakPolicy.EARLIEST_PROCESSED
    max_concurrent_embeddings: int = Field(default=5, gt=0)


class Config(BaseSettings):
    """Main application configuration from environment variables."""

    # Google Gemini API (default for generation and embeddings)
    google_api_key: Optional[str] = Field(default=None)
    gemini_model: str = "gemini-2.0-flash"
    gemini_embedding_model: str = "text-embedding-004"

    # OpenAI API (fallback)
    openai_api_key: Optional[str] = Field(default=None)
    openai_model: str = "gpt-4o-mini"
    openai_embedding_model: str = "text-embedding-3-small"

    # Provider Selection
    generation_provider: Literal["gemini", "openai"] = "gemini"
    embedding_provider: Literal["gemini", "openai"] = "gemini"

    # Database
    db_path: Path = Path("./kitchenpress.db")

    # Duplicate Detection
    similarity_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    default_lookback_days: int = Field(default=30, gt=0)
    tie_break_policy: TieBreakPolicy = TieBreakPolicy.EARLIEST_PROCESSED
    max_concurrent_embeddings: int = Field(default=5, gt=0)

    # Content
    prompt_config_dir: Path = Path("./config/prompts")
    style_guide_path: Path = Path("./config/style_guide.yaml")

    # HTTP API
    api_host: str = "127.0.0.1"
    api_port: int = Field(default=8000, gt=0, lt=65536)

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"
    log_dir: Optional[Path] = None

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def detector(self) -> DetectorConfig:
        """Duplicate detector settings as a standalone model."""
        return DetectorConfig(
            similarity_threshold=self.similarity_threshold,
            default_lookback_days=self.default_lookback_days,
            tie_break_policy=self.tie_break_policy,
            max_concurrent_embeddings=self.max_concurrent_embeddings,
        )

    def validate_paths(self) -> None:
        """Create directories the service writes into."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)
