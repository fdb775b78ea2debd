"""Application settings loaded from the environment."""

from typing import List, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CATEGORIES = ["Personal", "Professional", "Family & Friends", "VIP", "Others"]


class Settings(BaseSettings):
    """Nexus CRM settings.

    Every value can be overridden through an environment variable of the
    same name (case-insensitive) or a local ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Relationship-intelligence backend
    intelligence_provider: str = "openai_compatible"
    model_intelligence: str = "gemini-2.0-flash"
    # Social-update lookups need a model that accepts web_search_options
    model_search: str = "gpt-4o-mini-search-preview"
    gemini_api_key: Optional[SecretStr] = None
    openai_api_key: Optional[SecretStr] = None
    deepseek_api_key: Optional[SecretStr] = None
    llm_timeout_seconds: float = Field(default=60.0, gt=0)

    # Daily briefing
    insight_batch_cap: int = Field(default=8, ge=1)
    default_follow_up_days: int = Field(default=30, ge=1)
    default_categories: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CATEGORIES)
    )

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"

    @property
    def gemini_api_key_str(self) -> Optional[str]:
        """Gemini API key as plain text, if configured."""
        return self.gemini_api_key.get_secret_value() if self.gemini_api_key else None

    @property
    def openai_api_key_str(self) -> Optional[str]:
        """OpenAI API key as plain text, if configured."""
        return self.openai_api_key.get_secret_value() if self.openai_api_key else None

    @property
    def deepseek_api_key_str(self) -> Optional[str]:
        """DeepSeek API key as plain text, if configured."""
        return (
            self.deepseek_api_key.get_secret_value() if self.deepseek_api_key else None
        )
