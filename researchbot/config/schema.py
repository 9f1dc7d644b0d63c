"""Configuration schema using Pydantic."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Config(BaseSettings):
    """
    Root configuration for researchbot.

    Values come from keyword arguments (the JSON config file), then environment
    variables, then a local .env file, then the defaults below. Field names
    match the environment variables case-insensitively, e.g. OLLAMA_MODEL.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    ollama_model: str = Field(default="llama3.2", min_length=1)
    ollama_api_base_url: str = "http://localhost:11434"
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_search_results: int = Field(default=5, ge=1)
    max_tool_calls: int = Field(default=5, ge=1, le=5)
    max_tokens: int = Field(default=4096, ge=1)
    request_timeout: float = Field(default=120.0, gt=0)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level
