"""Configuration models and YAML loader for the CV job matcher."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from jobmatch.core.errors import ConfigurationError

SEARCH_URL_ENV = "JOB_SEARCH_API_URL"
SEARCH_KEY_ENV = "JOB_SEARCH_API_KEY"


class LLMConfig(BaseModel):
    """Language-model completion settings for both LLM stages."""

    provider: str = "openai"
    skills_model: str | None = None
    tailoring_model: str | None = None
    skills_temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    tailoring_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    skills_max_tokens: int = Field(default=200, ge=1)
    tailoring_max_tokens: int = Field(default=1500, ge=1)
    timeout_s: float = Field(default=60.0, gt=0)
    base_url: str | None = None


class SearchIndexConfig(BaseModel):
    """Job-search index endpoint settings."""

    base_url: str = "https://jobsearch.api.jobtechdev.se"
    timeout_s: float = Field(default=30.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def base_url_not_empty(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            msg = "search base_url must not be empty"
            raise ValueError(msg)
        return v


class PipelineConfig(BaseModel):
    """Limits applied by the orchestrators."""

    max_results: int = Field(default=10, ge=1, le=100)
    skills_max_chars: int = Field(default=255, ge=1)


class DatabaseConfig(BaseModel):
    """Saved-jobs database configuration."""

    path: str = "data/saved_jobs.db"


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    search: SearchIndexConfig = Field(default_factory=SearchIndexConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    search_api_key: str | None = Field(default=None, exclude=True)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)

    @classmethod
    def load(
        cls,
        path: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "Settings":
        """Load settings from YAML (or defaults) and overlay the environment.

        ``JOB_SEARCH_API_URL`` replaces the index base URL and
        ``JOB_SEARCH_API_KEY`` supplies the optional index key.
        """
        settings = cls.from_yaml(path) if path is not None else cls()
        env = os.environ if environ is None else environ

        url = env.get(SEARCH_URL_ENV, "").strip()
        if url:
            settings.search = SearchIndexConfig(
                base_url=url, timeout_s=settings.search.timeout_s,
            )
        settings.search_api_key = env.get(SEARCH_KEY_ENV) or None
        return settings


def require_env(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Return a required environment value or raise ConfigurationError."""
    env = os.environ if environ is None else environ
    value = env.get(name, "").strip()
    if not value:
        msg = f"{name} environment variable is required"
        raise ConfigurationError(msg)
    return value
