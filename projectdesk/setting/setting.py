"""Application settings for ProjectDesk.

Settings are resolved from three layers, highest priority first:
environment variables, config/projectdesk.yaml, and the defaults below.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field

from ..core.constants import (
    DEFAULT_AI_BASE_URL,
    DEFAULT_AI_MAX_TOKENS,
    DEFAULT_AI_MODEL,
    DEFAULT_AI_TEMPERATURE,
    DEFAULT_AI_TIMEOUT_SECONDS,
    DEFAULT_AI_TOP_P,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RATE_LIMIT_MAX_REQUESTS,
    DEFAULT_RATE_LIMIT_WINDOW_SECONDS,
    DEFAULT_RETRY_BASE_SECONDS,
    DEFAULT_RETRY_CAP_SECONDS,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "projectdesk.yaml"


class AISettings(BaseModel):
    """Generative AI service configuration."""
    base_url: str = DEFAULT_AI_BASE_URL
    api_key: str = ""
    model: str = DEFAULT_AI_MODEL
    timeout_seconds: float = Field(DEFAULT_AI_TIMEOUT_SECONDS, gt=0)
    max_tokens: int = Field(DEFAULT_AI_MAX_TOKENS, gt=0)
    temperature: float = Field(DEFAULT_AI_TEMPERATURE, ge=0, le=2)
    top_p: float = Field(DEFAULT_AI_TOP_P, gt=0, le=1)
    max_retries: int = Field(DEFAULT_MAX_RETRIES, ge=1)
    retry_base_seconds: float = Field(DEFAULT_RETRY_BASE_SECONDS, ge=0)
    retry_cap_seconds: float = Field(DEFAULT_RETRY_CAP_SECONDS, ge=0)
    rate_limit_max_requests: int = Field(DEFAULT_RATE_LIMIT_MAX_REQUESTS, ge=1)
    rate_limit_window_seconds: float = Field(DEFAULT_RATE_LIMIT_WINDOW_SECONDS, gt=0)


class DatabaseSettings(BaseModel):
    """Relational store configuration."""
    url: str = "sqlite:///./projectdesk.db"
    echo: bool = False


class ServerSettings(BaseModel):
    """HTTP server configuration."""
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"
    debug: bool = False
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"]
    )


class AppSettings(BaseModel):
    """Top-level settings object."""
    ai: AISettings = Field(default_factory=AISettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)


def get_config_path() -> Path:
    """Return the directory holding projectdesk.yaml."""
    return Path(__file__).parent.parent.parent / "config"


def _read_yaml(path: Path) -> dict:
    if not path.is_file():
        logger.debug(f"No config file at {path}, using defaults")
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return data


def _apply_env_overrides(raw: dict) -> dict:
    """Overlay environment variables onto the raw config mapping."""
    ai = raw.setdefault("ai", {})
    database = raw.setdefault("database", {})
    server = raw.setdefault("server", {})

    api_key = os.getenv("AI_API_KEY") or os.getenv("DEEPSEEK_API_KEY")
    if api_key:
        ai["api_key"] = api_key
    if os.getenv("AI_BASE_URL"):
        ai["base_url"] = os.environ["AI_BASE_URL"]
    if os.getenv("AI_MODEL"):
        ai["model"] = os.environ["AI_MODEL"]

    if os.getenv("DATABASE_URL"):
        database["url"] = os.environ["DATABASE_URL"]

    if os.getenv("PORT"):
        server["port"] = int(os.environ["PORT"])
    if os.getenv("LOG_LEVEL"):
        server["log_level"] = os.environ["LOG_LEVEL"]
    if os.getenv("FRONTEND_URL"):
        server["cors_origins"] = [os.environ["FRONTEND_URL"]]
    if os.getenv("NODE_ENV") == "development" or os.getenv("DEBUG", "").lower() in ("1", "true", "yes"):
        server["debug"] = True

    return raw


def load_settings(config_file: Optional[Path] = None) -> AppSettings:
    """Build settings from YAML plus environment overrides.

    Args:
        config_file: Explicit YAML path. Defaults to $PROJECTDESK_CONFIG or
            config/projectdesk.yaml next to the package.
    """
    if config_file is None:
        env_path = os.getenv("PROJECTDESK_CONFIG")
        config_file = Path(env_path) if env_path else get_config_path() / CONFIG_FILENAME

    raw = _apply_env_overrides(_read_yaml(Path(config_file)))
    settings = AppSettings(**raw)

    if not settings.ai.api_key:
        logger.warning("AI API key not configured; analysis will use the rule-based fallback")
    return settings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return the process-wide settings (loaded once)."""
    return load_settings()
