"""
Configuration management for the A2A skill agent.

Loads all configuration from environment variables (and a ``.env`` file)
with sensible defaults for local development. ``config_loader`` can
overlay values from a YAML file.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()

DEFAULT_A2A_SERVER_URL = "http://localhost:3000"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_optional_float(name: str) -> Optional[float]:
    value = os.getenv(name, "")
    return float(value) if value else None


@dataclass
class GeminiConfig:
    """Configuration for the Gemini chat model (OpenAI-compatible endpoint)."""
    api_key: str = field(default_factory=lambda: _env("GEMINI_API_KEY"))
    model: str = field(default_factory=lambda: _env("GEMINI_MODEL", "gemini-2.0-flash"))
    base_url: str = field(
        default_factory=lambda: _env("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL)
    )
    temperature: Optional[float] = field(
        default_factory=lambda: _env_optional_float("GEMINI_TEMPERATURE")
    )


@dataclass
class A2AConfig:
    """Configuration for the remote A2A task server."""
    server_url: str = field(
        default_factory=lambda: _env("A2A_SERVER_URL", DEFAULT_A2A_SERVER_URL)
    )
    timeout: float = field(default_factory=lambda: float(_env("A2A_TIMEOUT", "30")))
    require_discovery: bool = field(
        default_factory=lambda: _env_bool("A2A_REQUIRE_DISCOVERY")
    )


@dataclass
class OrchestratorConfig:
    """Configuration for the conversation orchestrator."""
    max_tool_rounds: int = field(
        default_factory=lambda: int(_env("ORCHESTRATOR_MAX_TOOL_ROUNDS", "5"))
    )
    max_workers: int = field(
        default_factory=lambda: int(_env("ORCHESTRATOR_MAX_WORKERS", "4"))
    )
    profile: str = field(default_factory=lambda: _env("AGENT_PROFILE", "assistant"))


@dataclass
class LangfuseConfig:
    """Configuration for Langfuse observability.

    Tracing auto-enables when both public_key and secret_key are provided.
    """
    public_key: str = field(default_factory=lambda: _env("LANGFUSE_PUBLIC_KEY"))
    secret_key: str = field(default_factory=lambda: _env("LANGFUSE_SECRET_KEY"))
    host: str = field(default_factory=lambda: _env("LANGFUSE_HOST"))
    debug: bool = field(default_factory=lambda: _env_bool("LANGFUSE_DEBUG"))

    @property
    def enabled(self) -> bool:
        """Auto-enable when both keys are configured."""
        return bool(self.public_key and self.secret_key)


@dataclass
class Config:
    """Main configuration container."""
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    a2a: A2AConfig = field(default_factory=A2AConfig)
    orchestrator: OrchestratorConfig = field(default_factory=OrchestratorConfig)
    langfuse: LangfuseConfig = field(default_factory=LangfuseConfig)
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))

    def validate(self) -> None:
        """Raise ConfigurationError if a required setting is missing."""
        if not self.gemini.api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set in the environment or .env file.")
        if self.orchestrator.max_tool_rounds < 1:
            raise ConfigurationError("ORCHESTRATOR_MAX_TOOL_ROUNDS must be at least 1.")
        if self.orchestrator.max_workers < 1:
            raise ConfigurationError("ORCHESTRATOR_MAX_WORKERS must be at least 1.")
        if self.a2a.timeout <= 0:
            raise ConfigurationError("A2A_TIMEOUT must be positive.")


def get_config() -> Config:
    """Build the configuration from the current environment."""
    try:
        return Config()
    except ValueError as e:
        raise ConfigurationError(f"Invalid numeric setting in environment: {e}") from e
