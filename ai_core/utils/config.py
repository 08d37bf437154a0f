"""
Configuration Management
========================

Centralized configuration for the runtime. Environment variables are read
and typed here, once, so the rest of the code never calls os.getenv().

Every value has a default: the runtime works against a local
OpenAI-compatible endpoint (e.g. Ollama) with no configuration at all.

Usage:
    from ai_core.utils.config import get_config

    config = get_config()
    print(config.openai.model)
    print(config.agent.max_iterations)
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _optional(name: str, default: str) -> str:
    """Get an optional environment variable with a default."""
    return os.getenv(name) or default


def _optional_int(name: str, default: int) -> int:
    """
    Get an optional positive integer environment variable.

    Invalid or non-positive values fall back to the default.
    """
    value = os.getenv(name)
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        print(f"Warning: {name} is not a valid integer, using default: {default}")
        return default
    if parsed < 1:
        print(f"Warning: {name} must be at least 1, using default: {default}")
        return default
    return parsed


# ==============================================================================
# Configuration Dataclasses
# ==============================================================================

@dataclass(frozen=True)
class OpenAIConfig:
    """OpenAI-compatible backend configuration."""
    api_key: str            # sk-... key, or any placeholder for Ollama
    base_url: str | None    # e.g. http://localhost:11434/v1 for Ollama
    model: str              # Model for chat completions
    embedding_model: str    # Model for embeddings


@dataclass(frozen=True)
class AgentConfig:
    """Agent loop configuration."""
    max_iterations: int         # Bound on generate calls per run
    system_prompt: str | None   # Base instruction prepended to memory


@dataclass(frozen=True)
class MemoryConfig:
    """Memory store configuration."""
    directory: Path     # Where FileMemoryStore keeps session files


@dataclass(frozen=True)
class Config:
    """
    Root configuration object.

    Access via:
        config = get_config()
        config.openai.model
        config.agent.max_iterations
    """
    openai: OpenAIConfig
    agent: AgentConfig
    memory: MemoryConfig
    log_level: str


def load_config() -> Config:
    """
    Load all configuration from the environment (and .env, if present).

    Returns:
        Config: The typed configuration
    """
    load_dotenv()

    return Config(
        openai=OpenAIConfig(
            api_key=_optional("OPENAI_API_KEY", "ollama"),
            base_url=os.getenv("OPENAI_BASE_URL") or None,
            model=_optional("OPENAI_MODEL", "gpt-4o-mini"),
            embedding_model=_optional("OPENAI_EMBEDDING_MODEL", "text-embedding-3-small"),
        ),
        agent=AgentConfig(
            max_iterations=_optional_int("AGENT_MAX_ITERATIONS", 5),
            system_prompt=os.getenv("AGENT_SYSTEM_PROMPT") or None,
        ),
        memory=MemoryConfig(
            directory=Path(_optional("MEMORY_DIR", "memory")),
        ),
        log_level=_optional("LOG_LEVEL", "info"),
    )


# ==============================================================================
# Singleton
# ==============================================================================

_config_instance: Config | None = None


def get_config() -> Config:
    """
    Get the cached configuration instance, loading it on first access.

    Returns:
        Config: The application configuration
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = load_config()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
