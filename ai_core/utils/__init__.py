"""
Utilities Module
================

Common utilities shared across the runtime:
- logger: Structured logging with levels and context
- config: Centralized configuration management
"""

from ai_core.utils.logger import Logger, logger
from ai_core.utils.config import get_config, Config

__all__ = ["Logger", "logger", "get_config", "Config"]
