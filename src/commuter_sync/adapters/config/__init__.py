"""Configuration adapters."""

from commuter_sync.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
