"""Configuration module."""

from src.config.logging import bind_summary_context, configure_logging, get_logger
from src.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "bind_summary_context",
    "configure_logging",
    "get_logger",
]
