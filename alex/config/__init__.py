"""Configuration for Alex sessions."""

from .settings import HelpersConfig, ReplConfig, Settings, load_settings

__all__ = [
    "HelpersConfig",
    "ReplConfig",
    "Settings",
    "load_settings",
]
