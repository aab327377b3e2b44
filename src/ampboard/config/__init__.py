"""Configuration for AMPBoard."""

from ampboard.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
