"""Persistence for AMPBoard configuration documents."""

from ampboard.repositories.config_store import CONFIG_DOCUMENTS, ConfigStore

__all__ = ["CONFIG_DOCUMENTS", "ConfigStore"]
