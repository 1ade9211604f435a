"""Utility modules for Cijfer Converter."""

from .settings_store import (
    ConfigurationCell,
    SettingsStore,
    load_configuration,
    save_configuration,
)

__all__ = ["ConfigurationCell", "SettingsStore", "load_configuration", "save_configuration"]
