"""Configuration for the energy analytics engine."""

__all__ = ["Settings", "get_settings"]

from energy_analytics.config.settings import Settings, get_settings
