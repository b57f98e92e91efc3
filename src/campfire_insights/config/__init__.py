"""Configuration module for Campfire Insights."""

from campfire_insights.config.logging import configure_logging
from campfire_insights.config.settings import FlatSettings, get_settings

__all__ = ["FlatSettings", "get_settings", "configure_logging"]
