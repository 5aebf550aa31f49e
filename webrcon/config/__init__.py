"""Configuration for the RCON client."""

from .settings import RconSettings, get_settings

__all__ = ["RconSettings", "get_settings"]
