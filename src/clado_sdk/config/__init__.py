"""Configuration for the Clado SDK."""

from .settings import DEFAULT_BASE_URL, CladoSettings

__all__ = ["CladoSettings", "DEFAULT_BASE_URL"]
