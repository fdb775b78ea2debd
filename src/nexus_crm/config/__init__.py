"""Configuration for Nexus CRM."""

from .settings import DEFAULT_CATEGORIES, Settings

__all__ = ["DEFAULT_CATEGORIES", "Settings"]
