"""Nexus CRM -- catch-up scheduling and relationship insight engine."""

__version__ = "0.1.0"
