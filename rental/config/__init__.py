"""
Configuration package for the rental card service.

This package contains modules for managing application settings,
environment variables, and logging configuration.
"""

from rental.config.settings import Settings

# Export settings singleton for app-wide use
settings = Settings()

__all__ = ["settings", "Settings"]
