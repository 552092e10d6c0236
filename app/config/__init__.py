"""
Configuration package for the hotel booking backend.

Contains environment settings and logging configuration.
"""

from app.config.settings import Settings, get_settings, settings

__all__ = ['settings', 'get_settings', 'Settings']
