"""
Configuration Package Initialization
Version: 1.0
Purpose: Centralizes access to application settings.
"""

from concept_server.config.settings import Settings, get_settings

__all__ = [
    'Settings',
    'get_settings',
]
