"""
Configuration files and settings management for the widget gallery.
"""

from .state_schema import get_state_schema, validate_state
from .settings_manager import SettingsManager, get_settings_manager

__all__ = [
    'get_state_schema',
    'validate_state',
    'SettingsManager',
    'get_settings_manager'
]
