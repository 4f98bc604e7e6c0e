"""
Settings management for persistent configuration storage.
"""

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, asdict, field, fields
import time

from core.gallery_state import GalleryState
from .state_schema import validate_state


logger = logging.getLogger(__name__)


@dataclass
class GUISettings:
    """GUI user preferences."""
    window_width: int = 420
    window_height: int = 360
    window_x: int = 100
    window_y: int = 100
    theme: str = "Fusion"
    update_interval: int = 16  # ms between frames
    gallery_open: bool = True


@dataclass
class PersistenceSettings:
    """Whether gallery state survives restarts."""
    enabled: bool = True
    autosave_on_exit: bool = True


@dataclass
class AppSettings:
    """Complete application configuration."""
    gui: GUISettings
    persistence: PersistenceSettings
    gallery: Dict[str, Any] = field(default_factory=lambda: GalleryState.default().to_dict())
    version: str = "1.0"
    last_updated: float = 0.0


def _has_type(value: Any, expected: type) -> bool:
    if expected is bool or isinstance(value, bool):
        return isinstance(value, bool) and expected is bool
    return isinstance(value, expected)


def _section(cls, data: Any, name: str):
    """Build a settings dataclass, checking the type of every stored field."""
    if not isinstance(data, dict):
        raise TypeError(f"Settings section '{name}' must be an object")
    known = {f.name: f.type for f in fields(cls)}
    for key, value in data.items():
        if key not in known:
            raise TypeError(f"Unknown setting '{name}.{key}'")
        if not _has_type(value, known[key]):
            raise TypeError(f"Setting '{name}.{key}' must be of type {known[key].__name__}")
    return cls(**data)


class SettingsManager:
    """Manages application settings with persistence."""

    def __init__(self, config_dir: Optional[str] = None):
        if config_dir is None:
            # Use default settings directory
            self.config_dir = Path.home() / '.widget_gallery'
        else:
            self.config_dir = Path(config_dir)

        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.settings_file = self.config_dir / 'settings.json'
        self.backup_file = self.config_dir / 'settings_backup.json'

        self.settings = None
        self.state_imported = False
        self.load_settings()

    def _create_default_settings(self) -> AppSettings:
        """Create default application settings."""
        return AppSettings(
            gui=GUISettings(),
            persistence=PersistenceSettings()
        )

    def load_settings(self) -> bool:
        """
        Load settings from file.

        Returns:
            True if settings loaded successfully, False otherwise
        """
        if not self.settings_file.exists():
            self.settings = self._create_default_settings()
            self.save_settings()  # Create the file
            return False

        try:
            with open(self.settings_file, 'r') as f:
                settings_data = json.load(f)
            if not isinstance(settings_data, dict):
                raise TypeError(f"{self.settings_file} does not hold an object")
            self.settings = self._dict_to_settings(settings_data)
            return True

        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Failed to load settings: {e}")
            self.settings = self._create_default_settings()
            return False

    def save_settings(self) -> bool:
        """
        Save current settings to file.

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            # Create backup before saving
            if self.settings_file.exists():
                shutil.copy2(self.settings_file, self.backup_file)

            self.settings.last_updated = time.time()

            with open(self.settings_file, 'w') as f:
                json.dump(self._settings_to_dict(self.settings), f, indent=2)

            logger.debug(f"Settings saved to {self.settings_file}")
            return True

        except OSError as e:
            logger.error(f"Failed to save settings: {e}")
            return False

    def restore_defaults(self) -> bool:
        """
        Restore settings to defaults.

        Returns:
            True if restored successfully
        """
        self.settings = self._create_default_settings()
        return self.save_settings()

    def backup_settings(self, backup_name: str = None) -> str:
        """
        Create a backup of current settings.

        Args:
            backup_name: Optional custom backup name

        Returns:
            Path to backup file
        """
        if backup_name is None:
            backup_name = f'settings_backup_{time.time_ns()}.json'

        backup_path = self.config_dir / backup_name
        with open(backup_path, 'w') as f:
            json.dump(self._settings_to_dict(self.settings), f, indent=2)

        return str(backup_path)

    def load_backup(self, backup_path: str) -> bool:
        """
        Load settings from backup file.

        Args:
            backup_path: Path to backup file

        Returns:
            True if loaded successfully
        """
        return self.import_settings(backup_path)

    def get_gui_settings(self) -> GUISettings:
        """Get GUI settings."""
        return self.settings.gui

    def update_gui_settings(self, settings: GUISettings):
        """Update GUI settings."""
        self.settings.gui = settings

    def get_persistence_settings(self) -> PersistenceSettings:
        """Get persistence settings."""
        return self.settings.persistence

    def update_persistence_settings(self, settings: PersistenceSettings):
        """Update persistence settings."""
        self.settings.persistence = settings

    def get_gallery_state(self) -> GalleryState:
        """
        Stored gallery state.

        With persistence disabled the state read from disk at startup is
        ignored and defaults are returned, until a state is explicitly
        imported or restored.
        """
        if not self.settings.persistence.enabled and not self.state_imported:
            return GalleryState.default()
        return GalleryState.from_dict(self.settings.gallery)

    def update_gallery_state(self, state: GalleryState):
        """Store the gallery state in the current settings."""
        self.settings.gallery = state.to_dict()

    def export_settings(self, export_path: str) -> bool:
        """
        Export settings to external file.

        Args:
            export_path: Path to export file

        Returns:
            True if exported successfully
        """
        try:
            with open(export_path, 'w') as f:
                json.dump(self._settings_to_dict(self.settings), f, indent=2)
            return True
        except OSError as e:
            logger.error(f"Failed to export settings: {e}")
            return False

    def import_settings(self, import_path: str) -> bool:
        """
        Import settings from external file.

        The file may hold complete settings or a bare gallery state mapping.
        Invalid files leave the current settings untouched.

        Args:
            import_path: Path to import file

        Returns:
            True if imported successfully
        """
        try:
            with open(import_path, 'r') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to import settings: {e}")
            return False

        if not isinstance(data, dict):
            logger.error(f"Failed to import settings: {import_path} does not hold an object")
            return False

        if 'gui' not in data and 'gallery' not in data:
            # A bare gallery state
            data = {**self._settings_to_dict(self.settings), 'gallery': data}

        try:
            imported = self._dict_to_settings(data)
        except (ValueError, TypeError) as e:
            logger.error(f"Failed to import settings: {e}")
            return False

        self.settings = imported
        self.state_imported = True
        return self.save_settings()

    def _settings_to_dict(self, settings: AppSettings) -> Dict[str, Any]:
        """Convert AppSettings to dictionary."""
        return asdict(settings)

    def _dict_to_settings(self, data: Dict[str, Any]) -> AppSettings:
        """
        Convert dictionary to AppSettings.

        Raises:
            ValueError: if the gallery section fails schema validation
            TypeError: if a section or one of its fields has the wrong type
        """
        gallery = data.get('gallery', GalleryState.default().to_dict())
        result = validate_state(gallery)
        if not result['valid']:
            raise ValueError(f"Invalid gallery state: {'; '.join(result['errors'])}")
        for warning in result.get('warnings', []):
            logger.warning(warning)

        return AppSettings(
            gui=_section(GUISettings, data.get('gui', {}), 'gui'),
            persistence=_section(PersistenceSettings, data.get('persistence', {}), 'persistence'),
            gallery=GalleryState.from_dict(gallery).to_dict(),
            version=data.get('version', '1.0'),
            last_updated=data.get('last_updated', time.time())
        )

    def get_settings_summary(self) -> Dict[str, Any]:
        """Get a summary of current settings."""
        return {
            'version': self.settings.version,
            'last_updated': self.settings.last_updated,
            'theme': self.settings.gui.theme,
            'update_interval': self.settings.gui.update_interval,
            'persistence_enabled': self.settings.persistence.enabled,
            'gallery_fields': len(self.settings.gallery)
        }

    def validate_settings(self) -> Dict[str, Any]:
        """
        Validate current settings.

        Returns:
            Validation result with any issues found
        """
        issues = []

        gui = self.settings.gui
        mistyped = [f.name for f in fields(gui) if not _has_type(getattr(gui, f.name), f.type)]
        if mistyped:
            issues.append(f"GUI settings have the wrong type: {', '.join(mistyped)}")
        else:
            if gui.window_width <= 0 or gui.window_height <= 0:
                issues.append("GUI window dimensions must be positive")
            if gui.update_interval <= 0:
                issues.append("GUI update interval must be positive")

        result = validate_state(self.settings.gallery)
        issues.extend(f"gallery: {error}" for error in result['errors'])

        return {
            'valid': len(issues) == 0,
            'issues': issues
        }

    def list_backups(self) -> List[str]:
        """List available backup files."""
        return sorted(str(path) for path in self.config_dir.glob('settings_backup_*.json'))

    def cleanup_old_backups(self, keep_count: int = 5):
        """Clean up old backup files, keeping only the most recent."""
        backups = self.list_backups()
        if len(backups) > keep_count:
            for backup in backups[:-keep_count]:
                try:
                    os.remove(backup)
                except OSError as e:
                    logger.warning(f"Failed to remove backup {backup}: {e}")


# Global settings manager instance
_settings_manager = None


def get_settings_manager(config_dir: Optional[str] = None) -> SettingsManager:
    """Get global settings manager instance."""
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager(config_dir)
    return _settings_manager
