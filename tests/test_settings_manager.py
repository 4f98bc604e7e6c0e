"""
Test persistent settings and gallery state storage.
"""

import json

from config.settings_manager import SettingsManager, GUISettings, PersistenceSettings
from core.color import Color32
from core.gallery_state import GalleryState


class TestLoadSave:
    """Test loading and saving the settings file."""

    def test_fresh_directory_gets_defaults(self, tmp_path):
        """Test a new directory is populated with default settings."""
        manager = SettingsManager(str(tmp_path))
        assert manager.settings_file.exists()
        assert manager.get_gallery_state() == GalleryState.default()
        assert manager.get_gui_settings() == GUISettings()

    def test_state_survives_restart(self, tmp_path):
        """Test a saved gallery state is loaded by a new manager."""
        manager = SettingsManager(str(tmp_path))
        state = GalleryState(boolean=True, scalar=90.0, color=Color32(1, 2, 3, 4))
        manager.update_gallery_state(state)
        assert manager.save_settings()

        reloaded = SettingsManager(str(tmp_path))
        assert reloaded.get_gallery_state() == state

    def test_save_creates_backup(self, tmp_path):
        """Test the previous file is kept as a backup."""
        manager = SettingsManager(str(tmp_path))
        manager.save_settings()
        assert manager.backup_file.exists()

    def test_corrupt_file_falls_back_to_defaults(self, tmp_path):
        """Test unreadable settings do not prevent startup."""
        (tmp_path / 'settings.json').write_text("{not json")
        manager = SettingsManager(str(tmp_path))
        assert manager.get_gallery_state() == GalleryState.default()

    def test_non_object_file_falls_back_to_defaults(self, tmp_path):
        """Test a JSON file that is not an object does not prevent startup."""
        (tmp_path / 'settings.json').write_text("[]")
        manager = SettingsManager(str(tmp_path))
        assert manager.get_gallery_state() == GalleryState.default()
        assert manager.get_gui_settings() == GUISettings()

    def test_mistyped_gui_setting_falls_back_to_defaults(self, tmp_path):
        """Test a wrongly typed GUI field is rejected on load."""
        (tmp_path / 'settings.json').write_text(json.dumps({'gui': {'update_interval': 'fast'}}))
        manager = SettingsManager(str(tmp_path))
        assert manager.get_gui_settings() == GUISettings()
        assert manager.validate_settings()['valid']

    def test_restore_defaults(self, tmp_path):
        """Test defaults replace a customised state."""
        manager = SettingsManager(str(tmp_path))
        manager.update_gallery_state(GalleryState(scalar=1.0))
        assert manager.restore_defaults()
        assert manager.get_gallery_state().scalar == 42.0

    def test_persistence_disabled(self, tmp_path):
        """Test a disabled persistence layer always yields defaults."""
        manager = SettingsManager(str(tmp_path))
        manager.update_gallery_state(GalleryState(scalar=1.0))
        manager.update_persistence_settings(PersistenceSettings(enabled=False))
        assert manager.get_gallery_state() == GalleryState.default()

    def test_persistence_disabled_survives_restart(self, tmp_path):
        """Test a stored state is ignored at startup when persistence is off."""
        manager = SettingsManager(str(tmp_path))
        manager.update_gallery_state(GalleryState(scalar=1.0))
        manager.update_persistence_settings(PersistenceSettings(enabled=False))
        manager.save_settings()

        reloaded = SettingsManager(str(tmp_path))
        assert reloaded.get_gallery_state() == GalleryState.default()

    def test_import_with_persistence_disabled(self, tmp_path):
        """Test an explicit import applies even when persistence is off."""
        manager = SettingsManager(str(tmp_path / 'config'))
        manager.update_persistence_settings(PersistenceSettings(enabled=False))
        path = tmp_path / 'state.json'
        path.write_text(json.dumps({'scalar': 300.0}))

        assert manager.import_settings(str(path))
        assert manager.get_gallery_state().scalar == 300.0


class TestImportExport:
    """Test importing and exporting settings files."""

    def test_import_bare_state(self, tmp_path):
        """Test a file holding only gallery fields."""
        manager = SettingsManager(str(tmp_path / 'config'))
        path = tmp_path / 'state.json'
        path.write_text(json.dumps({'boolean': True, 'opacity': 0.25}))

        assert manager.import_settings(str(path))
        state = manager.get_gallery_state()
        assert state.boolean is True
        assert state.opacity == 0.25
        assert state.scalar == 42.0

    def test_import_invalid_state_rejected(self, tmp_path):
        """Test schema violations leave current settings untouched."""
        manager = SettingsManager(str(tmp_path / 'config'))
        path = tmp_path / 'state.json'
        path.write_text(json.dumps({'color': [1, 2, 3], 'boolean': True}))

        assert not manager.import_settings(str(path))
        assert manager.get_gallery_state() == GalleryState.default()

    def test_import_malformed_json(self, tmp_path):
        """Test unreadable files are rejected."""
        manager = SettingsManager(str(tmp_path / 'config'))
        path = tmp_path / 'state.json'
        path.write_text("[1, 2")
        assert not manager.import_settings(str(path))

    def test_import_missing_file(self, tmp_path):
        """Test a missing file is rejected."""
        manager = SettingsManager(str(tmp_path / 'config'))
        assert not manager.import_settings(str(tmp_path / 'nope.json'))

    def test_import_clamps_out_of_range(self, tmp_path):
        """Test out-of-range numbers load clamped."""
        manager = SettingsManager(str(tmp_path / 'config'))
        path = tmp_path / 'state.json'
        path.write_text(json.dumps({'opacity': 7, 'scalar': -20}))

        assert manager.import_settings(str(path))
        state = manager.get_gallery_state()
        assert state.opacity == 1.0
        assert state.scalar == 0.0

    def test_export_import_round_trip(self, tmp_path):
        """Test an exported file restores the same settings."""
        source = SettingsManager(str(tmp_path / 'a'))
        source.update_gallery_state(GalleryState(visible=False, text="x"))
        source.update_gui_settings(GUISettings(update_interval=33))
        export_path = tmp_path / 'export.json'
        assert source.export_settings(str(export_path))

        target = SettingsManager(str(tmp_path / 'b'))
        assert target.import_settings(str(export_path))
        assert target.get_gallery_state() == GalleryState(visible=False, text="x")
        assert target.get_gui_settings().update_interval == 33


class TestBackups:
    """Test explicit backups."""

    def test_backup_and_restore(self, tmp_path):
        """Test a named backup can be loaded later."""
        manager = SettingsManager(str(tmp_path))
        manager.update_gallery_state(GalleryState(scalar=300.0))
        backup = manager.backup_settings()

        manager.restore_defaults()
        assert manager.load_backup(backup)
        assert manager.get_gallery_state().scalar == 300.0

    def test_cleanup_old_backups(self, tmp_path):
        """Test only the newest backups are kept."""
        manager = SettingsManager(str(tmp_path))
        for index in range(4):
            manager.backup_settings(f'settings_backup_{index}.json')

        manager.cleanup_old_backups(keep_count=2)
        assert [p.split('_')[-1] for p in manager.list_backups()] == ['2.json', '3.json']


class TestValidation:
    """Test settings validation and summary."""

    def test_defaults_valid(self, tmp_path):
        """Test default settings pass validation."""
        manager = SettingsManager(str(tmp_path))
        assert manager.validate_settings() == {'valid': True, 'issues': []}

    def test_bad_interval(self, tmp_path):
        """Test a non-positive frame interval is reported."""
        manager = SettingsManager(str(tmp_path))
        manager.update_gui_settings(GUISettings(update_interval=0))
        result = manager.validate_settings()
        assert not result['valid']
        assert "GUI update interval must be positive" in result['issues']

    def test_mistyped_gui_setting_reported(self, tmp_path):
        """Test a wrongly typed GUI field is reported instead of raising."""
        manager = SettingsManager(str(tmp_path))
        manager.update_gui_settings(GUISettings(update_interval="fast"))
        result = manager.validate_settings()
        assert not result['valid']
        assert "update_interval" in result['issues'][0]

    def test_import_mistyped_section_rejected(self, tmp_path):
        """Test a settings file with a non-object section is rejected."""
        manager = SettingsManager(str(tmp_path / 'config'))
        path = tmp_path / 'settings.json'
        path.write_text(json.dumps({'gui': [], 'gallery': {}}))
        assert not manager.import_settings(str(path))
        assert manager.get_gui_settings() == GUISettings()

    def test_summary(self, tmp_path):
        """Test the settings summary."""
        manager = SettingsManager(str(tmp_path))
        summary = manager.get_settings_summary()
        assert summary['persistence_enabled'] is True
        assert summary['gallery_fields'] == 8
