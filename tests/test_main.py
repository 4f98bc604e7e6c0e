"""
Test the command line entry point and the headless session.
"""

import json
import sys

import pytest

import main
import config.settings_manager as settings_module
from config.settings_manager import SettingsManager, PersistenceSettings
from core.gallery_state import GalleryState
from main import parse_arguments, check_dependencies, load_configuration, run_headless_session


@pytest.fixture
def manager(tmp_path, monkeypatch):
    """Global settings manager backed by a temporary directory."""
    manager = SettingsManager(str(tmp_path / 'config'))
    monkeypatch.setattr(settings_module, '_settings_manager', manager)
    return manager


class TestParseArguments:
    """Test command line parsing."""

    def test_defaults(self):
        """Test the defaults without any flags."""
        args = parse_arguments([])
        assert args.config is None
        assert not args.headless
        assert args.frames == 8
        assert not args.reset
        assert not args.debug

    def test_headless_flags(self):
        """Test headless, frame count and reset flags."""
        args = parse_arguments(['--headless', '--frames', '3', '--reset', '--config', 'state.json'])
        assert args.headless
        assert args.frames == 3
        assert args.reset
        assert args.config == 'state.json'

    def test_bad_frame_count(self):
        """Test a non-integer frame count is rejected."""
        with pytest.raises(SystemExit):
            parse_arguments(['--frames', 'many'])


class TestCheckDependencies:
    """Test the startup dependency check."""

    def test_settings_not_imported_at_module_load(self):
        """Test the settings layer is only imported when it is used."""
        assert not hasattr(main, 'get_settings_manager')

    def test_missing_jsonschema_reported(self, monkeypatch, capsys):
        """Test a missing library is reported instead of raising."""
        monkeypatch.setitem(sys.modules, 'jsonschema', None)
        assert not check_dependencies(headless=True)
        assert "jsonschema" in capsys.readouterr().out


class TestLoadConfiguration:
    """Test applying configuration before startup."""

    def test_defaults_valid(self, manager):
        """Test a fresh configuration loads."""
        assert load_configuration()

    def test_reset(self, manager):
        """Test reset restores the default gallery state."""
        manager.update_gallery_state(GalleryState(scalar=5.0))
        assert load_configuration(reset=True)
        assert manager.get_gallery_state() == GalleryState.default()

    def test_config_file(self, manager, tmp_path):
        """Test a state file is imported."""
        path = tmp_path / 'state.json'
        path.write_text(json.dumps({'scalar': 300.0}))
        assert load_configuration(str(path))
        assert manager.get_gallery_state().scalar == 300.0

    def test_config_file_with_persistence_disabled(self, manager, tmp_path):
        """Test a state file is applied even when persistence is off."""
        manager.update_persistence_settings(PersistenceSettings(enabled=False))
        path = tmp_path / 'state.json'
        path.write_text(json.dumps({'boolean': True}))
        assert load_configuration(str(path))
        assert manager.get_gallery_state().boolean is True

    def test_bad_config_file(self, manager, tmp_path):
        """Test an invalid state file stops startup."""
        path = tmp_path / 'state.json'
        path.write_text(json.dumps({'color': 'red'}))
        assert not load_configuration(str(path))


class TestHeadlessSession:
    """Test the scripted headless session."""

    def test_full_session(self, manager):
        """Test the scripted input reaches the state and the window closes."""
        gallery, is_open = run_headless_session(frames=8)

        assert not is_open
        assert gallery.state.boolean is True
        assert gallery.state.scalar == 180.0
        assert gallery.state.opacity == 0.5
        assert gallery.state.animate_progress_bar is False

    def test_session_saves_state(self, manager):
        """Test the final state is written to the settings file."""
        run_headless_session(frames=8)

        reloaded = SettingsManager(str(manager.config_dir))
        state = reloaded.get_gallery_state()
        assert state.scalar == 180.0
        assert state.opacity == 0.5

    def test_short_session(self, manager):
        """Test a session shorter than the script still closes the window."""
        gallery, is_open = run_headless_session(frames=2)

        assert not is_open
        assert gallery.state.boolean is True
        assert gallery.state.scalar == 42.0
