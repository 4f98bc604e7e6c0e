"""
Main application window hosting the widget gallery frame loop.
"""

import logging
from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QStatusBar,
    QMessageBox, QFileDialog, QAction
)
from PyQt5.QtCore import Qt, QTimer, pyqtSlot

from core.widget_gallery import WidgetGallery
from config.settings_manager import get_settings_manager
from .qt_context import QtContext


logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, settings_manager=None):
        super().__init__()
        self.settings_manager = settings_manager or get_settings_manager()

        self.gallery = WidgetGallery(self.settings_manager.get_gallery_state())
        self.gallery_open = self.settings_manager.get_gui_settings().gallery_open
        self.context = QtContext(self)

        # Initialize UI
        self.setup_ui()
        self.setup_menu()
        self.setup_status_bar()

        # Load settings
        self.load_settings()

        # Setup frame timers
        self.setup_timers()

    def setup_ui(self):
        """Setup the main user interface."""
        self.setWindowTitle("Widget Gallery")

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)

        intro = QLabel(
            "The gallery window shows one example of each major type of widget.\n"
            "Use View > Widget Gallery to reopen it after closing."
        )
        intro.setAlignment(Qt.AlignCenter)
        intro.setWordWrap(True)
        layout.addWidget(intro)
        layout.addStretch()

    def setup_menu(self):
        """Setup the menu bar."""
        menubar = self.menuBar()

        # File menu
        file_menu = menubar.addMenu("File")

        load_state_action = QAction("Load State", self)
        load_state_action.setShortcut("Ctrl+O")
        load_state_action.triggered.connect(self.load_state)
        file_menu.addAction(load_state_action)

        save_state_action = QAction("Save State", self)
        save_state_action.setShortcut("Ctrl+S")
        save_state_action.triggered.connect(self.save_state)
        file_menu.addAction(save_state_action)

        export_state_action = QAction("Export State...", self)
        export_state_action.triggered.connect(self.export_state)
        file_menu.addAction(export_state_action)

        restore_defaults_action = QAction("Restore Defaults", self)
        restore_defaults_action.triggered.connect(self.restore_defaults)
        file_menu.addAction(restore_defaults_action)

        file_menu.addSeparator()

        exit_action = QAction("Exit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # View menu
        view_menu = menubar.addMenu("View")

        self.gallery_action = QAction(self.gallery.name(), self)
        self.gallery_action.setCheckable(True)
        self.gallery_action.setChecked(self.gallery_open)
        self.gallery_action.toggled.connect(self.set_gallery_open)
        view_menu.addAction(self.gallery_action)

        # Help menu
        help_menu = menubar.addMenu("Help")

        about_action = QAction("About", self)
        about_action.triggered.connect(self.show_about)
        help_menu.addAction(about_action)

    def setup_status_bar(self):
        """Setup the status bar."""
        self.status_bar = QStatusBar()

        self.state_label = QLabel("")
        self.status_bar.addWidget(self.state_label)

        self.frame_rate_label = QLabel("Frames: 0 Hz")
        self.status_bar.addPermanentWidget(self.frame_rate_label)

        self.setStatusBar(self.status_bar)

    def setup_timers(self):
        """Setup the frame loop and frame rate timers."""
        interval = self.settings_manager.get_gui_settings().update_interval

        self.frame_timer = QTimer(self)
        self.frame_timer.timeout.connect(self.run_frame)
        self.frame_timer.start(interval)

        self.frame_count = 0
        self.frame_rate_timer = QTimer(self)
        self.frame_rate_timer.timeout.connect(self.calculate_frame_rate)
        self.frame_rate_timer.start(1000)

    def load_settings(self):
        """Apply GUI settings."""
        gui_settings = self.settings_manager.get_gui_settings()
        self.setGeometry(
            gui_settings.window_x,
            gui_settings.window_y,
            gui_settings.window_width,
            gui_settings.window_height
        )

    def save_settings(self):
        """Store window geometry and, when enabled, the gallery state."""
        gui_settings = self.settings_manager.get_gui_settings()
        gui_settings.window_x = self.x()
        gui_settings.window_y = self.y()
        gui_settings.window_width = self.width()
        gui_settings.window_height = self.height()
        gui_settings.gallery_open = self.gallery_open
        self.settings_manager.update_gui_settings(gui_settings)

        persistence = self.settings_manager.get_persistence_settings()
        if persistence.enabled and persistence.autosave_on_exit:
            self.settings_manager.update_gallery_state(self.gallery.state)

        return self.settings_manager.save_settings()

    @pyqtSlot()
    def run_frame(self):
        """Run one immediate-mode frame of the gallery."""
        was_open = self.gallery_open
        self.context.run(self._draw)

        if was_open and not self.gallery_open:
            logger.debug("Gallery window closed")
            self.gallery_action.blockSignals(True)
            self.gallery_action.setChecked(False)
            self.gallery_action.blockSignals(False)

        state = self.gallery.state
        self.state_label.setText(
            f"boolean={state.boolean}  scalar={state.scalar:.1f}°  "
            f"opacity={state.opacity:.2f}  color={state.color.to_hex()}"
        )
        self.frame_count += 1

    def _draw(self, ctx):
        self.gallery_open = self.gallery.show(ctx, self.gallery_open)

    def calculate_frame_rate(self):
        """Calculate and display frame rate."""
        self.frame_rate_label.setText(f"Frames: {self.frame_count} Hz")
        self.frame_count = 0

    @pyqtSlot(bool)
    def set_gallery_open(self, is_open: bool):
        self.gallery_open = is_open

    def load_state(self):
        """Import a gallery state or settings file."""
        filename, _ = QFileDialog.getOpenFileName(
            self, "Load State", "", "JSON Files (*.json)")
        if not filename:
            return

        if self.settings_manager.import_settings(filename):
            self.gallery.state = self.settings_manager.get_gallery_state()
            logger.info(f"State loaded from {filename}")
        else:
            QMessageBox.critical(self, "Error", f"Failed to load state from {filename}")

    def save_state(self):
        """Save settings, including the gallery state, to the settings directory."""
        self.settings_manager.update_gallery_state(self.gallery.state)
        if self.settings_manager.save_settings():
            self.status_bar.showMessage("State saved", 3000)
        else:
            QMessageBox.critical(self, "Error", "Failed to save state")

    def export_state(self):
        """Export settings, including the gallery state, to a chosen file."""
        filename, _ = QFileDialog.getSaveFileName(
            self, "Export State", "", "JSON Files (*.json)")
        if not filename:
            return

        self.settings_manager.update_gallery_state(self.gallery.state)
        if self.settings_manager.export_settings(filename):
            logger.info(f"State exported to {filename}")
        else:
            QMessageBox.critical(self, "Error", f"Failed to export state to {filename}")

    def restore_defaults(self):
        """Reset the gallery and settings to their defaults."""
        self.settings_manager.restore_defaults()
        self.gallery.state = self.settings_manager.get_gallery_state()
        logger.info("Defaults restored")

    def show_about(self):
        """Show about dialog."""
        QMessageBox.about(self, "About",
            "Widget Gallery\n\n"
            "Version 1.0\n"
            "An immediate-mode demonstration panel showing one example\n"
            "of each major type of widget:\n"
            "• Label, button and checkbox\n"
            "• Slider and drag value\n"
            "• Progress bar and color picker")

    def closeEvent(self, event):
        """Handle window close event."""
        self.frame_timer.stop()
        self.save_settings()
        self.context.close_all()
        event.accept()
