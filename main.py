#!/usr/bin/env python3
"""
Main entry point for the Widget Gallery demonstration.

This application shows one example of each major type of widget in an
immediate-mode panel:
- Label, button and checkbox
- Slider and drag value sharing one scalar
- Progress bar that pulses while hovered
- RGBA color picker
- Panel-wide visibility, interactivity and opacity controls

Usage:
    python main.py [options]

Options:
    --config FILE     Load gallery state from FILE
    --headless        Run a scripted session without a display
    --frames N        Number of frames to run in headless mode
    --reset           Restore default settings before starting
    --debug           Enable debug logging
    --help            Show this help message

Author: Widget Gallery Team
Version: 1.0
"""

import sys
import argparse
import json
import logging
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))


def setup_logging(debug=False):
    """Setup logging configuration."""
    level = logging.DEBUG if debug else logging.INFO

    # Create logs directory if it doesn't exist
    logs_dir = project_root / "logs"
    logs_dir.mkdir(exist_ok=True)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(logs_dir / "gallery.log"),
            logging.StreamHandler(sys.stdout) if debug else logging.NullHandler()
        ]
    )

    return logging.getLogger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Widget Gallery demonstration panel",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py                          # Run with GUI
    python main.py --config state.json      # Start from a saved gallery state
    python main.py --headless --frames 10   # Scripted session without a display
    python main.py --debug                  # Enable debug logging

Gallery state file example:
    {
        "enabled": true,
        "visible": true,
        "opacity": 1.0,
        "boolean": false,
        "scalar": 42.0,
        "text": "",
        "color": [101, 131, 188, 128],
        "animate_progress_bar": false
    }
        """
    )

    parser.add_argument(
        '--config',
        type=str,
        help='Load gallery state or settings from JSON file'
    )

    parser.add_argument(
        '--headless',
        action='store_true',
        help='Run a scripted session without GUI (for automated testing)'
    )

    parser.add_argument(
        '--frames',
        type=int,
        default=8,
        help='Number of frames to run in headless mode'
    )

    parser.add_argument(
        '--reset',
        action='store_true',
        help='Restore default settings before starting'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    parser.add_argument(
        '--version',
        action='version',
        version='Widget Gallery v1.0'
    )

    return parser.parse_args(argv)


def check_dependencies(headless=False):
    """Check if required dependencies are available."""
    missing = []

    try:
        import numpy
    except ImportError:
        missing.append("NumPy")

    try:
        import jsonschema
    except ImportError:
        missing.append("jsonschema")

    if not headless:
        try:
            import PyQt5
        except ImportError:
            missing.append("PyQt5")

    if missing:
        print(f"Error: Missing required dependencies: {', '.join(missing)}")
        print("\nTo install dependencies, run:")
        print("pip install -e .")
        return False

    return True


def load_configuration(config_file: str = None, reset: bool = False):
    """Load application configuration."""
    from config.settings_manager import get_settings_manager

    logger = logging.getLogger(__name__)
    settings_manager = get_settings_manager()

    if reset:
        settings_manager.restore_defaults()
        logger.info("Settings restored to defaults")

    if config_file:
        if settings_manager.import_settings(config_file):
            print(f"Configuration loaded from {config_file}")
        else:
            print(f"Failed to load configuration from {config_file}")
            return False

    validation = settings_manager.validate_settings()
    if not validation['valid']:
        print("Configuration validation errors:")
        for issue in validation['issues']:
            print(f"  - {issue}")
        return False

    return True


def run_headless_session(frames: int = 8):
    """
    Drive the gallery without a display.

    Clicks the button, drags the slider, hovers the progress bar for a few
    frames and then closes the window, logging the state after each frame.

    Returns:
        Tuple of the gallery after the session and whether its window is
        still open
    """
    from config.settings_manager import get_settings_manager
    from core.headless_context import HeadlessContext
    from core.widget_gallery import WidgetGallery

    logger = logging.getLogger(__name__)
    logger.info("Running widget gallery in headless mode")

    settings_manager = get_settings_manager()
    gallery = WidgetGallery(settings_manager.get_gallery_state())
    context = HeadlessContext()
    is_open = True

    script = {
        1: lambda: context.click("button"),
        2: lambda: context.set_value("slider", 180.0),
        3: lambda: context.hover("progress_bar"),
        5: lambda: context.unhover("progress_bar"),
        6: lambda: context.set_value("opacity", 0.5),
    }

    for frame in range(frames):
        if frame in script:
            script[frame]()
        if frame == frames - 1:
            context.close_window(gallery.name())

        def draw(ctx):
            nonlocal is_open
            is_open = gallery.show(ctx, is_open)

        record = context.run(draw)
        logger.info(f"Frame {record.frame_number}: {len(record.widgets)} widgets, "
                    f"state={json.dumps(gallery.state.to_dict())}")

        if not is_open:
            logger.info("Gallery window closed")
            break

    settings_manager.update_gallery_state(gallery.state)
    settings_manager.save_settings()
    logger.info("Headless session completed")
    return gallery, is_open


def main():
    """Main application entry point."""
    args = parse_arguments()

    logger = setup_logging(args.debug)

    if not check_dependencies(args.headless):
        sys.exit(1)

    if not load_configuration(args.config, args.reset):
        logger.error("Configuration loading failed")
        sys.exit(1)

    if args.headless:
        run_headless_session(args.frames)
        return

    from PyQt5.QtWidgets import QApplication, QMessageBox
    from gui.main_window import MainWindow
    from config.settings_manager import get_settings_manager

    app = QApplication(sys.argv)
    app.setApplicationName("Widget Gallery")
    app.setApplicationVersion("1.0")
    app.setStyle(get_settings_manager().get_gui_settings().theme)

    try:
        main_window = MainWindow()
        main_window.show()
        logger.info("Application started successfully")

    except Exception as e:
        logger.error(f"Failed to create main window: {e}")
        QMessageBox.critical(
            None,
            "Startup Error",
            f"Failed to start the application:\n{e}"
        )
        sys.exit(1)

    try:
        exit_code = app.exec_()
        logger.info("Application shutting down")
        sys.exit(exit_code)

    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        sys.exit(0)


if __name__ == "__main__":
    main()
