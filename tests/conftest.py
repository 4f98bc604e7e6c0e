"""
Shared fixtures for the widget gallery tests.
"""

import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.headless_context import HeadlessContext
from core.widget_gallery import WidgetGallery


@pytest.fixture
def gallery():
    return WidgetGallery()


@pytest.fixture
def context():
    return HeadlessContext()


@pytest.fixture
def run_frame(gallery, context):
    """Run one frame of the gallery and return (record, still_open)."""
    def run(is_open=True):
        result = {}

        def draw(ctx):
            result['open'] = gallery.show(ctx, is_open)

        record = context.run(draw)
        return record, result['open']
    return run
