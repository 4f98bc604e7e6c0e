"""
Core modules for the widget gallery: state, colors, the immediate-mode
frame contract and the gallery panel itself.
"""

from .color import Color32
from .gallery_state import GalleryState
from .frame_context import FrameContext, Response, Ui, Window
from .headless_context import HeadlessContext, FrameRecord, WidgetRecord
from .widget_gallery import WidgetGallery

__all__ = [
    'Color32',
    'GalleryState',
    'FrameContext',
    'Response',
    'Ui',
    'Window',
    'HeadlessContext',
    'FrameRecord',
    'WidgetRecord',
    'WidgetGallery'
]
