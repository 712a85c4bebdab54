"""
Shared fixtures for the watch face test suite.
"""
from datetime import datetime, timezone

import pytest

from superintendent.ui.layout import Rect
from superintendent.ui.renderer import FaceRenderer
from superintendent.ui.styles import PaintStyles
from superintendent.ui.surface import RecordingSurface


WIDTH = 454
HEIGHT = 454
HEAD_RADIUS = 70.0
ICON_WIDTH = 40.0


class StubFont:
    """Font stand-in exposing Pillow-style metrics."""

    def __init__(self, ascent=15, descent=5):
        self.ascent = ascent
        self.descent = descent

    def getmetrics(self):
        return (self.ascent, self.descent)


ICON = object()


def make_styles(label_font=None) -> PaintStyles:
    return PaintStyles.from_theme(
        clock_font=StubFont(40, 10),
        label_font=label_font or StubFont(),
        additional_font=StubFont(12, 4),
        ambient_font=StubFont(15, 5),
        icon=ICON,
    )


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------

@pytest.fixture
def morning():
    """09:05:03 UTC"""
    return datetime(2024, 3, 1, 9, 5, 3, tzinfo=timezone.utc)


@pytest.fixture
def afternoon():
    """14:00:00 UTC"""
    return datetime(2024, 3, 1, 14, 0, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

@pytest.fixture
def styles():
    return make_styles()


@pytest.fixture
def renderer(styles):
    return FaceRenderer(styles, head_radius=HEAD_RADIUS, icon_width=ICON_WIDTH)


@pytest.fixture
def bounds():
    return Rect(0, 0, WIDTH, HEIGHT)


@pytest.fixture
def surface():
    return RecordingSurface()
