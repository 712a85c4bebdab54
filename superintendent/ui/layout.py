"""
Layout - Screen-space anchors and sizes for the watch face

Every position and size derives from the surface size and two base units:
the head radius and the icon width.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..core.logging_service import LoggingService, get_logger


HEAD_STROKE_RATIO = 0.125
HEAD_FILL_RATIO = 0.975
EYE_OFFSET_RATIO = 0.43589744
EYE_RADIUS_RATIO = 0.3
ICON_ASPECT_RATIO = 1.408

# Gap between the bottom of the head and the additional text baseline
ADDITIONAL_TEXT_GAP = 30.0


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in screen coordinates (y grows downwards)."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Point:
        return Point((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.left, self.top, self.right, self.bottom)


class Eye(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Layout:
    """
    Derived geometry for one surface size.
    """
    width: int
    height: int

    center: Point
    clock_anchor: Point
    label_origin: Point
    additional_text_anchor: Point
    ambient_text_anchor: Point

    head_center: Point
    head_radius: float
    head_stroke_width: float
    head_fill_radius: float

    eye_offset: float
    eye_radius: float
    left_eye_center: Point
    right_eye_center: Point

    icon_center_x: float
    icon_width: float
    icon_height: int

    def eye_center(self, eye: Eye) -> Point:
        return self.left_eye_center if eye is Eye.LEFT else self.right_eye_center

    def eye_bounds(self, eye: Eye) -> Rect:
        """
        Bounding square of an eye, used as the envelope for arc drawing.

        Args:
            eye: Which eye

        Returns:
            Rect of half-size eye_radius around the eye center
        """
        c = self.eye_center(eye)
        r = self.eye_radius
        return Rect(c.x - r, c.y - r, c.x + r, c.y + r)

    def icon_bounds(self, center_y: float) -> Rect:
        """
        Integer pixel bounds of the decorative icon.

        The vertical center depends on label font metrics, so it is
        supplied by the label block drawer.
        """
        half_w = self.icon_width / 2
        half_h = self.icon_height / 2
        return Rect(
            int(self.icon_center_x - half_w),
            int(center_y - half_h),
            int(self.icon_center_x + half_w),
            int(center_y + half_h),
        )

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


def compute_layout(width: int, height: int, head_radius: float, icon_width: float) -> Layout:
    """
    Compute every anchor for a surface.

    Args:
        width: Surface width in pixels
        height: Surface height in pixels
        head_radius: Outer radius of the face outline in pixels
        icon_width: Width of the decorative icon in pixels

    Returns:
        Layout for this surface size

    Raises:
        ValueError: If width or height is not positive
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Surface size must be positive, got {width}x{height}")

    center = Point(width / 2, height / 2)
    head_center = Point(width / 2, height * 5 / 7)

    head_fill_radius = head_radius * HEAD_FILL_RATIO
    eye_offset = head_fill_radius * EYE_OFFSET_RATIO

    return Layout(
        width=width,
        height=height,
        center=center,
        clock_anchor=center,
        label_origin=Point(width / 4, height / 6),
        additional_text_anchor=Point(head_center.x, head_center.y + head_radius + ADDITIONAL_TEXT_GAP),
        ambient_text_anchor=Point(width / 2, height / 5),
        head_center=head_center,
        head_radius=head_radius,
        head_stroke_width=head_radius * HEAD_STROKE_RATIO,
        head_fill_radius=head_fill_radius,
        eye_offset=eye_offset,
        eye_radius=head_radius * EYE_RADIUS_RATIO,
        left_eye_center=Point(head_center.x - eye_offset, head_center.y),
        right_eye_center=Point(head_center.x + eye_offset, head_center.y),
        icon_center_x=width * 2 / 3,
        icon_width=icon_width,
        icon_height=int(icon_width * ICON_ASPECT_RATIO),
    )


class LayoutCache:
    """
    Keeps the layout for the current surface size and recomputes it only
    when the size changes.
    """

    def __init__(self, head_radius: float, icon_width: float,
                 logger: Optional[LoggingService] = None):
        self._head_radius = head_radius
        self._icon_width = icon_width
        self._layout: Optional[Layout] = None
        self._logger = logger or get_logger()

    def get(self, width: int, height: int) -> Layout:
        """
        Layout for a surface size, computing it on first use or resize.

        Args:
            width: Surface width in pixels
            height: Surface height in pixels

        Returns:
            Cached or freshly computed Layout
        """
        if self._layout is None or self._layout.size != (width, height):
            self._layout = compute_layout(width, height, self._head_radius, self._icon_width)
            self._logger.debug(f"Layout computed for {width}x{height}")
        return self._layout

    def invalidate(self) -> None:
        self._layout = None

    @property
    def layout(self) -> Optional[Layout]:
        return self._layout
