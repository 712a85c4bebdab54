"""
Drawing - Stateless per-layer draw routines

Each routine reads the cached layout and the resolved paint styles and
issues draw calls against a surface. None of them keep state between calls.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple

from ..core.clock_service import format_clock_text
from ..core.expression_service import Expression
from .layout import Eye, Layout
from .styles import PaintStyles
from .surface import Surface
from .theme import Theme


class EyeShapeKind(Enum):
    CIRCLE = "circle"
    WEDGE = "wedge"


@dataclass(frozen=True)
class EyeShape:
    """How one eye is drawn; wedges are closed through the eye center."""
    kind: EyeShapeKind
    start_angle: float = 0.0
    sweep_angle: float = 360.0
    use_center: bool = True


CIRCLE = EyeShape(EyeShapeKind.CIRCLE)


def wedge(start_angle: float, sweep_angle: float) -> EyeShape:
    return EyeShape(EyeShapeKind.WEDGE, start_angle, sweep_angle)


# (left eye, right eye) per expression
EYE_SHAPES: Dict[Expression, Tuple[EyeShape, EyeShape]] = {
    Expression.IDLE: (CIRCLE, CIRCLE),
    Expression.HAPPY: (wedge(180, 180), wedge(180, 180)),
    Expression.BORED: (wedge(180, -180), wedge(180, -180)),
    Expression.CONFUSED: (CIRCLE, wedge(10, 180)),
    Expression.SUSPICIOUS: (CIRCLE, wedge(180, -180)),
    Expression.SAD: (wedge(-20, 180), wedge(20, 180)),
    Expression.ANGRY: (wedge(20, 180), wedge(-20, 180)),
}


def draw_background(surface: Surface, styles: PaintStyles) -> None:
    surface.clear(styles.background)


def draw_clock_text(surface: Surface, layout: Layout, styles: PaintStyles,
                    moment: datetime, ambient: bool) -> str:
    """
    Draw the digital clock centered on the clock anchor.

    Returns:
        The text that was drawn
    """
    text = format_clock_text(moment, ambient)
    surface.draw_text(text, layout.clock_anchor.x, layout.clock_anchor.y, styles.clock)
    return text


def draw_label_block(surface: Surface, layout: Layout, styles: PaintStyles) -> float:
    """
    Draw the four label lines, then the icon below the navigation line.

    The baseline advances by the label font's line height after each line.

    Returns:
        Baseline the next line would have used
    """
    line_height = styles.label.metrics().line_height
    x = layout.label_origin.x
    y = layout.label_origin.y
    icon_center_y: Optional[float] = None

    for line in Theme.LABEL_LINES:
        style = styles.label_dimmed if line == Theme.DIMMED_LABEL else styles.label
        if line == Theme.ICON_ANCHOR_LABEL:
            icon_center_y = y + line_height
        surface.draw_text(line, x, y, style)
        y += line_height

    if icon_center_y is not None:
        surface.draw_icon(styles.icon, layout.icon_bounds(icon_center_y), styles.icon_tint)
    return y


def draw_additional_text(surface: Surface, layout: Layout, styles: PaintStyles) -> None:
    anchor = layout.additional_text_anchor
    surface.draw_text(Theme.ADDITIONAL_TEXT, anchor.x, anchor.y, styles.additional)


def draw_ambient_text(surface: Surface, layout: Layout, styles: PaintStyles) -> None:
    anchor = layout.ambient_text_anchor
    surface.draw_text(Theme.AMBIENT_TEXT, anchor.x, anchor.y, styles.ambient)


def draw_face(surface: Surface, layout: Layout, styles: PaintStyles,
              expression: Expression) -> None:
    """Head outline, then head fill colored for the expression"""
    center = layout.head_center
    outline = replace(styles.head_outline, filled=False, stroke_width=layout.head_stroke_width)
    surface.draw_circle(center.x, center.y, layout.head_radius, outline)
    surface.draw_circle(center.x, center.y, layout.head_fill_radius,
                        styles.head_fill_for(expression))


def draw_eye(surface: Surface, layout: Layout, styles: PaintStyles,
             eye: Eye, shape: EyeShape) -> None:
    if shape.kind is EyeShapeKind.CIRCLE:
        center = layout.eye_center(eye)
        surface.draw_circle(center.x, center.y, layout.eye_radius, styles.eyes)
    else:
        surface.draw_arc(layout.eye_bounds(eye), shape.start_angle, shape.sweep_angle,
                         shape.use_center, styles.eyes)


def draw_eyes(surface: Surface, layout: Layout, styles: PaintStyles,
              expression: Expression) -> None:
    left, right = EYE_SHAPES[expression]
    draw_eye(surface, layout, styles, Eye.LEFT, left)
    draw_eye(surface, layout, styles, Eye.RIGHT, right)
