"""
Styles - Immutable paint styles resolved once at renderer construction
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ..core.expression_service import Expression
from .theme import Color, Theme


class Align(Enum):
    LEFT = "left"
    CENTER = "center"


@dataclass(frozen=True)
class FontMetrics:
    """
    Vertical font metrics relative to the baseline, y growing downwards:
    ascent is negative, descent positive.
    """
    ascent: float
    descent: float

    @property
    def line_height(self) -> float:
        return self.descent - self.ascent


@dataclass(frozen=True)
class TextStyle:
    """
    Font, color and horizontal alignment for a text draw call.

    ``font`` is any object with a Pillow-style ``getmetrics()`` returning
    positive ``(ascent, descent)``.
    """
    font: Any
    color: Color
    align: Align = Align.LEFT

    def metrics(self) -> FontMetrics:
        ascent, descent = self.font.getmetrics()
        return FontMetrics(ascent=-ascent, descent=descent)


@dataclass(frozen=True)
class ShapeStyle:
    color: Color
    filled: bool = True
    stroke_width: float = 0.0


@dataclass(frozen=True)
class PaintStyles:
    """
    Every style the renderer paints with. Head fill is looked up per
    expression instead of mutating a shared paint.
    """
    background: Color
    clock: TextStyle
    label: TextStyle
    label_dimmed: TextStyle
    additional: TextStyle
    ambient: TextStyle
    head_outline: ShapeStyle
    head_fill: ShapeStyle
    eyes: ShapeStyle
    icon: Any
    icon_tint: Color
    head_fill_overrides: Dict[Expression, ShapeStyle] = field(default_factory=dict)

    def head_fill_for(self, expression: Expression) -> ShapeStyle:
        return self.head_fill_overrides.get(expression, self.head_fill)

    @classmethod
    def from_theme(cls, clock_font: Any, label_font: Any, additional_font: Any,
                   ambient_font: Any, icon: Optional[Any] = None) -> 'PaintStyles':
        """
        Build the styles from Theme colors and already loaded fonts.

        Args:
            clock_font: Font for the digital clock
            label_font: Font for the label block
            additional_font: Font for the additional text line
            ambient_font: Font for the ambient warning line
            icon: Decorative icon handle understood by the target surface

        Returns:
            PaintStyles instance
        """
        primary = Theme.rgb(Theme.FG_PRIMARY)
        alert = Theme.rgb(Theme.ALERT)
        return cls(
            background=Theme.rgb(Theme.BACKGROUND),
            clock=TextStyle(clock_font, primary, Align.CENTER),
            label=TextStyle(label_font, primary, Align.LEFT),
            label_dimmed=TextStyle(label_font, Theme.rgb(Theme.FG_SECONDARY), Align.LEFT),
            additional=TextStyle(additional_font, primary, Align.CENTER),
            ambient=TextStyle(ambient_font, alert, Align.CENTER),
            head_outline=ShapeStyle(primary, filled=False),
            head_fill=ShapeStyle(Theme.rgb(Theme.FACE_NORMAL)),
            eyes=ShapeStyle(primary),
            icon=icon,
            icon_tint=primary,
            head_fill_overrides={Expression.ANGRY: ShapeStyle(alert)},
        )
