"""
Surface - Drawing targets for the face renderer

The renderer only talks to the Surface protocol. PillowSurface paints into a
PIL image; RecordingSurface keeps the call sequence for inspection.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Tuple

from PIL import Image, ImageDraw

from .layout import Rect
from .styles import Align, ShapeStyle, TextStyle
from .theme import Color


class Surface(Protocol):
    """
    Minimal 2D canvas. Angles are in degrees, 0 pointing along +X and
    positive sweeps turning clockwise on screen.
    """

    def clear(self, color: Color) -> None: ...

    def draw_text(self, text: str, x: float, y: float, style: TextStyle) -> None: ...

    def draw_circle(self, cx: float, cy: float, radius: float, style: ShapeStyle) -> None: ...

    def draw_arc(self, bounds: Rect, start_angle: float, sweep_angle: float,
                 use_center: bool, style: ShapeStyle) -> None: ...

    def draw_icon(self, icon: Any, bounds: Rect, tint: Color) -> None: ...


class PillowSurface:
    """
    Surface backed by a PIL image. Text y coordinates are baselines.
    """

    def __init__(self, image: Image.Image):
        self._image = image
        self._draw = ImageDraw.Draw(image)

    @classmethod
    def new(cls, width: int, height: int, mode: str = 'RGB') -> 'PillowSurface':
        return cls(Image.new(mode, (width, height)))

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    def clear(self, color: Color) -> None:
        """Fill the surface; a translucent RGBA color is composited on top"""
        width, height = self._image.size
        if len(color) == 4 and color[3] < 255:
            overlay = Image.new('RGBA', (width, height), tuple(color))
            composed = Image.alpha_composite(self._image.convert('RGBA'), overlay)
            self._image.paste(composed.convert(self._image.mode))
        else:
            self._draw.rectangle((0, 0, width, height), fill=tuple(color[:3]))

    def draw_text(self, text: str, x: float, y: float, style: TextStyle) -> None:
        anchor = 'ms' if style.align is Align.CENTER else 'ls'
        self._draw.text((x, y), text, font=style.font, fill=style.color, anchor=anchor)

    def draw_circle(self, cx: float, cy: float, radius: float, style: ShapeStyle) -> None:
        if style.filled:
            self._draw.ellipse(_square(cx, cy, radius), fill=style.color)
            return
        # PIL strokes inwards from the box edge; grow the box so the stroke
        # straddles the radius
        outer = radius + style.stroke_width / 2
        self._draw.ellipse(_square(cx, cy, outer), outline=style.color,
                           width=_stroke(style.stroke_width))

    def draw_arc(self, bounds: Rect, start_angle: float, sweep_angle: float,
                 use_center: bool, style: ShapeStyle) -> None:
        if sweep_angle < 0:
            start_angle, sweep_angle = start_angle + sweep_angle, -sweep_angle
        start = start_angle % 360
        end = start + sweep_angle
        box = bounds.as_tuple()

        if not use_center:
            self._draw.arc(box, start, end, fill=style.color, width=_stroke(style.stroke_width))
        elif style.filled:
            self._draw.pieslice(box, start, end, fill=style.color)
        else:
            self._draw.pieslice(box, start, end, outline=style.color,
                                width=_stroke(style.stroke_width))

    def draw_icon(self, icon: Any, bounds: Rect, tint: Color) -> None:
        """Paint the icon's alpha mask in the tint color, scaled into bounds"""
        if icon is None:
            return
        size = (int(bounds.width), int(bounds.height))
        if size[0] <= 0 or size[1] <= 0:
            return
        mask = icon.convert('RGBA').resize(size, Image.Resampling.LANCZOS).getchannel('A')
        solid = Image.new(self._image.mode, size, tuple(tint[:3]))
        self._image.paste(solid, (int(bounds.left), int(bounds.top)), mask)


def _square(cx: float, cy: float, radius: float) -> Tuple[float, float, float, float]:
    return (cx - radius, cy - radius, cx + radius, cy + radius)


def _stroke(width: float) -> int:
    return max(1, int(round(width)))


@dataclass(frozen=True)
class DrawCommand:
    op: str
    params: Dict[str, Any] = field(default_factory=dict)


class RecordingSurface:
    """
    Surface that records every call instead of painting.
    """

    def __init__(self):
        self.commands: List[DrawCommand] = []

    def clear(self, color: Color) -> None:
        self.commands.append(DrawCommand('clear', {'color': color}))

    def draw_text(self, text: str, x: float, y: float, style: TextStyle) -> None:
        self.commands.append(DrawCommand('text', {
            'text': text, 'x': x, 'y': y, 'color': style.color, 'align': style.align,
        }))

    def draw_circle(self, cx: float, cy: float, radius: float, style: ShapeStyle) -> None:
        self.commands.append(DrawCommand('circle', {
            'cx': cx, 'cy': cy, 'radius': radius, 'color': style.color,
            'filled': style.filled, 'stroke_width': style.stroke_width,
        }))

    def draw_arc(self, bounds: Rect, start_angle: float, sweep_angle: float,
                 use_center: bool, style: ShapeStyle) -> None:
        self.commands.append(DrawCommand('arc', {
            'bounds': bounds, 'start': start_angle, 'sweep': sweep_angle,
            'use_center': use_center, 'color': style.color,
        }))

    def draw_icon(self, icon: Any, bounds: Rect, tint: Color) -> None:
        self.commands.append(DrawCommand('icon', {'icon': icon, 'bounds': bounds, 'tint': tint}))

    def ops(self) -> List[str]:
        return [c.op for c in self.commands]

    def texts(self) -> List[str]:
        return [c.params['text'] for c in self.commands if c.op == 'text']

    def of(self, op: str) -> List[DrawCommand]:
        return [c for c in self.commands if c.op == op]

    def reset(self) -> None:
        self.commands.clear()
